# -*- coding: utf-8 -*-
"""Geocoding of address strings through an external service.

Geocoding is best effort: some addresses never match and single lookups can fail on the network. Both outcomes are
recorded in the result instead of aborting the whole batch, so callers always deal with partial results.
"""

import logging

import pandas as pd

from ..core.table import from_dataframe

log = logging.getLogger(__name__)


class GeocodeResult:
    """Outcome of a geocoding batch: a point table of matches and the addresses without a match."""

    def __init__(self, table, unmatched):
        self.table = table
        self.unmatched = list(unmatched)

    @property
    def complete(self):
        return not self.unmatched

    def __str__(self):
        """String representation of the result."""
        return f"GeocodeResult (matched: {len(self.table)}, unmatched: {len(self.unmatched)})"


def _coordinates(location):
    """Turn a service answer into (x, y); accepts tuples and objects with longitude/latitude."""
    if location is None:
        return None
    if hasattr(location, "longitude") and hasattr(location, "latitude"):
        return float(location.longitude), float(location.latitude)
    x, y = location
    return float(x), float(y)


def geocode(addresses, service, crs="EPSG:4326", name=None):
    """Geocode addresses into a point table.

    Parameters:
    -----------
    addresses : iterable of str
        Addresses to look up
    service : callable or object with a ``geocode`` method
        Returns (x, y), an object with longitude/latitude, or None when the address has no match
    crs : any pyproj-compatible CRS input
        CRS of the coordinates the service returns
    name : str, optional
        Name of the result table

    Returns:
    --------
    result : GeocodeResult
        Matched addresses as points (attribute "address"), plus the unmatched addresses in input order
    """
    lookup = service.geocode if hasattr(service, "geocode") else service
    matched = []
    unmatched = []

    for address in addresses:
        try:
            coordinates = _coordinates(lookup(address))
        except Exception as exc:
            log.warning("Geocoding '%s' failed: %s", address, exc)
            coordinates = None

        if coordinates is None:
            unmatched.append(address)
        else:
            matched.append({"address": address, "x": coordinates[0], "y": coordinates[1]})

    log.info("Geocoded %d addresses, %d without a match", len(matched), len(unmatched))

    frame = pd.DataFrame(matched, columns=["address", "x", "y"]).astype({"x": float, "y": float})
    table = from_dataframe(frame, ("x", "y"), crs=crs, name=name)
    return GeocodeResult(table, unmatched)
