# -*- coding: utf-8 -*-
"""Geometry-based filters."""

from ..core.table import FeatureTable
from ..stats.spatial import area


def select_by_area(table, min_area=None, max_area=None, name=None):
    """Select polygons by planar area.

    Parameters:
    -----------
    table : FeatureTable
        Table of polygons in a projected CRS
    min_area : float, optional
        Minimum area threshold (inclusive)
    max_area : float, optional
        Maximum area threshold (inclusive)
    name : str, optional
        Name for the result table

    Returns:
    --------
    result : FeatureTable
        Rows within the thresholds, in their original order
    """
    areas = area(table)
    mask = areas.notna()

    if min_area is not None:
        mask &= areas >= min_area

    if max_area is not None:
        mask &= areas <= max_area

    return FeatureTable(table.to_geodataframe()[mask.to_numpy()], name=name if name else table.name)
