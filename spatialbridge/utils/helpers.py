# -*- coding: utf-8 -*-
"""Helpers shared by the conversion and overlay modules: CRS checks, geometry kinds and parts."""

from pyproj import CRS
from shapely.geometry import MultiLineString, MultiPoint, MultiPolygon

from ..config import DEFAULT_SUFFIXES, GEOMETRY_KINDS
from ..core.exceptions import CRSMismatchError, SchemaError, UnprojectedCRSError

_MULTI_BY_KIND = {
    "point": MultiPoint,
    "line": MultiLineString,
    "polygon": MultiPolygon,
}

_SINGLE_BY_KIND = {
    "point": "Point",
    "line": "LineString",
    "polygon": "Polygon",
}


def geometry_kind(geom):
    """Return the base kind ("point", "line" or "polygon") of a geometry.

    Parameters:
    -----------
    geom : shapely.geometry.base.BaseGeometry
        Geometry to classify

    Returns:
    --------
    kind : str
        Base kind of the geometry
    """
    kind = GEOMETRY_KINDS.get(geom.geom_type)
    if kind is None:
        raise SchemaError(f"Unsupported geometry type: {geom.geom_type}")
    return kind


def base_kind(geometries):
    """Return the single base kind shared by all non-null geometries, or None when there are none."""
    kinds = {geometry_kind(geom) for geom in geometries if geom is not None}
    if len(kinds) > 1:
        raise SchemaError(f"Mixed geometry kinds in one table: {sorted(kinds)}")
    return kinds.pop() if kinds else None


def as_crs(crs):
    """Normalise any CRS input (EPSG code, string, WKT, pyproj.CRS) to a pyproj.CRS or None."""
    if crs is None:
        return None
    return CRS.from_user_input(crs)


def is_geographic(crs):
    """Check whether a CRS uses angular units.

    A missing CRS is treated as local planar coordinates.
    """
    crs = as_crs(crs)
    return crs is not None and crs.is_geographic


def require_planar(crs, operation):
    """Raise UnprojectedCRSError when ``crs`` is geographic."""
    if is_geographic(crs):
        raise UnprojectedCRSError(
            f"{operation} needs a projected CRS, got geographic '{as_crs(crs).name}'; reproject the input first"
        )


def same_crs(first, second):
    """Compare two CRS inputs; two missing CRS are equal, one missing and one set are not."""
    first, second = as_crs(first), as_crs(second)
    if first is None or second is None:
        return first is None and second is None
    return first == second


def require_same_crs(first, second):
    """Raise CRSMismatchError unless both CRS are equal."""
    if not same_crs(first, second):
        first_name = as_crs(first).name if first is not None else None
        second_name = as_crs(second).name if second is not None else None
        raise CRSMismatchError(f"Inputs carry different CRS: '{first_name}' and '{second_name}'")


def collision_suffixes(first_name, second_name):
    """Return the suffixes appended to attribute names present in both tables of an overlay."""
    if first_name and second_name and first_name != second_name:
        return str(first_name), str(second_name)
    return DEFAULT_SUFFIXES


def iter_parts(geom):
    """Yield the single-part geometries nested in ``geom``, skipping empty ones."""
    if geom is None or geom.is_empty:
        return
    if hasattr(geom, "geoms"):
        for part in geom.geoms:
            yield from iter_parts(part)
    else:
        yield geom


def extract_kind(geom, kind):
    """Keep only the parts of ``geom`` of the given base kind.

    Parameters:
    -----------
    geom : shapely.geometry.base.BaseGeometry
        Geometry, possibly a collection, returned by a set operation
    kind : str
        "point", "line" or "polygon"

    Returns:
    --------
    geometry : shapely geometry or None
        Single-part geometry if one part remains, multi-part if several, None if none
    """
    single = _SINGLE_BY_KIND[kind]
    parts = [part for part in iter_parts(geom) if part.geom_type == single]
    if not parts:
        return None
    if len(parts) == 1:
        return parts[0]
    return _MULTI_BY_KIND[kind](parts)
