# -*- coding: utf-8 -*-
"""Overlay operations computing new geometry from two feature tables: intersect and union.

Both operations refuse inputs in different coordinate reference systems; reprojection is left to the caller.
Attribute names present in both inputs are suffixed with the name of the table they come from.

Intersect depends on argument order when a polygon table meets a line or point table:

- line/point table first: the lines (points) are clipped to the polygons, the result holds lines (points).
- polygon table first: the result holds the polygons themselves, one row for every line sharing at least one
  segment with the polygon (every point the polygon covers).

Polygon x polygon gives the same geometries in either order.
"""

import logging

import geopandas as gpd
import pandas as pd
from shapely import STRtree

from ..config import AREA_TOLERANCE, LENGTH_TOLERANCE
from ..core.exceptions import SchemaError
from ..core.table import FeatureTable, attributes_only
from ..utils.helpers import collision_suffixes, extract_kind, require_same_crs

log = logging.getLogger(__name__)

SUPPORTED_INTERSECTIONS = {
    ("polygon", "polygon"),
    ("polygon", "line"),
    ("line", "polygon"),
    ("polygon", "point"),
    ("point", "polygon"),
}


def _suffixed_attributes(first, second, names):
    """Attribute frames of both tables with colliding names suffixed by table identity."""
    first_name, second_name = names if names else (first.name, second.name)
    first_suffix, second_suffix = collision_suffixes(first_name, second_name)
    shared = set(first.columns) & set(second.columns)

    first_attrs = attributes_only(first).rename(columns={col: f"{col}_{first_suffix}" for col in shared})
    second_attrs = attributes_only(second).rename(columns={col: f"{col}_{second_suffix}" for col in shared})

    columns = list(first_attrs.columns) + list(second_attrs.columns)
    clashes = sorted({col for col in columns if columns.count(col) > 1})
    if clashes:
        raise SchemaError(f"Suffixing shared attributes produces duplicate columns {clashes}; rename them first")
    return first_attrs, second_attrs


def _piece(first_geom, second_geom, kinds):
    """Geometry emitted for one candidate pair, or None when the pair does not produce a row."""
    if kinds == ("polygon", "polygon"):
        piece = extract_kind(first_geom.intersection(second_geom), "polygon")
        return piece if piece is not None and piece.area > AREA_TOLERANCE else None

    if kinds == ("line", "polygon"):
        piece = extract_kind(first_geom.intersection(second_geom), "line")
        return piece if piece is not None and piece.length > LENGTH_TOLERANCE else None

    if kinds == ("polygon", "line"):
        shared = extract_kind(first_geom.intersection(second_geom), "line")
        return first_geom if shared is not None and shared.length > LENGTH_TOLERANCE else None

    if kinds == ("point", "polygon"):
        return extract_kind(first_geom.intersection(second_geom), "point")

    # polygon, point
    return first_geom if first_geom.intersects(second_geom) else None


def intersect(first, second, names=None, name=None):
    """Intersect every pair of features whose bounding boxes overlap.

    Parameters:
    -----------
    first : FeatureTable
        First input; its kind decides the output kind when mixing polygons with lines or points
    second : FeatureTable
        Second input
    names : tuple of str, optional
        Identities used to suffix colliding attribute names. Defaults to the tables' names, then to ("1", "2").
    name : str, optional
        Name for the result table

    Returns:
    --------
    result : FeatureTable
        One row per non-empty pair result, combining the attributes of both rows, ordered by first then second row
    """
    require_same_crs(first.crs, second.crs)
    first_attrs, second_attrs = _suffixed_attributes(first, second, names)

    kinds = (first.base_kind, second.base_kind)
    if None not in kinds and kinds not in SUPPORTED_INTERSECTIONS:
        raise SchemaError(f"Cannot intersect {kinds[0]} with {kinds[1]}")

    first_geoms = first.geometries
    second_geoms = second.geometries
    pairs = []
    geometries = []

    if None not in kinds:
        tree = STRtree(second_geoms)
        for i, geom in enumerate(first_geoms):
            if geom is None or geom.is_empty:
                continue
            for j in sorted(tree.query(geom).tolist()):
                piece = _piece(geom, second_geoms[j], kinds)
                if piece is not None:
                    pairs.append((i, j))
                    geometries.append(piece)

    log.info("Intersected %d x %d features into %d rows", len(first), len(second), len(pairs))

    first_rows = [i for i, _j in pairs]
    second_rows = [j for _i, j in pairs]
    attrs = pd.concat(
        [
            first_attrs.iloc[first_rows].reset_index(drop=True),
            second_attrs.iloc[second_rows].reset_index(drop=True),
        ],
        axis=1,
    )
    return FeatureTable(gpd.GeoDataFrame(attrs, geometry=geometries, crs=first.crs), name=name)


def union(first, second, names=None, name=None):
    """Union two polygon tables into non-overlapping pieces labelled by the polygons covering them.

    Pieces covered only by the first table keep its attributes with the second table's columns missing, and vice
    versa; pieces covered by both carry the attributes of both rows.

    Parameters:
    -----------
    first, second : FeatureTable
        Tables of polygons in the same CRS
    names : tuple of str, optional
        Identities used to suffix colliding attribute names
    name : str, optional
        Name for the result table

    Returns:
    --------
    result : FeatureTable
        Overlap pieces first, then pieces of the first table only, then of the second table only
    """
    require_same_crs(first.crs, second.crs)
    for table in (first, second):
        if table.base_kind not in ("polygon", None):
            raise SchemaError(f"Union needs polygons, got {table.base_kind}")

    first_attrs, second_attrs = _suffixed_attributes(first, second, names)
    first_gdf = gpd.GeoDataFrame(first_attrs, geometry=first.geometries, crs=first.crs)
    second_gdf = gpd.GeoDataFrame(second_attrs, geometry=second.geometries, crs=second.crs)

    result = first_gdf.overlay(second_gdf, how="union", keep_geom_type=True)
    log.info("Union of %d and %d polygons produced %d pieces", len(first), len(second), len(result))

    return FeatureTable(result, name=name)
