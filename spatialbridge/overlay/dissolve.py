# -*- coding: utf-8 -*-
"""Dissolve operations: merge polygons that share boundary segments, optionally only within groups of equal value.

Two polygons are adjacent when their boundaries share a segment of non-zero length or when their interiors overlap.
Touching at a single point does not make them adjacent. Groups of polygons connected through adjacency are found
with a breadth-first walk over the adjacency graph and unioned into one geometry per group.
"""

import logging

import geopandas as gpd
from shapely import STRtree
from shapely.geometry import MultiPolygon
from shapely.ops import unary_union

from ..core.exceptions import SchemaError
from ..core.table import FeatureTable
from ..utils.helpers import extract_kind, iter_parts

log = logging.getLogger(__name__)


def _require_polygons(table, operation):
    kind = table.base_kind
    if kind not in ("polygon", None):
        raise SchemaError(f"{operation} needs polygons, got {kind}")


def _adjacent(first, second):
    """Check boundary-segment adjacency or interior overlap using the DE-9IM matrix."""
    relation = first.relate(second)
    return relation[0] == "2" or relation[4] == "1"


def _find_neighbors(geoms):
    """Map each geometry position to the positions of its adjacent geometries.

    Candidate pairs come from a bounding-box query on an STRtree; only candidates are tested for adjacency.
    """
    neighbors = {idx: [] for idx in range(len(geoms))}
    tree = STRtree(geoms)
    left, right = tree.query(geoms, predicate="intersects")
    for i, j in zip(left.tolist(), right.tolist()):
        if i < j and _adjacent(geoms[i], geoms[j]):
            neighbors[i].append(j)
            neighbors[j].append(i)
    return neighbors


def connected_groups(geoms):
    """Split polygons into groups connected through adjacency.

    Parameters:
    -----------
    geoms : list of shapely geometries
        Polygons; missing or empty geometries belong to no group

    Returns:
    --------
    groups : list of list of int
        Positions of the members of every group, groups ordered by their first member
    """
    neighbors = _find_neighbors(geoms)
    visited = set()
    groups = []

    for start in range(len(geoms)):
        if start in visited or geoms[start] is None or geoms[start].is_empty:
            continue

        group_ids = [start]
        queue = [start]
        visited.add(start)

        while queue:
            current_id = queue.pop()
            for n_id in neighbors[current_id]:
                if n_id not in visited:
                    visited.add(n_id)
                    group_ids.append(n_id)
                    queue.append(n_id)

        groups.append(sorted(group_ids))

    return groups


def _merge(geoms, group):
    return extract_kind(unary_union([geoms[idx] for idx in group]), "polygon")


def dissolve_by_contiguity(table, name=None):
    """Merge every set of polygons connected through shared boundaries.

    Parameters:
    -----------
    table : FeatureTable
        Table of polygons
    name : str, optional
        Name for the result table

    Returns:
    --------
    result : FeatureTable
        One row per connected group, without attributes, in order of each group's first input row
    """
    _require_polygons(table, "Dissolve")

    geoms = table.geometries
    groups = connected_groups(geoms)
    merged = [_merge(geoms, group) for group in groups]
    log.info("Dissolved %d polygons into %d regions", len(table), len(merged))

    gdf = gpd.GeoDataFrame(geometry=merged, crs=table.crs)
    return FeatureTable(gdf, name=name if name else table.name)


def dissolve_by_attribute(table, by, aggregations=None, name=None):
    """Merge adjacent polygons that share the same value of one attribute.

    Polygons with different values never merge, even when adjacent. Inside one value, every connected group is
    unioned; groups that are not connected become parts of one multi-polygon, so there is exactly one output row
    per value.

    Parameters:
    -----------
    table : FeatureTable
        Table of polygons
    by : str
        Grouping attribute
    aggregations : dict, optional
        Maps other attribute names to a reducer, either a pandas aggregation name ("median", "sum", ...) or a
        callable receiving the group's values. Attributes without a reducer are dropped.
    name : str, optional
        Name for the result table

    Returns:
    --------
    result : FeatureTable
        One row per distinct value of ``by`` (missing values form their own group), in first-seen order
    """
    _require_polygons(table, "Dissolve")
    aggregations = dict(aggregations) if aggregations else {}

    if by not in table.columns:
        raise SchemaError(f"Grouping column '{by}' not found in table")
    missing = [col for col in aggregations if col not in table.columns or col == by]
    if missing:
        raise SchemaError(f"Cannot aggregate columns {missing}")

    gdf = table.to_geodataframe()
    new_rows = []
    geometries = []

    for value, group in gdf.groupby(by, sort=False, dropna=False):
        geoms = list(group.geometry)
        parts = []
        for members in connected_groups(geoms):
            parts.extend(iter_parts(_merge(geoms, members)))

        row_data = {by: value}
        for col, reducer in aggregations.items():
            row_data[col] = reducer(group[col]) if callable(reducer) else group[col].agg(reducer)

        new_rows.append(row_data)
        geometries.append(parts[0] if len(parts) == 1 else MultiPolygon(parts) if parts else None)

    log.info("Dissolved %d polygons by '%s' into %d regions", len(table), by, len(new_rows))

    columns = [by, *aggregations]
    result = gpd.GeoDataFrame(new_rows, columns=columns, geometry=geometries, crs=table.crs)
    return FeatureTable(result, name=name if name else table.name)
