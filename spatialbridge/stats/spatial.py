# -*- coding: utf-8 -*-
"""Spatial measurements for feature tables."""

import pandas as pd

from ..core.exceptions import SchemaError
from ..utils.helpers import require_planar


def area(table):
    """Planar area of every polygon row, in the CRS units squared.

    Holes are subtracted from their outer ring. A missing geometry has area 0.

    Parameters:
    -----------
    table : FeatureTable
        Table of polygons in a projected CRS

    Returns:
    --------
    areas : pandas.Series
        One float per row, named "area", in row order
    """
    require_planar(table.crs, "Area")
    if table.base_kind not in ("polygon", None):
        raise SchemaError(f"Area is defined for polygons, got {table.base_kind}")

    areas = [geom.area if geom is not None else 0.0 for geom in table.geometries]
    return pd.Series(areas, dtype=float, name="area")


def with_area(table, column="area"):
    """Return the table with each row's planar area attached as ``column``."""
    return table.with_column(column, area(table).tolist())


def attach_area_stats(table, by_class=None):
    """Summarise polygon areas, overall or per value of a class column.

    Parameters:
    -----------
    table : FeatureTable
        Table of polygons in a projected CRS
    by_class : str, optional
        Column to group by

    Returns:
    --------
    stats : dict
        Total area plus either per-class areas and percentages or min/max/mean/median
    """
    areas = area(table)
    total_area = float(areas.sum())

    if by_class:
        if by_class not in table.columns:
            raise SchemaError(f"Column '{by_class}' not found in table")
        classes = table.to_geodataframe()[by_class].reset_index(drop=True)
        class_areas = areas.groupby(classes, sort=False).sum()
        return {
            "total_area": total_area,
            "class_areas": {key: float(value) for key, value in class_areas.items()},
            "class_percentages": {
                key: round(float(value) / total_area * 100, 2) if total_area else 0.0
                for key, value in class_areas.items()
            },
        }

    return {
        "total_area": total_area,
        "min_area": float(areas.min()) if len(areas) else 0.0,
        "max_area": float(areas.max()) if len(areas) else 0.0,
        "mean_area": float(areas.mean()) if len(areas) else 0.0,
        "median_area": float(areas.median()) if len(areas) else 0.0,
    }
