# -*- coding: utf-8 -*-
"""Shared fixtures: small feature tables built in memory and a GeoTIFF written to a temporary directory."""

import geopandas as gpd
import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin
from shapely.geometry import LineString, Point, box

from spatialbridge import FeatureTable

PROJECTED = "EPSG:32633"
GEOGRAPHIC = "EPSG:4326"
NODATA = -9999.0


@pytest.fixture
def squares():
    """Five unit squares: A-B-C chained by shared edges, D isolated, E touching C at one corner only."""
    geometries = [
        box(0, 0, 1, 1),  # A
        box(1, 0, 2, 1),  # B
        box(1, 1, 2, 2),  # C
        box(5, 5, 6, 6),  # D
        box(2, 2, 3, 3),  # E
    ]
    gdf = gpd.GeoDataFrame(
        {
            "region": ["north", "north", "south", "north", "south"],
            "Income": [10.0, 20.0, 30.0, 40.0, 50.0],
        },
        geometry=geometries,
        crs=PROJECTED,
    )
    return FeatureTable(gdf, name="squares")


@pytest.fixture
def zones():
    """Two 2x2 polygons side by side."""
    gdf = gpd.GeoDataFrame(
        {"name": ["a1", "a2"], "zone_id": [1, 2]},
        geometry=[box(0, 0, 2, 2), box(2, 0, 4, 2)],
        crs=PROJECTED,
    )
    return FeatureTable(gdf, name="zones")


@pytest.fixture
def plots():
    """One 2x2 polygon overlapping both zones."""
    gdf = gpd.GeoDataFrame({"name": ["b1"], "owner": ["city"]}, geometry=[box(1, 1, 3, 3)], crs=PROJECTED)
    return FeatureTable(gdf, name="plots")


@pytest.fixture
def roads():
    """A road crossing both zones and a road touching zone a2 at a single corner."""
    gdf = gpd.GeoDataFrame(
        {"road": ["main", "corner"]},
        geometry=[LineString([(-1, 1), (5, 1)]), LineString([(3, -1), (5, 1)])],
        crs=PROJECTED,
    )
    return FeatureTable(gdf, name="roads")


@pytest.fixture
def wells():
    """Points inside zone a1, inside zone a2 and outside both."""
    gdf = gpd.GeoDataFrame(
        {"depth": [12.5, 30.0, 7.0]},
        geometry=[Point(1, 1), Point(3, 1), Point(10, 10)],
        crs=PROJECTED,
    )
    return FeatureTable(gdf, name="wells")


@pytest.fixture
def cells():
    return np.array([[1.0, 2.0, 3.0], [4.0, NODATA, 6.0]], dtype="float32")


@pytest.fixture
def raster_path(tmp_path, cells):
    """A 2x3 single band GeoTIFF with one nodata cell."""
    path = tmp_path / "grid.tif"
    with rasterio.open(
        path,
        "w",
        driver="GTiff",
        height=cells.shape[0],
        width=cells.shape[1],
        count=1,
        dtype=cells.dtype,
        crs=PROJECTED,
        transform=from_origin(500000.0, 4000020.0, 10.0, 10.0),
        nodata=NODATA,
    ) as dst:
        dst.write(cells, 1)
    return path
