# -*- coding: utf-8 -*-
"""Test suite for the spatialbridge workflow.

This suite runs a full session of the library: reading and writing vector and raster data, converting between
representations, filtering attributes, dissolving and overlaying tables, and exporting results.
It also includes checks for the generated outputs and their validity.
"""

import json
import os
import shutil

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import LineString, box

from spatialbridge import (
    CRSService,
    FeatureTable,
    RasterIO,
    Representation,
    VectorIO,
    attach_area_stats,
    bbox,
    convert,
    dissolve_by_attribute,
    dissolve_by_contiguity,
    from_dataframe,
    intersect,
    materialize,
    setup_logging,
    subset,
    union,
    with_area,
)


@pytest.fixture(autouse=True)
def clean_output():
    """Fixture to clean up the output directory before and after tests."""
    output_dir = "output"
    if os.path.exists(output_dir):
        shutil.rmtree(output_dir)
    yield
    if os.path.exists(output_dir):
        shutil.rmtree(output_dir)


def check_geojson_features(filepath):
    """Check if the GeoJSON file contains features."""
    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)
    assert data.get("type") == "FeatureCollection", "Invalid GeoJSON: wrong type."
    features = data.get("features")
    assert isinstance(features, list), "GeoJSON features is not a list."
    assert len(features) > 0, f"No features found in {filepath}."


def test_full_workflow(squares, raster_path):
    """Test the full workflow of reading, converting, filtering, overlaying and exporting."""
    setup_logging(level="INFO")
    output_dir = "output"
    vector_io = VectorIO()
    raster_io = RasterIO()

    # Step 1: Store the parcels in a GeoPackage next to a road layer and read them back.
    roads = FeatureTable(
        gpd.GeoDataFrame({"road": ["ring"]}, geometry=[LineString([(-1, 0.5), (7, 0.5)])], crs=squares.crs),
        name="roads",
    )
    gpkg_path = os.path.join(output_dir, "site.gpkg")
    vector_io.write(squares, gpkg_path, layer="parcels")
    vector_io.write(roads, gpkg_path, layer="roads")
    assert sorted(vector_io.list_layers(gpkg_path)) == ["parcels", "roads"]
    parcels = vector_io.read(gpkg_path, layer="parcels")
    assert len(parcels) == len(squares), "Parcels were not read back completely."

    # Step 2: Build a point table from plain rows.
    rows = pd.DataFrame({"site": ["s1", "s2"], "x": [0.5, 5.5], "y": [0.5, 5.5]})
    sites = from_dataframe(rows, ("x", "y"), crs=parcels.crs, name="sites")
    assert tuple(bbox(sites)) == (0.5, 0.5, 5.5, 5.5)

    # Step 3: Select the poorer half and measure it.
    poor = with_area(subset(parcels, "Income < median(Income)"))
    assert len(poor) == 2, "Subset should keep the rows below the median."
    assert poor.to_geodataframe()["area"].sum() == pytest.approx(2.0)

    # Step 4: Dissolve by region and by contiguity.
    regions = dissolve_by_attribute(parcels, "region", aggregations={"Income": "sum"})
    blocks = dissolve_by_contiguity(parcels)
    assert len(regions) == 2, "Expected one row per region."
    assert len(blocks) == 3, "Expected three contiguous blocks."

    area_stats = attach_area_stats(regions, by_class="region")
    assert "class_areas" in area_stats, "Area stats missing class_areas."
    assert sum(area_stats["class_percentages"].values()) == pytest.approx(100.0)

    # Step 5: Overlay roads and a study area.
    road_parts = intersect(vector_io.read(gpkg_path, layer="roads"), regions)
    assert road_parts.base_kind == "line", "Clipped roads should stay lines."
    assert sum(geom.length for geom in road_parts.geometries) == pytest.approx(2.0)

    study_area = FeatureTable(
        gpd.GeoDataFrame({"study": ["core"]}, geometry=[box(0, 0, 1.5, 1.5)], crs=parcels.crs), name="study"
    )
    pieces = union(blocks, study_area)
    assert len(pieces) >= len(blocks), "Union lost pieces."

    # Step 6: Convert between representations.
    pattern = convert(sites, Representation.POINT_PATTERN)
    assert pattern.n == 2
    grid = materialize(raster_io.read(raster_path))
    image = convert(grid, Representation.PIXEL_IMAGE)
    cell_points = convert(image, Representation.FEATURE_TABLE)
    assert len(cell_points) == 5, "Nodata cells should not become points."

    # Step 7: Reproject and export results.
    geographic = CRSService().transform(regions, "EPSG:4326")
    assert geographic.crs.is_geographic

    regions_path = vector_io.write(regions, os.path.join(output_dir, "regions.geojson"))
    roads_path = vector_io.write(road_parts, os.path.join(output_dir, "road_parts.geojson"))
    cells_path = vector_io.write(cell_points, os.path.join(output_dir, "cells.geojson"))
    raster_out = raster_io.write(grid, os.path.join(output_dir, "grid.tif"))
    assert os.path.exists(raster_out), "Raster not saved."

    # Check that the generated GeoJSON files contain features.
    check_geojson_features(regions_path)
    check_geojson_features(roads_path)
    check_geojson_features(cells_path)
