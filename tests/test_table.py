# -*- coding: utf-8 -*-
"""Tests for FeatureTable construction, projection and extent."""

import geopandas as gpd
import pandas as pd
import pytest
from shapely.geometry import GeometryCollection, Point, box

from spatialbridge import (
    EmptyExtentError,
    FeatureTable,
    SchemaError,
    attributes_only,
    bbox,
    from_dataframe,
)


def test_from_dataframe_builds_points():
    """Coordinate columns become point geometry and are removed from the attributes."""
    rows = pd.DataFrame({"site": ["a", "b", "c"], "lon": [1.0, 3.0, 0.0], "lat": [2.0, -1.0, 5.0]})
    table = from_dataframe(rows, ("lon", "lat"), crs="EPSG:4326", name="sites")

    assert len(table) == 3
    assert table.columns == ["site"], "Coordinate columns should be dropped."
    assert table.base_kind == "point"
    assert table.crs.to_epsg() == 4326
    assert table.geometries[1].equals(Point(3.0, -1.0))


def test_from_dataframe_keeps_columns_on_request():
    rows = [{"x": 1, "y": 2}, {"x": 3, "y": 4}]
    table = from_dataframe(rows, ("x", "y"), remove=False)
    assert table.columns == ["x", "y"]


def test_from_dataframe_missing_column():
    rows = pd.DataFrame({"lon": [1.0]})
    with pytest.raises(SchemaError):
        from_dataframe(rows, ("lon", "lat"))


def test_from_dataframe_non_numeric_column():
    rows = pd.DataFrame({"lon": ["1.0"], "lat": [2.0]})
    with pytest.raises(SchemaError):
        from_dataframe(rows, ("lon", "lat"))


def test_table_rejects_unsupported_geometry():
    gdf = gpd.GeoDataFrame(geometry=[GeometryCollection([Point(0, 0)])])
    with pytest.raises(SchemaError):
        FeatureTable(gdf)


def test_table_is_a_value(squares):
    """Changing a frame handed out by a table does not change the table."""
    frame = squares.to_geodataframe()
    frame.loc[0, "region"] = "changed"
    assert squares.to_geodataframe().loc[0, "region"] == "north"


def test_attributes_only_keeps_rows_and_order(squares):
    attrs = attributes_only(squares)

    assert isinstance(attrs, pd.DataFrame)
    assert "geometry" not in attrs.columns
    assert len(attrs) == len(squares)
    assert attrs["Income"].tolist() == [10.0, 20.0, 30.0, 40.0, 50.0]


def test_bbox_contains_every_coordinate():
    rows = pd.DataFrame({"x": [1.0, 3.0, 0.0], "y": [2.0, -1.0, 5.0]})
    table = from_dataframe(rows, ("x", "y"))
    extent = bbox(table)

    assert tuple(extent) == (0.0, -1.0, 3.0, 5.0)
    for geom in table.geometries:
        assert extent.left <= geom.x <= extent.right
        assert extent.bottom <= geom.y <= extent.top


def test_bbox_of_polygons(squares):
    assert tuple(bbox(squares)) == (0.0, 0.0, 6.0, 6.0)


def test_bbox_of_empty_table():
    empty = FeatureTable(gpd.GeoDataFrame(geometry=[], crs="EPSG:32633"))
    with pytest.raises(EmptyExtentError):
        bbox(empty)


def test_with_and_drop_columns(squares):
    extended = squares.with_column("rank", [5, 4, 3, 2, 1])
    assert "rank" in extended.columns
    assert "rank" not in squares.columns, "The source table must stay unchanged."

    reduced = extended.drop_columns(["rank", "Income"])
    assert reduced.columns == ["region"]

    with pytest.raises(SchemaError):
        squares.drop_columns("missing")


def test_rows_iterates_features(squares):
    rows = list(squares.rows())
    assert len(rows) == 5
    geom, attrs = rows[3]
    assert geom.equals(box(5, 5, 6, 6))
    assert attrs == {"region": "north", "Income": 40.0}
