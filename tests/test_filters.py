# -*- coding: utf-8 -*-
"""Tests for attribute subsets, area measurement and area based selection."""

import geopandas as gpd
import pytest
from shapely.geometry import Polygon, box

from spatialbridge import (
    FeatureTable,
    SchemaError,
    UnprojectedCRSError,
    area,
    attach_area_stats,
    select_by_area,
    subset,
    with_area,
)


def test_subset_below_median(squares):
    result = subset(squares, "Income < median(Income)")
    frame = result.to_geodataframe()

    assert len(result) == 2
    assert len(result) <= len(squares)
    assert (frame["Income"] < 30.0).all()
    assert result.columns == squares.columns, "Subset keeps the schema."
    assert result.geometries[0].equals(box(0, 0, 1, 1))


def test_subset_with_callable(squares):
    result = subset(squares, lambda attrs: attrs["Income"] >= 40)
    assert result.to_geodataframe()["Income"].tolist() == [40.0, 50.0]


def test_subset_on_text_column(squares):
    result = subset(squares, "region == 'north'")
    assert result.to_geodataframe()["Income"].tolist() == [10.0, 20.0, 40.0]


def test_subset_keeps_name(squares):
    assert subset(squares, "Income > 0").name == "squares"
    assert subset(squares, "Income > 0", name="rich").name == "rich"


def test_subset_unknown_column(squares):
    with pytest.raises(SchemaError):
        subset(squares, "Wealth > 10")

    with pytest.raises(SchemaError):
        subset(squares, "Income < median(Wealth)")

    with pytest.raises(SchemaError):
        subset(squares, lambda attrs: attrs["Wealth"] > 10)


def test_subset_rejects_other_predicates(squares):
    with pytest.raises(TypeError):
        subset(squares, 42)


def test_subset_does_not_modify_input(squares):
    subset(squares, "Income < 25")
    assert len(squares) == 5


def test_area_of_unit_square(squares):
    areas = area(squares)

    assert areas.name == "area"
    assert areas.tolist() == pytest.approx([1.0] * 5)


def test_area_subtracts_holes():
    shell = [(0, 0), (4, 0), (4, 4), (0, 4)]
    hole = [(1, 1), (2, 1), (2, 2), (1, 2)]
    table = FeatureTable(gpd.GeoDataFrame(geometry=[Polygon(shell, [hole])], crs="EPSG:32633"))

    assert area(table).tolist() == pytest.approx([15.0])


def test_area_refuses_geographic_crs():
    table = FeatureTable(gpd.GeoDataFrame(geometry=[box(10, 50, 11, 51)], crs="EPSG:4326"))
    with pytest.raises(UnprojectedCRSError):
        area(table)


def test_area_needs_polygons(roads):
    with pytest.raises(SchemaError):
        area(roads)


def test_with_area_adds_column(zones):
    result = with_area(zones)

    assert result.columns == ["name", "zone_id", "area"]
    assert result.to_geodataframe()["area"].tolist() == pytest.approx([4.0, 4.0])
    assert "area" not in zones.columns


def test_area_stats_overall(squares):
    stats = attach_area_stats(squares)

    assert stats["total_area"] == pytest.approx(5.0)
    assert stats["median_area"] == pytest.approx(1.0)


def test_area_stats_by_class(squares):
    stats = attach_area_stats(squares, by_class="region")

    assert stats["class_areas"] == pytest.approx({"north": 3.0, "south": 2.0})
    assert stats["class_percentages"] == pytest.approx({"north": 60.0, "south": 40.0})

    with pytest.raises(SchemaError):
        attach_area_stats(squares, by_class="missing")


def test_select_by_area():
    gdf = gpd.GeoDataFrame(
        {"id": [1, 2, 3]},
        geometry=[box(0, 0, 1, 1), box(0, 0, 2, 2), box(0, 0, 3, 3)],
        crs="EPSG:32633",
    )
    table = FeatureTable(gdf)

    assert select_by_area(table, min_area=2).to_geodataframe()["id"].tolist() == [2, 3]
    assert select_by_area(table, max_area=4).to_geodataframe()["id"].tolist() == [1, 2]
    assert select_by_area(table, min_area=2, max_area=5).to_geodataframe()["id"].tolist() == [2]


def test_subset_aggregate_without_values(squares):
    empty = squares.with_column("score", [float("nan")] * 5)
    with pytest.raises(SchemaError, match="median"):
        subset(empty, "score < median(score)")
