# -*- coding: utf-8 -*-
"""Defines the FeatureTable class, the vector value every spatialbridge operation consumes and produces.

A feature table is an ordered sequence of rows, each holding one geometry and one attribute row, all sharing one
attribute schema and one coordinate reference system. Tables are values: the constructor copies its input and every
accessor that hands out a frame hands out a copy, so an operation can never change a table it was given.
This module also provides the constructors and projections that do not need any geometry computation.
"""

import logging

import geopandas as gpd
import pandas as pd
from rasterio.coords import BoundingBox

from ..utils.helpers import base_kind, geometry_kind
from .exceptions import EmptyExtentError, SchemaError

log = logging.getLogger(__name__)

GEOMETRY_COLUMN = "geometry"


class FeatureTable:
    """An immutable table of features (geometry plus attributes) in one CRS."""

    def __init__(self, data, name=None):
        """Initialize a FeatureTable.

        Parameters:
        -----------
        data : geopandas.GeoDataFrame
            Features to hold. The frame is copied and its index reset.
        name : str, optional
            Identity of the table, used to suffix colliding attribute names in overlays
        """
        if not isinstance(data, gpd.GeoDataFrame):
            raise TypeError(f"Expected GeoDataFrame, got {type(data)}")
        if data.active_geometry_name is None:
            raise SchemaError("GeoDataFrame has no active geometry column")

        data = data.reset_index(drop=True)
        if data.active_geometry_name != GEOMETRY_COLUMN:
            data = data.rename_geometry(GEOMETRY_COLUMN)

        for geom in data.geometry:
            if geom is not None:
                geometry_kind(geom)

        self._data = data
        self._name = name

    @classmethod
    def from_geodataframe(cls, gdf, name=None):
        """Build a table from a GeoDataFrame (copied)."""
        return cls(gdf, name=name)

    @property
    def name(self):
        return self._name

    @property
    def crs(self):
        return self._data.crs

    @property
    def columns(self):
        """Attribute names, in schema order, without the geometry column."""
        return [col for col in self._data.columns if col != GEOMETRY_COLUMN]

    @property
    def geometry(self):
        return self._data.geometry.copy()

    @property
    def geometries(self):
        return list(self._data.geometry)

    @property
    def geometry_kinds(self):
        """Geometry type name of every row (None for a missing geometry)."""
        return [geom.geom_type if geom is not None else None for geom in self._data.geometry]

    @property
    def base_kind(self):
        """"point", "line" or "polygon"; None for a table without geometries. Mixed tables raise SchemaError."""
        return base_kind(self._data.geometry)

    def to_geodataframe(self):
        return self._data.copy()

    def rows(self):
        """Iterate over (geometry, attribute mapping) pairs in row order."""
        columns = self.columns
        for _idx, row in self._data.iterrows():
            yield row[GEOMETRY_COLUMN], {col: row[col] for col in columns}

    def with_column(self, column, values):
        """Return a new table with one attribute column added or replaced.

        Parameters:
        -----------
        column : str
            Name of the column
        values : sequence or scalar
            One value per row, or a scalar broadcast to all rows

        Returns:
        --------
        table : FeatureTable
            New table with the extended schema
        """
        if column == GEOMETRY_COLUMN:
            raise SchemaError("The geometry column cannot be replaced as an attribute")
        data = self._data.copy()
        if not pd.api.types.is_scalar(values) and len(values) != len(data):
            raise SchemaError(f"Column '{column}' has {len(values)} values for {len(data)} rows")
        data[column] = list(values) if not pd.api.types.is_scalar(values) else values
        return FeatureTable(data, name=self._name)

    def drop_columns(self, columns):
        """Return a new table without the given attribute columns."""
        if isinstance(columns, str):
            columns = [columns]
        missing = [col for col in columns if col not in self.columns]
        if missing:
            raise SchemaError(f"Columns not found in table: {missing}")
        return FeatureTable(self._data.drop(columns=columns), name=self._name)

    def __len__(self):
        return len(self._data)

    def __str__(self):
        """String representation of the table."""
        crs_name = self.crs.name if self.crs is not None else "None"
        name = self._name if self._name else "unnamed"
        return f"FeatureTable '{name}' (rows: {len(self)}, columns: {len(self.columns)}, crs: {crs_name})"

    def __repr__(self):
        return f"<FeatureTable name={self._name!r} rows={len(self)} crs={self.crs}>"


def from_dataframe(rows, geometry_columns, crs=None, remove=True, name=None):
    """Attach point geometry to a plain attribute table.

    Parameters:
    -----------
    rows : pandas.DataFrame or sequence of mappings
        Attribute rows holding the coordinate columns
    geometry_columns : tuple of str
        Names of the x (longitude/easting) and y (latitude/northing) columns
    crs : any pyproj-compatible CRS input, optional
        Coordinate reference system of the coordinates
    remove : bool
        Drop the coordinate columns from the attributes
    name : str, optional
        Name of the resulting table

    Returns:
    --------
    table : FeatureTable
        One point feature per input row
    """
    df = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))

    if isinstance(geometry_columns, str) or len(geometry_columns) != 2:
        raise SchemaError("geometry_columns must name exactly two columns (x, y)")

    x_col, y_col = geometry_columns
    for col in (x_col, y_col):
        if col not in df.columns:
            raise SchemaError(f"Coordinate column '{col}' not found")
        if not pd.api.types.is_numeric_dtype(df[col]) or pd.api.types.is_bool_dtype(df[col]):
            raise SchemaError(f"Coordinate column '{col}' is not numeric (dtype {df[col].dtype})")
        if df[col].isna().any():
            raise SchemaError(f"Coordinate column '{col}' holds missing values")

    points = gpd.points_from_xy(df[x_col], df[y_col])
    attributes = df.drop(columns=[x_col, y_col]) if remove else df
    log.debug("Built %d points from columns %s, %s", len(df), x_col, y_col)

    return FeatureTable(gpd.GeoDataFrame(attributes, geometry=points, crs=crs), name=name)


def attributes_only(table):
    """Drop the geometry of a table.

    Parameters:
    -----------
    table : FeatureTable
        Table to project

    Returns:
    --------
    attributes : pandas.DataFrame
        Attribute rows in the table's row order
    """
    return pd.DataFrame(table.to_geodataframe().drop(columns=GEOMETRY_COLUMN))


def bbox(table):
    """Axis-aligned extent of every coordinate of every geometry in a table.

    Parameters:
    -----------
    table : FeatureTable
        Table to measure

    Returns:
    --------
    extent : rasterio.coords.BoundingBox
        (left, bottom, right, top) extremes
    """
    geoms = table.geometry
    geoms = geoms[~(geoms.isna() | geoms.is_empty)]
    if len(geoms) == 0:
        raise EmptyExtentError("Cannot compute the extent of a table without coordinates")

    minx, miny, maxx, maxy = geoms.total_bounds
    return BoundingBox(left=float(minx), bottom=float(miny), right=float(maxx), top=float(maxy))
