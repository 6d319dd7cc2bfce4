# -*- coding: utf-8 -*-
"""Conversion rules between feature tables, raster grids and the specialized representations.

The functions are registered on the default registry at import time and can be called directly as well.
None of them modifies its input.

Lossy conversions:
- feature table -> window drops the attribute table; the window cannot be turned back into a table.
- raster grid -> pixel image keeps every cell, masking nodata cells instead of zeroing them.
"""

import logging
import warnings

import geopandas as gpd
import numpy as np
import pandas as pd
from rasterio.transform import from_origin
from shapely.ops import unary_union

from ..core.exceptions import SchemaError
from ..core.raster import RasterGrid, materialize
from ..core.table import FeatureTable, attributes_only, bbox
from ..utils.helpers import require_planar, require_same_crs
from .registry import Representation, default_registry
from .representations import PixelImage, PointPattern, SpatialObject, Window

log = logging.getLogger(__name__)


@default_registry.register(Representation.FEATURE_TABLE, Representation.SPATIAL)
def table_to_spatial(table):
    """Convert a feature table into a legacy spatial object, one geometry and one data row per feature."""
    return SpatialObject(table.geometries, attributes_only(table), crs=table.crs)


@default_registry.register(Representation.SPATIAL, Representation.FEATURE_TABLE)
def spatial_to_table(spatial, name=None):
    """Convert a legacy spatial object back into a feature table."""
    gdf = gpd.GeoDataFrame(spatial.data, geometry=spatial.geometries, crs=spatial.crs)
    return FeatureTable(gdf, name=name)


@default_registry.register(Representation.FEATURE_TABLE, Representation.WINDOW)
def table_to_window(table):
    """Convert a polygon table into an observation window.

    The window is the union of all polygons. The attribute table is dropped: a window only describes the region
    an analysis runs in.

    Parameters:
    -----------
    table : FeatureTable
        Table of polygons

    Returns:
    --------
    window : Window
        Boundary of the polygons, in the table's CRS
    """
    if table.base_kind != "polygon":
        raise SchemaError(f"A window can only be built from polygons, got {table.base_kind}")

    if table.columns:
        message = f"Converting to a window drops {len(table.columns)} attribute columns: {table.columns}"
        warnings.warn(message, UserWarning, stacklevel=3)
        log.info(message)

    boundary = unary_union([geom for geom in table.geometries if geom is not None])
    return Window(boundary, crs=table.crs)


default_registry.refuse(
    Representation.WINDOW,
    Representation.FEATURE_TABLE,
    "a window has no attribute table to restore",
)


@default_registry.register(Representation.FEATURE_TABLE, Representation.POINT_PATTERN)
def table_to_point_pattern(table, window=None):
    """Convert a point table into a planar point pattern.

    Parameters:
    -----------
    table : FeatureTable
        Table of points (multi-points are split into their members, each keeping the row's attributes)
    window : Window, optional
        Observation window. Defaults to the bounding box of the points.

    Returns:
    --------
    pattern : PointPattern
        Points with the table's attributes as marks (no marks when the table has no attributes)
    """
    require_planar(table.crs, "Point pattern conversion")
    if table.base_kind not in ("point", None):
        raise SchemaError(f"A point pattern can only be built from points, got {table.base_kind}")

    gdf = table.to_geodataframe()
    if gdf.geometry.isna().any():
        raise SchemaError("Point pattern conversion needs a geometry on every row")
    gdf = gdf.explode(index_parts=False).reset_index(drop=True)

    if window is None:
        window = Window.from_bounds(bbox(table), crs=table.crs)
    elif window.crs is not None:
        require_same_crs(window.crs, table.crs)

    marks = pd.DataFrame(gdf.drop(columns=gdf.geometry.name)) if table.columns else None
    return PointPattern(gdf.geometry.x.to_numpy(), gdf.geometry.y.to_numpy(), window, marks=marks, crs=table.crs)


@default_registry.register(Representation.POINT_PATTERN, Representation.FEATURE_TABLE)
def point_pattern_to_table(pattern, name=None):
    """Convert a point pattern into a point table; marks become attributes and the window is dropped."""
    marks = pattern.marks if pattern.marks is not None else pd.DataFrame(index=range(pattern.n))
    gdf = gpd.GeoDataFrame(marks, geometry=gpd.points_from_xy(pattern.x, pattern.y), crs=pattern.crs)
    return FeatureTable(gdf, name=name)


@default_registry.register(Representation.RASTER_GRID, Representation.PIXEL_IMAGE)
def raster_to_pixel_image(grid):
    """Convert a raster grid into a pixel image.

    A lazy grid is read once; the grid itself is left lazy. Cells equal to the nodata value (or NaN) are masked.

    Parameters:
    -----------
    grid : RasterGrid
        Lazy or materialized grid

    Returns:
    --------
    image : PixelImage
        Image over the grid's extent, in the grid's CRS
    """
    cells = materialize(grid).read_cells()

    mask = np.zeros(cells.shape, dtype=bool)
    if np.issubdtype(cells.dtype, np.floating):
        mask |= np.isnan(cells)
    if grid.nodata is not None and not (isinstance(grid.nodata, float) and np.isnan(grid.nodata)):
        mask |= cells == grid.nodata

    bounds = grid.bounds
    return PixelImage(
        np.ma.array(cells, mask=mask),
        xrange=(bounds.left, bounds.right),
        yrange=(bounds.bottom, bounds.top),
        crs=grid.crs,
        nodata=grid.nodata,
    )


def _default_nodata(values):
    """Pick a fill value for masked cells that fits the value type and collides with no valid cell."""
    if np.issubdtype(values.dtype, np.floating):
        return np.nan
    if values.dtype == bool:
        raise SchemaError("Boolean images need an explicit nodata value")

    info = np.iinfo(values.dtype)
    valid = np.ma.compressed(values)
    for candidate in (info.max, info.min):
        if not (valid == candidate).any():
            return int(candidate)
    raise SchemaError(f"Every {values.dtype} value is used by a cell; pass an explicit nodata value")


@default_registry.register(Representation.PIXEL_IMAGE, Representation.RASTER_GRID)
def pixel_image_to_raster(image, nodata=None):
    """Convert a pixel image into a materialized raster grid.

    Parameters:
    -----------
    image : PixelImage
        Image to convert
    nodata : int or float, optional
        Value written into masked cells. Defaults to the image's own nodata value, then to NaN for float images
        and to the largest (or smallest) value of the integer type not used by any cell; None when no cell is
        masked.

    Returns:
    --------
    grid : RasterGrid
        Materialized grid
    """
    values = image.values
    mask = np.ma.getmaskarray(values)

    if nodata is None and mask.any():
        nodata = image.nodata if image.nodata is not None else _default_nodata(values)

    cells = values.filled(nodata) if mask.any() else np.ma.getdata(values)
    transform = from_origin(image.xrange[0], image.yrange[1], image.xstep, image.ystep)
    return RasterGrid.from_array(cells, transform, crs=image.crs, nodata=nodata)


@default_registry.register(Representation.PIXEL_IMAGE, Representation.FEATURE_TABLE)
def pixel_image_to_table(image, name=None, column="value"):
    """Convert a pixel image into a table with one point per cell centre that carries a value."""
    values = image.values
    rows, cols = np.nonzero(~np.ma.getmaskarray(values))

    xs = image.xrange[0] + (cols + 0.5) * image.xstep
    ys = image.yrange[1] - (rows + 0.5) * image.ystep
    data = pd.DataFrame({column: np.ma.getdata(values)[rows, cols]})

    return FeatureTable(gpd.GeoDataFrame(data, geometry=gpd.points_from_xy(xs, ys), crs=image.crs), name=name)


@default_registry.register(Representation.RASTER_GRID, Representation.FEATURE_TABLE)
def raster_to_table(grid, name=None, column="value"):
    """Convert a raster grid into cell-centre points, skipping nodata cells."""
    return pixel_image_to_table(raster_to_pixel_image(grid), name=name, column=column)
