# -*- coding: utf-8 -*-
"""CRS registry and reprojection service.

Reprojection is never implicit anywhere in spatialbridge; code that needs a table or grid in another CRS asks a
CRSService for it.
"""

import logging

import numpy as np
from rasterio.warp import Resampling, calculate_default_transform, reproject

from ..core.exceptions import NotConvertibleError, SchemaError
from ..core.raster import RasterGrid, materialize
from ..core.table import FeatureTable
from ..utils.helpers import as_crs
from .raster import to_rasterio_crs

log = logging.getLogger(__name__)


class CRSService:
    """Describes coordinate reference systems and moves tables and grids between them."""

    def __init__(self, resampling=Resampling.nearest):
        """Initialize the CRS service.

        Parameters:
        -----------
        resampling : rasterio.warp.Resampling
            Resampling used when reprojecting grids
        """
        self.resampling = resampling

    def describe(self, crs):
        """Describe a CRS.

        Parameters:
        -----------
        crs : any pyproj-compatible CRS input
            EPSG code, "EPSG:xxxx" string, WKT, PROJ string or CRS object

        Returns:
        --------
        description : dict
            "code" (EPSG code or None), "name", "is_projected", "wkt" and either "linear_units" or "angular_units"
        """
        crs = as_crs(crs)
        if crs is None:
            raise SchemaError("No CRS to describe")

        units = crs.axis_info[0].unit_name if crs.axis_info else None
        description = {
            "code": crs.to_epsg(),
            "name": crs.name,
            "is_projected": crs.is_projected,
            "wkt": crs.to_wkt(),
        }
        if crs.is_geographic:
            description["angular_units"] = units
        else:
            description["linear_units"] = units
        return description

    def transform(self, value, target_crs):
        """Reproject a feature table or a raster grid.

        Parameters:
        -----------
        value : FeatureTable or RasterGrid
            Value carrying a CRS
        target_crs : any pyproj-compatible CRS input
            CRS to move to

        Returns:
        --------
        result : FeatureTable or RasterGrid
            Same kind of value in ``target_crs``; grids come back materialized
        """
        if not isinstance(value, (FeatureTable, RasterGrid)):
            raise NotConvertibleError(f"Cannot reproject {type(value).__name__}")
        if value.crs is None:
            raise SchemaError("Cannot reproject a value without a CRS")

        if isinstance(value, FeatureTable):
            log.debug("Reprojecting table %s to %s", value.name, target_crs)
            return FeatureTable(value.to_geodataframe().to_crs(as_crs(target_crs)), name=value.name)

        return self._transform_grid(value, target_crs)

    def _transform_grid(self, grid, target_crs):
        src_crs = to_rasterio_crs(grid.crs)
        dst_crs = to_rasterio_crs(target_crs)
        source = materialize(grid).read_cells()
        bounds = grid.bounds

        dst_transform, width, height = calculate_default_transform(
            src_crs, dst_crs, grid.cols, grid.rows, bounds.left, bounds.bottom, bounds.right, bounds.top
        )

        nodata = grid.nodata
        if nodata is None and np.issubdtype(source.dtype, np.floating):
            nodata = np.nan
        destination = np.full((height, width), nodata if nodata is not None else 0, dtype=source.dtype)

        reproject(
            source=source,
            destination=destination,
            src_transform=grid.transform,
            src_crs=src_crs,
            src_nodata=nodata,
            dst_transform=dst_transform,
            dst_crs=dst_crs,
            dst_nodata=nodata,
            resampling=self.resampling,
        )

        log.debug("Reprojected grid %dx%d to %dx%d", grid.rows, grid.cols, height, width)
        return RasterGrid.from_array(destination, dst_transform, crs=dst_crs, nodata=nodata)
