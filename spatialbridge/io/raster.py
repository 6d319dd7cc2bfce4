# -*- coding: utf-8 -*-
"""Handles raster input and output operations.

Reading only collects the grid geometry; cells stay on disk until the grid is materialized.
"""

import logging
import os

import rasterio
from rasterio.crs import CRS as RasterioCRS
from rasterio.errors import RasterioIOError

from ..config import DEFAULT_RASTER_DRIVER
from ..core.exceptions import ResourceReadError, SchemaError
from ..core.raster import RasterGrid, materialize
from ..utils.helpers import as_crs

log = logging.getLogger(__name__)


def to_rasterio_crs(crs):
    """Convert any CRS input into a rasterio CRS (None stays None)."""
    crs = as_crs(crs)
    return None if crs is None else RasterioCRS.from_wkt(crs.to_wkt())


class RasterIO:
    """Reads and writes raster grids through rasterio."""

    def read(self, raster_path, band=1):
        """Open a raster file as a lazy grid.

        Parameters:
        -----------
        raster_path : str
            Path to the raster file
        band : int
            1-based band to expose

        Returns:
        --------
        grid : RasterGrid
            Lazy grid backed by ``raster_path``
        """
        try:
            with rasterio.open(raster_path) as src:
                if not 1 <= band <= src.count:
                    raise SchemaError(f"'{raster_path}' has {src.count} bands, band {band} requested")
                transform = src.transform
                if transform.b != 0 or transform.d != 0:
                    raise SchemaError(f"'{raster_path}' is rotated; rotated grids are not supported")
                grid = RasterGrid(
                    rows=src.height,
                    cols=src.width,
                    cell_size=(transform.a, -transform.e),
                    origin=(transform.c, transform.f),
                    crs=src.crs,
                    nodata=src.nodata,
                    path=raster_path,
                    band=band,
                )
        except RasterioIOError as exc:
            raise ResourceReadError(f"Cannot open '{raster_path}': {exc}") from exc

        log.info("Opened %s", grid)
        return grid

    def write(self, grid, output_path, driver=DEFAULT_RASTER_DRIVER):
        """Write a grid to a single band raster file.

        A lazy grid is materialized first.

        Parameters:
        -----------
        grid : RasterGrid
            Grid to write
        output_path : str
            Path to the output raster file
        driver : str
            GDAL driver name

        Returns:
        --------
        output_path : str
            Path written to
        """
        data = materialize(grid).read_cells()

        directory = os.path.dirname(str(output_path))
        if directory:
            os.makedirs(directory, exist_ok=True)

        with rasterio.open(
            output_path,
            "w",
            driver=driver,
            height=grid.rows,
            width=grid.cols,
            count=1,
            dtype=data.dtype,
            crs=to_rasterio_crs(grid.crs),
            transform=grid.transform,
            nodata=grid.nodata,
        ) as dst:
            dst.write(data, 1)

        log.info("Wrote %s to %s (%s)", grid, output_path, driver)
        return output_path
