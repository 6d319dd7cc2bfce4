# -*- coding: utf-8 -*-
"""Defines the RasterGrid class, a single band grid of numeric cells with its grid geometry and CRS.

A grid lives in one of two storage modes. A lazy grid only knows the path and band of its backing file and opens that
file each time cells are needed; a materialized grid holds every cell in memory. The transition from lazy to
materialized is explicit (:func:`materialize`) and there is no way back.
"""

import enum
import logging

import numpy as np
import rasterio
from rasterio.coords import BoundingBox
from rasterio.errors import RasterioIOError
from rasterio.transform import from_origin
from rasterio.windows import Window

from .exceptions import ResourceReadError, SchemaError

log = logging.getLogger(__name__)


class StorageMode(enum.Enum):
    """Where the cells of a grid live."""

    LAZY = "lazy"
    MATERIALIZED = "materialized"


class RasterGrid:
    """A 2-D grid of numeric cells plus origin, cell size, CRS and nodata value."""

    def __init__(self, rows, cols, cell_size, origin, crs=None, nodata=None, cells=None, path=None, band=1):
        """Initialize a RasterGrid.

        Exactly one of ``cells`` (materialized) or ``path`` (lazy) must be given.

        Parameters:
        -----------
        rows, cols : int
            Grid dimensions
        cell_size : tuple of float
            (x, y) size of one cell, both positive
        origin : tuple of float
            (x, y) coordinate of the top-left corner
        crs : rasterio.crs.CRS or any pyproj-compatible CRS input, optional
            Coordinate reference system
        nodata : int or float, optional
            Value marking cells without data
        cells : numpy.ndarray, optional
            Cell values of shape (rows, cols)
        path : str, optional
            Backing file of a lazy grid
        band : int
            1-based band index read from ``path``
        """
        if (cells is None) == (path is None):
            raise ValueError("Provide either cells (materialized) or path (lazy)")
        if cell_size[0] <= 0 or cell_size[1] <= 0:
            raise SchemaError(f"Cell size must be positive, got {cell_size}")

        self._rows = int(rows)
        self._cols = int(cols)
        self._cell_size = (float(cell_size[0]), float(cell_size[1]))
        self._origin = (float(origin[0]), float(origin[1]))
        self._crs = crs
        self._nodata = nodata
        self._path = None if path is None else str(path)
        self._band = band

        if cells is not None:
            cells = np.array(cells, copy=True)
            if cells.shape != (self._rows, self._cols):
                raise SchemaError(f"Cell array of shape {cells.shape} does not match grid {self._rows}x{self._cols}")
            cells.setflags(write=False)
            self._storage = StorageMode.MATERIALIZED
        else:
            self._storage = StorageMode.LAZY
        self._cells = cells

    @classmethod
    def from_array(cls, cells, transform, crs=None, nodata=None):
        """Build a materialized grid from a 2-D array and a north-up affine transform.

        Parameters:
        -----------
        cells : numpy.ndarray
            Cell values (rows, cols)
        transform : affine.Affine
            Affine transformation of the grid, as produced by rasterio.transform.from_origin
        crs : rasterio.crs.CRS, optional
            Coordinate reference system
        nodata : int or float, optional
            No data value

        Returns:
        --------
        grid : RasterGrid
            Materialized grid
        """
        cells = np.asarray(cells)
        if cells.ndim != 2:
            raise SchemaError(f"Expected a 2-D cell array, got {cells.ndim} dimensions")
        if transform.b != 0 or transform.d != 0:
            raise SchemaError("Rotated grids are not supported")
        return cls(
            rows=cells.shape[0],
            cols=cells.shape[1],
            cell_size=(transform.a, -transform.e),
            origin=(transform.c, transform.f),
            crs=crs,
            nodata=nodata,
            cells=cells,
        )

    @property
    def rows(self):
        return self._rows

    @property
    def cols(self):
        return self._cols

    @property
    def shape(self):
        return self._rows, self._cols

    @property
    def cell_size(self):
        return self._cell_size

    @property
    def origin(self):
        return self._origin

    @property
    def crs(self):
        return self._crs

    @property
    def nodata(self):
        return self._nodata

    @property
    def path(self):
        return self._path

    @property
    def band(self):
        return self._band

    @property
    def storage(self):
        return self._storage

    @property
    def transform(self):
        return from_origin(self._origin[0], self._origin[1], self._cell_size[0], self._cell_size[1])

    @property
    def bounds(self):
        left, top = self._origin
        return BoundingBox(
            left=left,
            bottom=top - self._rows * self._cell_size[1],
            right=left + self._cols * self._cell_size[0],
            top=top,
        )

    def read_cells(self):
        """Return the cell values.

        A lazy grid re-reads its backing file on every call; a materialized grid returns a writable copy.
        """
        if self._storage is StorageMode.MATERIALIZED:
            return self._cells.copy()
        return self._read()

    def cell_value(self, row, col):
        """Return the value of one cell (0-based row and column)."""
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise IndexError(f"Cell ({row}, {col}) outside grid {self._rows}x{self._cols}")
        if self._storage is StorageMode.MATERIALIZED:
            return self._cells[row, col].item()
        return self._read(window=Window(col, row, 1, 1))[0, 0].item()

    def _read(self, window=None):
        try:
            with rasterio.open(self._path) as src:
                if window is None and (src.height, src.width) != (self._rows, self._cols):
                    raise ResourceReadError(
                        f"'{self._path}' is now {src.height}x{src.width}, expected {self._rows}x{self._cols}"
                    )
                return src.read(self._band, window=window)
        except (RasterioIOError, IndexError) as exc:
            raise ResourceReadError(f"Cannot read band {self._band} of '{self._path}': {exc}") from exc

    def __str__(self):
        """String representation of the grid."""
        source = self._path if self._path else "memory"
        return f"RasterGrid {self._rows}x{self._cols} ({self._storage.value}, source: {source}, crs: {self._crs})"

    def __repr__(self):
        return f"<RasterGrid rows={self._rows} cols={self._cols} storage={self._storage.value}>"


def is_materialized(grid):
    """Check whether all cells of a grid are held in memory."""
    return grid.storage is StorageMode.MATERIALIZED


def materialize(grid):
    """Load every cell of a grid into memory.

    Parameters:
    -----------
    grid : RasterGrid
        Lazy or materialized grid

    Returns:
    --------
    grid : RasterGrid
        Materialized grid with the same geometry, CRS and nodata. A grid that is already materialized is returned
        as is, without touching any file.
    """
    if is_materialized(grid):
        return grid

    log.debug("Materializing %s", grid)
    cells = grid.read_cells()
    return RasterGrid(
        rows=grid.rows,
        cols=grid.cols,
        cell_size=grid.cell_size,
        origin=grid.origin,
        crs=grid.crs,
        nodata=grid.nodata,
        cells=cells,
    )
