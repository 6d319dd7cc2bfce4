# -*- coding: utf-8 -*-
"""Value types for the specialized representations that analysis tools consume.

SpatialObject mirrors the legacy spatial classes (geometries, a data frame and a CRS string kept side by side),
Window is an analysis boundary without attributes, PointPattern is a planar point pattern with optional marks and
PixelImage is a pixel image whose missing cells are masked. All of them are values: inputs are copied on
construction and accessors return copies.
"""

import numpy as np
import pandas as pd
import shapely
from shapely.geometry import box

from ..core.exceptions import SchemaError
from ..utils.helpers import as_crs


class SpatialObject:
    """Legacy spatial object: a list of geometries with a parallel attribute data frame and a CRS."""

    def __init__(self, geometries, data=None, crs=None):
        geometries = list(geometries)
        if data is None:
            data = pd.DataFrame(index=range(len(geometries)))
        if len(data) != len(geometries):
            raise SchemaError(f"{len(geometries)} geometries but {len(data)} data rows")

        self._geometries = geometries
        self._data = data.reset_index(drop=True).copy()
        self._crs = as_crs(crs)

    @property
    def geometries(self):
        return list(self._geometries)

    @property
    def data(self):
        return self._data.copy()

    @property
    def crs(self):
        return self._crs

    @property
    def proj4string(self):
        return self._crs.to_proj4() if self._crs is not None else None

    def __len__(self):
        return len(self._geometries)

    def __repr__(self):
        return f"<SpatialObject features={len(self)} crs={self.proj4string}>"


class Window:
    """Observation window: a polygonal boundary used purely as an analysis region."""

    def __init__(self, geometry, crs=None):
        if geometry is None or geometry.is_empty or geometry.geom_type not in ("Polygon", "MultiPolygon"):
            raise SchemaError("A window needs a non-empty polygonal boundary")
        self._geometry = geometry
        self._crs = as_crs(crs)

    @classmethod
    def from_bounds(cls, bounds, crs=None):
        """Rectangular window from (left, bottom, right, top)."""
        left, bottom, right, top = bounds
        return cls(box(left, bottom, right, top), crs=crs)

    @property
    def geometry(self):
        return self._geometry

    @property
    def crs(self):
        return self._crs

    @property
    def bounds(self):
        return self._geometry.bounds

    @property
    def area(self):
        return self._geometry.area

    def covers_xy(self, x, y):
        """Boolean mask of the coordinates lying inside or on the boundary of the window."""
        return shapely.intersects_xy(self._geometry, np.asarray(x, dtype=float), np.asarray(y, dtype=float))

    def __repr__(self):
        return f"<Window type={self._geometry.geom_type} bounds={self.bounds}>"


class PointPattern:
    """Planar point pattern: coordinates, the window they were observed in and optional per-point marks."""

    def __init__(self, x, y, window, marks=None, crs=None):
        """Initialize a PointPattern.

        Parameters:
        -----------
        x, y : array-like of float
            Point coordinates
        window : Window
            Observation window; every point must lie in it
        marks : pandas.DataFrame, optional
            One row of marks per point
        crs : any pyproj-compatible CRS input, optional
            Coordinate reference system
        """
        x = np.array(x, dtype=float)
        y = np.array(y, dtype=float)
        if x.shape != y.shape or x.ndim != 1:
            raise SchemaError("x and y must be 1-D arrays of equal length")
        if marks is not None and len(marks) != len(x):
            raise SchemaError(f"{len(x)} points but {len(marks)} rows of marks")
        if len(x) and not window.covers_xy(x, y).all():
            raise SchemaError("Some points lie outside the observation window")

        x.setflags(write=False)
        y.setflags(write=False)
        self._x = x
        self._y = y
        self._window = window
        self._marks = None if marks is None else marks.reset_index(drop=True).copy()
        self._crs = as_crs(crs)

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @property
    def n(self):
        return len(self._x)

    @property
    def window(self):
        return self._window

    @property
    def marks(self):
        return None if self._marks is None else self._marks.copy()

    @property
    def crs(self):
        return self._crs

    def __len__(self):
        return self.n

    def __repr__(self):
        marked = "marked" if self._marks is not None else "unmarked"
        return f"<PointPattern n={self.n} {marked} window={self._window.bounds}>"


class PixelImage:
    """Pixel image: a masked 2-D array of values over a rectangular frame.

    Row 0 is the top row, as in a raster grid. Masked cells carry no value; ``nodata`` remembers the value they
    held in the grid the image came from, if any.
    """

    def __init__(self, values, xrange, yrange, crs=None, nodata=None):
        values = np.ma.array(values, copy=True)
        if values.ndim != 2:
            raise SchemaError(f"Expected a 2-D value array, got {values.ndim} dimensions")
        if xrange[1] <= xrange[0] or yrange[1] <= yrange[0]:
            raise SchemaError("Image ranges must be increasing")
        values.setflags(write=False)
        self._values = values
        self._xrange = (float(xrange[0]), float(xrange[1]))
        self._yrange = (float(yrange[0]), float(yrange[1]))
        self._crs = as_crs(crs)
        self._nodata = nodata

    @property
    def values(self):
        return self._values.copy()

    @property
    def shape(self):
        return self._values.shape

    @property
    def xrange(self):
        return self._xrange

    @property
    def yrange(self):
        return self._yrange

    @property
    def xstep(self):
        return (self._xrange[1] - self._xrange[0]) / self._values.shape[1]

    @property
    def ystep(self):
        return (self._yrange[1] - self._yrange[0]) / self._values.shape[0]

    @property
    def crs(self):
        return self._crs

    @property
    def nodata(self):
        return self._nodata

    def __repr__(self):
        rows, cols = self.shape
        return f"<PixelImage {rows}x{cols} x={self._xrange} y={self._yrange}>"
