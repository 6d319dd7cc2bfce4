# -*- coding: utf-8 -*-
# spatialbridge/__init__.py

"""
spatialbridge: conversion and overlay of spatial vector and raster data
=======================================================================

spatialbridge moves spatial data between the representations analysis tools expect and composes
geometries, on top of geopandas, shapely and rasterio.

Key features:
- Feature tables and lazy/materialized raster grids
- Conversion registry (legacy spatial objects, windows, point patterns, pixel images)
- Dissolve by contiguity or attribute
- Intersect, union, subset and area
- Vector, raster, CRS and geocoding services
"""

__version__ = "0.1.0"

from .core.exceptions import (
    CRSMismatchError,
    EmptyExtentError,
    LayerSelectionError,
    NotConvertibleError,
    ResourceReadError,
    SchemaError,
    SpatialBridgeError,
    UnprojectedCRSError,
)
from .core.raster import RasterGrid, StorageMode, is_materialized, materialize
from .core.table import FeatureTable, attributes_only, bbox, from_dataframe

from .formats import (
    FormatRegistry,
    PixelImage,
    PointPattern,
    Representation,
    SpatialObject,
    Window,
    convert,
    default_registry,
)

from .overlay.dissolve import dissolve_by_attribute, dissolve_by_contiguity
from .overlay.overlay import intersect, union

from .filters.attribute import subset
from .filters.spatial import select_by_area

from .stats.spatial import area, attach_area_stats, with_area

from .io.crs import CRSService
from .io.geocode import GeocodeResult, geocode
from .io.raster import RasterIO
from .io.vector import VectorIO

from .logging_config import setup_logging
