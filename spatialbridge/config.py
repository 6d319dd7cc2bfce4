# -*- coding: utf-8 -*-
"""Global constants for spatialbridge.

This module is the single place for values that would otherwise be repeated across the
conversion, overlay and I/O modules.

Exports:
    GEOMETRY_KINDS (dict): Supported geometry type names mapped to their base kind.
    VECTOR_DRIVERS (dict): File extensions mapped to OGR driver names.
    DEFAULT_RASTER_DRIVER (str): GDAL driver used when writing rasters.
    AREA_TOLERANCE (float): Smallest area an overlay piece must have to be emitted.
    LENGTH_TOLERANCE (float): Smallest length a shared boundary or clipped line must have.
    DEFAULT_SUFFIXES (tuple): Collision suffixes used when tables carry no usable name.
    LOG_LEVEL (str): Package log level, read from SPATIALBRIDGE_LOG_LEVEL.
"""

import os

GEOMETRY_KINDS = {
    "Point": "point",
    "MultiPoint": "point",
    "LineString": "line",
    "MultiLineString": "line",
    "Polygon": "polygon",
    "MultiPolygon": "polygon",
}

VECTOR_DRIVERS = {
    ".shp": "ESRI Shapefile",
    ".geojson": "GeoJSON",
    ".json": "GeoJSON",
    ".gpkg": "GPKG",
}

DEFAULT_RASTER_DRIVER = "GTiff"

AREA_TOLERANCE = 1e-12
LENGTH_TOLERANCE = 1e-12

DEFAULT_SUFFIXES = ("1", "2")

LOG_LEVEL = os.environ.get("SPATIALBRIDGE_LOG_LEVEL", "WARNING").upper()
