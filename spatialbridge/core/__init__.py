# -*- coding: utf-8 -*-
"""The core package holds the values every spatialbridge operation works on.

It defines feature tables, raster grids and the error kinds raised across the library.
"""
