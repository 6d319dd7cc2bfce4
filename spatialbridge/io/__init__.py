# -*- coding: utf-8 -*-
"""The io package contains the services that touch the outside world.

Vector and raster readers/writers, the CRS service and geocoding live here. They are plain objects handed to the
code that needs them, never module-level state.
"""
