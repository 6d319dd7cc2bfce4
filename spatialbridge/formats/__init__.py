# -*- coding: utf-8 -*-
"""The formats package converts values between spatial representations.

It holds the representation value types, the conversion registry and the conversion rules registered on the
default registry when the package is imported.
"""

from . import adapters  # noqa: F401  registers the default conversion rules
from .registry import FormatRegistry, Representation, convert, default_registry
from .representations import PixelImage, PointPattern, SpatialObject, Window

__all__ = [
    "FormatRegistry",
    "PixelImage",
    "PointPattern",
    "Representation",
    "SpatialObject",
    "Window",
    "convert",
    "default_registry",
]
