# -*- coding: utf-8 -*-
"""Error kinds raised by spatialbridge.

Every error derives from SpatialBridgeError and from the builtin exception that matches its
nature, so code catching ValueError or IOError keeps working.
"""


class SpatialBridgeError(Exception):
    """Base class for all spatialbridge errors."""


class SchemaError(SpatialBridgeError, ValueError):
    """Columns are missing, malformed, or geometry kinds are not supported."""


class EmptyExtentError(SpatialBridgeError, ValueError):
    """The extent of a table without any coordinate was requested."""


class UnprojectedCRSError(SpatialBridgeError, ValueError):
    """A planar CRS is required but a geographic (angular) CRS was supplied."""


class CRSMismatchError(SpatialBridgeError, ValueError):
    """Two inputs of one operation carry different coordinate reference systems."""


class NotConvertibleError(SpatialBridgeError, TypeError):
    """No conversion rule exists between two representations."""


class ResourceReadError(SpatialBridgeError, IOError):
    """The resource backing a value could not be read."""


class LayerSelectionError(SpatialBridgeError, ValueError):
    """A container with several layers was read without naming one."""

    def __init__(self, path, layers):
        self.path = path
        self.layers = list(layers)
        super().__init__(f"'{path}' holds {len(self.layers)} layers, pick one of: {', '.join(self.layers)}")
