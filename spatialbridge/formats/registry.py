# -*- coding: utf-8 -*-
"""Registry of conversion rules between spatial representations.

Every conversion is a plain function registered under a (source kind, target kind) pair. Callers ask the registry
to convert a value into a target kind; the registry looks up the kind of the value, then the rule for the pair.
Pairs that can never be converted (for example a window back into a feature table, which has no attribute table to
restore) are registered as refusals, so the caller gets the reason instead of a generic "no rule" error.
"""

import enum
import logging

from ..core.exceptions import NotConvertibleError
from ..core.raster import RasterGrid
from ..core.table import FeatureTable
from .representations import PixelImage, PointPattern, SpatialObject, Window

log = logging.getLogger(__name__)


class Representation(enum.Enum):
    """Named representations a value can be converted between."""

    FEATURE_TABLE = "feature_table"
    SPATIAL = "spatial"
    WINDOW = "window"
    POINT_PATTERN = "point_pattern"
    PIXEL_IMAGE = "pixel_image"
    RASTER_GRID = "raster_grid"


_KIND_BY_TYPE = (
    (FeatureTable, Representation.FEATURE_TABLE),
    (SpatialObject, Representation.SPATIAL),
    (Window, Representation.WINDOW),
    (PointPattern, Representation.POINT_PATTERN),
    (PixelImage, Representation.PIXEL_IMAGE),
    (RasterGrid, Representation.RASTER_GRID),
)


def _representation(kind):
    """Look up a Representation by value or member, raising NotConvertibleError for unknown kinds."""
    try:
        return Representation(kind)
    except ValueError as exc:
        known = ", ".join(member.value for member in Representation)
        raise NotConvertibleError(f"Unknown representation '{kind}', expected one of: {known}") from exc


class FormatRegistry:
    """A table of conversion rules keyed by (source, target) representation."""

    def __init__(self, name=None):
        """Initialize an empty registry.

        Parameters:
        -----------
        name : str, optional
            Name of the registry
        """
        self.name = name if name else "FormatRegistry"
        self._rules = {}
        self._refusals = {}

    def register(self, source, target):
        """Decorator registering a conversion function for one pair.

        Parameters:
        -----------
        source : Representation or str
            Kind of the input value
        target : Representation or str
            Kind of the produced value

        Returns:
        --------
        decorator : callable
            Decorator returning the function unchanged
        """

        def decorator(function):
            self.add(source, target, function)
            return function

        return decorator

    def add(self, source, target, function):
        """Register ``function`` as the conversion rule from ``source`` to ``target``."""
        key = (_representation(source), _representation(target))
        self._refusals.pop(key, None)
        self._rules[key] = function

    def refuse(self, source, target, reason):
        """Record that ``source`` can never be converted to ``target``."""
        key = (_representation(source), _representation(target))
        self._rules.pop(key, None)
        self._refusals[key] = reason

    @staticmethod
    def kind_of(value):
        """Return the Representation of a value."""
        for value_type, kind in _KIND_BY_TYPE:
            if isinstance(value, value_type):
                return kind
        raise NotConvertibleError(f"Unknown spatial representation: {type(value).__name__}")

    def can_convert(self, source, target):
        source, target = _representation(source), _representation(target)
        return source == target or (source, target) in self._rules

    def pairs(self):
        """All registered (source, target) pairs."""
        return sorted(self._rules, key=lambda pair: (pair[0].value, pair[1].value))

    def convert(self, value, target, **kwargs):
        """Convert a value into another representation.

        Parameters:
        -----------
        value : FeatureTable, SpatialObject, Window, PointPattern, PixelImage or RasterGrid
            Value to convert; it is never modified
        target : Representation or str
            Kind to convert to
        **kwargs : dict
            Options passed to the conversion rule

        Returns:
        --------
        converted : object
            New value of the target kind
        """
        target = _representation(target)
        source = self.kind_of(value)
        if source == target:
            return value

        key = (source, target)
        if key in self._refusals:
            raise NotConvertibleError(f"Cannot convert {source.value} to {target.value}: {self._refusals[key]}")
        if key not in self._rules:
            raise NotConvertibleError(f"No conversion rule from {source.value} to {target.value}")

        log.debug("Converting %s to %s", source.value, target.value)
        return self._rules[key](value, **kwargs)

    def __str__(self):
        """String representation of the registry."""
        return f"{self.name} ({len(self._rules)} rules, {len(self._refusals)} refusals)"


default_registry = FormatRegistry(name="default")


def convert(value, target, registry=None, **kwargs):
    """Convert ``value`` to ``target`` with ``registry`` (the default registry when omitted)."""
    registry = registry if registry is not None else default_registry
    return registry.convert(value, target, **kwargs)
