# -*- coding: utf-8 -*-
"""Attribute filters: select the rows of a feature table satisfying a condition on its attribute columns.

Conditions are either callables or string expressions. String expressions are evaluated with numexpr for speed and
fall back to pandas' python engine for columns numexpr cannot handle (strings, objects). Column aggregates such as
``median(Income)`` are resolved to their value before evaluation, so ``"Income < median(Income)"`` works as written.
No geometry is touched.
"""

import logging
import re

import numexpr as ne
import numpy as np
import pandas as pd

from ..core.exceptions import SchemaError
from ..core.table import FeatureTable, attributes_only

log = logging.getLogger(__name__)

AGGREGATES = ("median", "mean", "min", "max", "sum", "std")

_AGGREGATE_PATTERN = re.compile(r"\b(" + "|".join(AGGREGATES) + r")\(\s*([A-Za-z_][A-Za-z0-9_]*)\s*\)")


def _resolve_aggregates(condition, attrs):
    """Replace ``agg(column)`` calls by the aggregate's value."""

    def substitute(match):
        function, column = match.groups()
        if column not in attrs.columns:
            raise SchemaError(f"Column '{column}' not found in table")
        value = float(getattr(attrs[column], function)())
        if not np.isfinite(value):
            raise SchemaError(f"{function}({column}) is {value}; the column has no usable values")
        return repr(value)

    return _AGGREGATE_PATTERN.sub(substitute, condition)


def evaluate_condition(condition, attrs):
    """Evaluate a string condition over an attribute frame.

    Parameters:
    -----------
    condition : str
        Expression such as "Income < 50000" or "(kind == 'forest') & (area > 10)"
    attrs : pandas.DataFrame
        Attribute rows

    Returns:
    --------
    mask : numpy.ndarray
        Boolean mask, one value per row
    """
    condition = _resolve_aggregates(condition, attrs)
    local_dict = {col: attrs[col].to_numpy() for col in attrs.columns}

    try:
        mask = ne.evaluate(condition, local_dict=local_dict, global_dict={})
    except KeyError as exc:
        raise SchemaError(f"Unknown column in condition '{condition}': {exc}") from exc
    except (TypeError, ValueError, NotImplementedError, SyntaxError) as exc:
        log.debug("numexpr cannot evaluate '%s' (%s), using pandas", condition, exc)
        try:
            mask = attrs.eval(condition, engine="python")
        except pd.errors.UndefinedVariableError as undefined:
            raise SchemaError(f"Unknown column in condition '{condition}': {undefined}") from undefined

    return np.asarray(pd.Series(mask, index=attrs.index).fillna(False), dtype=bool)


def subset(table, predicate, name=None):
    """Select the rows of a table satisfying a predicate.

    Parameters:
    -----------
    table : FeatureTable
        Table to filter
    predicate : str or callable
        String condition over attribute columns, or a callable receiving the attribute DataFrame and returning a
        boolean mask
    name : str, optional
        Name for the result table

    Returns:
    --------
    result : FeatureTable
        Matching rows in their original order, with the original schema
    """
    attrs = attributes_only(table)

    if isinstance(predicate, str):
        mask = evaluate_condition(predicate, attrs)
    elif callable(predicate):
        try:
            result = predicate(attrs)
        except KeyError as exc:
            raise SchemaError(f"Predicate refers to a missing column: {exc}") from exc
        mask = np.asarray(pd.Series(result, index=attrs.index).fillna(False), dtype=bool)
    else:
        raise TypeError(f"Predicate must be a string or a callable, got {type(predicate)}")

    if mask.shape != (len(table),):
        raise SchemaError(f"Predicate returned {mask.shape} values for {len(table)} rows")

    log.debug("Subset kept %d of %d rows", int(mask.sum()), len(table))
    return FeatureTable(table.to_geodataframe()[mask], name=name if name else table.name)
