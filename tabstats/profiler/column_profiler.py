"""
Column profiler — per-column statistics over a :class:`LogicalTable`.

Two passes share the same null / distinct counting:

* :func:`basic_stats` — null count and distinct non-null count per column.
  This is what ingest returns and what the store persists.
* :func:`profile` — adds type inference and, for numeric columns, min / max /
  mean.  Always recomputed from the table; nothing is cached.

Type inference
--------------
Every non-empty cell is classified on its own, then the column is resolved
in this order:

1. ``BOOLEAN`` — every value is ``true`` / ``false`` in any letter case.
2. ``DECIMAL`` / ``INTEGER`` — every value matches the integer pattern
   ``[-+]?[0-9]+`` or the decimal pattern ``[-+]?[0-9]*\\.[0-9]+``.  The
   column is ``DECIMAL`` when at least one value contains a literal ``.``
   (``"+5"`` and ``"5"`` never do, whatever they parse to).
3. ``STRING`` — anything else, including a column with no values at all
   and a numeric column holding a value too large for a float.
"""

from __future__ import annotations

import math
import re
from collections.abc import Sequence
from concurrent import futures

import numpy as np

from tabstats.models.stats import ColumnBasicStats, ColumnProfile, InferredType
from tabstats.models.table import LogicalTable

__all__ = [
    "basic_stats",
    "profile",
    "profile_column",
    "infer_type",
    "is_boolean",
    "is_numeric",
    "compute_numeric_stats",
]

_BOOLEAN_LITERALS = frozenset({"true", "false"})
_INTEGER_PATTERN = re.compile(r"[-+]?[0-9]+")
_DECIMAL_PATTERN = re.compile(r"[-+]?[0-9]*\.[0-9]+")


# ---------------------------------------------------------------------------
# Per-value classification
# ---------------------------------------------------------------------------

def is_boolean(value: str) -> bool:
    """``True`` if *value* is ``true`` or ``false`` ignoring case."""
    return value.lower() in _BOOLEAN_LITERALS


def is_numeric(value: str) -> bool:
    """``True`` if *value* matches the integer or the decimal pattern."""
    return bool(_INTEGER_PATTERN.fullmatch(value) or _DECIMAL_PATTERN.fullmatch(value))


def infer_type(values: Sequence[str]) -> InferredType:
    """Resolve the type of a column from its non-empty *values*."""
    if not values:
        return InferredType.STRING
    if all(is_boolean(v) for v in values):
        return InferredType.BOOLEAN
    if all(is_numeric(v) for v in values):
        if any("." in v for v in values):
            return InferredType.DECIMAL
        return InferredType.INTEGER
    return InferredType.STRING


# ---------------------------------------------------------------------------
# Numeric summary
# ---------------------------------------------------------------------------

def compute_numeric_stats(values: Sequence[str]) -> tuple[float, float, float] | None:
    """Return ``(min, max, mean)`` for numeric strings.

    *values* must already satisfy :func:`is_numeric`.  The mean is
    ``sum / count``, held inside ``[min, max]`` against float rounding.
    Returns ``None`` when *values* is empty or any value overflows a float.
    """
    if not values:
        return None

    arr = np.fromiter((float(v) for v in values), dtype=np.float64, count=len(values))
    if not np.isfinite(arr).all():
        return None
    lo = float(arr.min())
    hi = float(arr.max())
    with np.errstate(over="ignore"):
        mean = float(arr.sum()) / arr.size
    if not math.isfinite(mean):
        mean = float((arr / arr.size).sum())
    return lo, hi, min(max(mean, lo), hi)


# ---------------------------------------------------------------------------
# Column level
# ---------------------------------------------------------------------------

def _split_nulls(values: Sequence[str]) -> tuple[int, list[str]]:
    non_null = [v for v in values if v != ""]
    return len(values) - len(non_null), non_null


def profile_column(column_name: str, values: Sequence[str]) -> ColumnProfile:
    """Profile one column given all of its cells, nulls included."""
    null_count, non_null = _split_nulls(values)
    inferred = infer_type(non_null)

    lo = hi = mean = None
    if inferred.is_numeric():
        stats = compute_numeric_stats(non_null)
        if stats is None:
            # beyond float range
            inferred = InferredType.STRING
        else:
            lo, hi, mean = stats

    return ColumnProfile(
        column_name=column_name,
        inferred_type=inferred,
        null_count=null_count,
        unique_count=len(set(non_null)),
        min=lo,
        max=hi,
        mean=mean,
    )


# ---------------------------------------------------------------------------
# Table level
# ---------------------------------------------------------------------------

def basic_stats(table: LogicalTable) -> list[ColumnBasicStats]:
    """Null and distinct counts for every column, in header order."""
    result: list[ColumnBasicStats] = []
    for index, name in enumerate(table.columns):
        null_count, non_null = _split_nulls(table.column_values(index))
        result.append(ColumnBasicStats(
            column_name=name,
            null_count=null_count,
            unique_count=len(set(non_null)),
        ))
    return result


def profile(table: LogicalTable, *, max_workers: int = 1) -> list[ColumnProfile]:
    """Type-aware profile for every column, in header order.

    With ``max_workers > 1`` the columns are profiled in a process pool.
    Each column is independent, so the output is the same either way.
    """
    columns = [table.column_values(i) for i in range(table.number_of_columns)]

    if max_workers > 1 and len(columns) > 1:
        with futures.ProcessPoolExecutor(max_workers=max_workers) as executor:
            return list(executor.map(profile_column, table.columns, columns))

    return [profile_column(name, values) for name, values in zip(table.columns, columns)]
