"""
Profiler package — the CSV analysis core.

Modules
-------
tabulizer
    Raw text → :class:`~tabstats.models.LogicalTable`, with structural validation.
column_profiler
    Per-column null / distinct counts, type inference and numeric summaries.

Both are pure functions: no I/O, no logging, no state kept between calls.
"""

from tabstats.profiler.column_profiler import basic_stats, profile
from tabstats.profiler.tabulizer import parse

__all__ = ["parse", "basic_stats", "profile"]
