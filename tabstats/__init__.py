"""
tabstats — CSV statistics and column profiling.

Parses comma-separated text into a rectangular table, then reports row,
column and character counts, per-column null and distinct counts and, on
demand, inferred column types with min / max / mean for numeric columns.

Quick start::

    from tabstats import analyze_basic, analyze_profile
    summary = analyze_basic("driver,number\\nMax,1\\nLewis,\\n")
    profiles = analyze_profile("a,b\\n1,2.5\\n")
"""

from tabstats.analysis import analyze_basic, analyze_profile
from tabstats.api import AnalysisService, init_service
from tabstats.errors import (
    AnalysisNotFoundError,
    EmptyInputError,
    InvalidInputError,
    MalformedRowError,
    RejectedInputError,
    TabstatsError,
)

__all__ = [
    "analyze_basic",
    "analyze_profile",
    "AnalysisService",
    "init_service",
    "TabstatsError",
    "InvalidInputError",
    "EmptyInputError",
    "MalformedRowError",
    "RejectedInputError",
    "AnalysisNotFoundError",
]
__version__ = "1.0.0"
