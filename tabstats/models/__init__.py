"""Core data-model classes used throughout tabstats."""

from tabstats.models.stats import (
    ColumnBasicStats,
    ColumnProfile,
    DatasetSummary,
    InferredType,
)
from tabstats.models.table import LogicalTable

__all__ = [
    "LogicalTable",
    "InferredType",
    "ColumnBasicStats",
    "ColumnProfile",
    "DatasetSummary",
]
