"""
Statistics containers returned by the profiler and the service layer.

``ColumnBasicStats`` is what ingest computes and the store persists;
``ColumnProfile`` is the richer, type-aware view recomputed on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

__all__ = [
    "InferredType",
    "ColumnBasicStats",
    "ColumnProfile",
    "DatasetSummary",
]


class InferredType(Enum):
    """Column type derived from the shape of every non-null value."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    DECIMAL = "DECIMAL"
    BOOLEAN = "BOOLEAN"

    def is_numeric(self) -> bool:
        """Return ``True`` for types that carry a min / max / mean summary."""
        return self in (InferredType.INTEGER, InferredType.DECIMAL)


@dataclass(frozen=True)
class ColumnBasicStats:
    """Null and distinct-value counts for one column."""

    column_name: str
    null_count: int = 0
    unique_count: int = 0
    """Distinct non-empty values, compared by exact string equality."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_name": self.column_name,
            "null_count": self.null_count,
            "unique_count": self.unique_count,
        }


@dataclass(frozen=True)
class ColumnProfile:
    """Type-aware profile of one column.

    ``min``, ``max`` and ``mean`` are set only for INTEGER / DECIMAL columns
    with at least one value; otherwise all three are ``None``.
    """

    column_name: str
    inferred_type: InferredType
    null_count: int = 0
    unique_count: int = 0
    min: float | None = None
    max: float | None = None
    mean: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "column_name": self.column_name,
            "inferred_type": self.inferred_type.value,
            "null_count": self.null_count,
            "unique_count": self.unique_count,
            "min": self.min,
            "max": self.max,
            "mean": self.mean,
        }


@dataclass
class DatasetSummary:
    """Dataset-level counts plus per-column basic statistics."""

    number_of_rows: int
    """Data rows only; the header is not counted."""

    number_of_columns: int
    total_characters: int
    """Length of the original raw text, line breaks included."""

    created_at: datetime
    column_statistics: list[ColumnBasicStats] = field(default_factory=list)

    analysis_id: int | None = None
    """Assigned by the store once the analysis is persisted."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "analysis_id": self.analysis_id,
            "number_of_rows": self.number_of_rows,
            "number_of_columns": self.number_of_columns,
            "total_characters": self.total_characters,
            "created_at": self.created_at.isoformat(),
            "column_statistics": [s.to_dict() for s in self.column_statistics],
        }
