"""
LogicalTable — the parsed, rectangular view of a CSV document.

Built by :func:`tabstats.profiler.tabulizer.parse` and never mutated.  Cells
are raw strings; the empty string denotes a null cell.
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["LogicalTable"]


@dataclass(frozen=True, slots=True)
class LogicalTable:
    """Ordered column names plus ordered rows of ordered cell values."""

    columns: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()

    def __post_init__(self) -> None:
        width = len(self.columns)
        if width == 0:
            raise ValueError("LogicalTable needs at least one column")
        for row in self.rows:
            if len(row) != width:
                raise ValueError(
                    f"Row has {len(row)} cell(s), table has {width} column(s)"
                )

    @property
    def number_of_columns(self) -> int:
        return len(self.columns)

    @property
    def number_of_rows(self) -> int:
        return len(self.rows)

    def column_values(self, index: int) -> tuple[str, ...]:
        """Return every cell of column *index*, top to bottom."""
        return tuple(row[index] for row in self.rows)
