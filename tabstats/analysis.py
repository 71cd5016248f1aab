"""
Analysis entry points over raw CSV text.

These are the only functions the service layer needs from the core:

* :func:`analyze_basic` — counts returned on ingest and persisted.
* :func:`analyze_profile` — type-aware profile, recomputed on every call.

Both re-parse the text each time; the parsed table is discarded once the
statistics are derived.
"""

from __future__ import annotations

from datetime import datetime, timezone

from tabstats.models.stats import ColumnProfile, DatasetSummary
from tabstats.profiler.column_profiler import basic_stats, profile
from tabstats.profiler.tabulizer import parse

__all__ = ["analyze_basic", "analyze_profile"]


def analyze_basic(
    raw_text: str,
    *,
    delimiter: str = ",",
    now: datetime | None = None,
) -> DatasetSummary:
    """Parse *raw_text* and return its :class:`DatasetSummary`.

    Parameters
    ----------
    now : datetime, optional
        Creation timestamp to stamp on the summary.  Defaults to the current
        UTC time.

    Raises
    ------
    EmptyInputError, MalformedRowError
        Propagated unchanged from :func:`~tabstats.profiler.tabulizer.parse`.
    """
    table = parse(raw_text, delimiter=delimiter)
    return DatasetSummary(
        number_of_rows=table.number_of_rows,
        number_of_columns=table.number_of_columns,
        total_characters=len(raw_text),
        created_at=now or datetime.now(timezone.utc),
        column_statistics=basic_stats(table),
    )


def analyze_profile(
    raw_text: str,
    *,
    delimiter: str = ",",
    max_workers: int = 1,
) -> list[ColumnProfile]:
    """Parse *raw_text* and return one :class:`ColumnProfile` per column."""
    table = parse(raw_text, delimiter=delimiter)
    return profile(table, max_workers=max_workers)
