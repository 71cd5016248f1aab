"""
DuckDB store — persistence for ingested analyses.

One embedded ``.db`` file (or ``":memory:"``) holding two related tables:

* **``data_analysis``** — one row per ingest: the original raw text plus the
  dataset-level counts and creation timestamp.
* **``column_statistics``** — one row per column of an analysis, linked by
  ``data_analysis_id`` and ordered by ``column_index``.

Only basic statistics are stored.  Column profiles are recomputed from
``original_data`` on request and never written here.

Deletes are an explicit two-step (children, then parent) inside a single
transaction.  ``column_statistics`` declares no ``REFERENCES`` clause: DuckDB
checks foreign keys eagerly and rejects a parent delete in the same
transaction that removed its children.

**Single-writer constraint**: DuckDB allows one writer per database file, so
share one :class:`AnalysisStore` per process.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import duckdb

from tabstats.models.stats import ColumnBasicStats, DatasetSummary

__all__ = ["AnalysisRecord", "AnalysisStore"]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# DDL
# ---------------------------------------------------------------------------

_CREATE_SEQUENCES = """
CREATE SEQUENCE IF NOT EXISTS data_analysis_id_seq START 1;
CREATE SEQUENCE IF NOT EXISTS column_statistics_id_seq START 1;
"""

_CREATE_DATA_ANALYSIS = """
CREATE TABLE IF NOT EXISTS data_analysis (
    id                BIGINT PRIMARY KEY,
    original_data     VARCHAR   NOT NULL,
    number_of_rows    INTEGER   NOT NULL,
    number_of_columns INTEGER   NOT NULL,
    total_characters  BIGINT    NOT NULL,
    created_at        TIMESTAMP NOT NULL    -- UTC
);
"""

_CREATE_COLUMN_STATISTICS = """
CREATE TABLE IF NOT EXISTS column_statistics (
    id               BIGINT PRIMARY KEY DEFAULT nextval('column_statistics_id_seq'),
    data_analysis_id BIGINT  NOT NULL,   -- data_analysis.id
    column_index     INTEGER NOT NULL,
    column_name      VARCHAR NOT NULL,
    null_count       INTEGER NOT NULL,
    unique_count     INTEGER NOT NULL
);
"""


def _to_db_timestamp(value: datetime) -> datetime:
    """Naive UTC datetime for a ``TIMESTAMP`` column."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_db_timestamp(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Stored record
# ---------------------------------------------------------------------------

@dataclass
class AnalysisRecord:
    """One persisted analysis: the raw text plus its basic statistics."""

    analysis_id: int
    original_data: str
    number_of_rows: int
    number_of_columns: int
    total_characters: int
    created_at: datetime
    column_statistics: list[ColumnBasicStats] = field(default_factory=list)

    def to_summary(self) -> DatasetSummary:
        """Rebuild the summary exactly as it was returned on ingest."""
        return DatasetSummary(
            number_of_rows=self.number_of_rows,
            number_of_columns=self.number_of_columns,
            total_characters=self.total_characters,
            created_at=self.created_at,
            column_statistics=list(self.column_statistics),
            analysis_id=self.analysis_id,
        )


# ---------------------------------------------------------------------------
# AnalysisStore
# ---------------------------------------------------------------------------

class AnalysisStore:
    """Embedded DuckDB store for analyses and their column statistics.

    Parameters
    ----------
    db_path : str | Path
        Path to the ``.db`` file.  Use ``":memory:"`` for testing.
    """

    def __init__(self, db_path: str | Path = "tabstats.db") -> None:
        self._db_path = str(db_path)
        self._con: duckdb.DuckDBPyConnection = duckdb.connect(self._db_path)

    # ==================================================================
    # Schema management
    # ==================================================================

    def init_tables(self, *, recreate: bool = False) -> None:
        """Create sequences and tables.

        If *recreate* is True, existing tables and sequences are dropped first.
        """
        if recreate:
            self._con.execute("DROP TABLE IF EXISTS column_statistics;")
            self._con.execute("DROP TABLE IF EXISTS data_analysis;")
            self._con.execute("DROP SEQUENCE IF EXISTS column_statistics_id_seq;")
            self._con.execute("DROP SEQUENCE IF EXISTS data_analysis_id_seq;")
            logger.info("Dropped existing DuckDB tables")

        self._con.execute(_CREATE_SEQUENCES)
        self._con.execute(_CREATE_DATA_ANALYSIS)
        self._con.execute(_CREATE_COLUMN_STATISTICS)
        logger.info("DuckDB tables ready at %s", self._db_path)

    # ==================================================================
    # Writes
    # ==================================================================

    def save_analysis(self, raw_text: str, summary: DatasetSummary) -> int:
        """Persist *raw_text* with the counts and column stats of *summary*.

        Parent and children are written in one transaction.

        Returns
        -------
        int
            The new analysis id.
        """
        child_rows = []

        self._con.execute("BEGIN TRANSACTION;")
        try:
            (analysis_id,) = self._con.execute(
                "SELECT nextval('data_analysis_id_seq')"
            ).fetchone()
            self._con.execute(
                """INSERT INTO data_analysis
                   (id, original_data, number_of_rows, number_of_columns,
                    total_characters, created_at)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                [
                    analysis_id,
                    raw_text,
                    summary.number_of_rows,
                    summary.number_of_columns,
                    summary.total_characters,
                    _to_db_timestamp(summary.created_at),
                ],
            )
            for index, stats in enumerate(summary.column_statistics):
                child_rows.append((
                    analysis_id,
                    index,
                    stats.column_name,
                    stats.null_count,
                    stats.unique_count,
                ))
            if child_rows:
                self._con.executemany(
                    """INSERT INTO column_statistics
                       (data_analysis_id, column_index, column_name,
                        null_count, unique_count)
                       VALUES (?, ?, ?, ?, ?)""",
                    child_rows,
                )
            self._con.execute("COMMIT;")
        except Exception:
            self._con.execute("ROLLBACK;")
            raise

        logger.info(
            "Stored analysis %d (%d rows, %d column stats)",
            analysis_id, summary.number_of_rows, len(child_rows),
        )
        return int(analysis_id)

    def delete_analysis(self, analysis_id: int) -> bool:
        """Delete an analysis and its column statistics.

        Returns ``False`` if no analysis has *analysis_id*.
        """
        exists = self._con.execute(
            "SELECT 1 FROM data_analysis WHERE id = ?", [analysis_id],
        ).fetchone()
        if exists is None:
            return False

        self._con.execute("BEGIN TRANSACTION;")
        try:
            self._con.execute(
                "DELETE FROM column_statistics WHERE data_analysis_id = ?",
                [analysis_id],
            )
            self._con.execute(
                "DELETE FROM data_analysis WHERE id = ?", [analysis_id],
            )
            self._con.execute("COMMIT;")
        except Exception:
            self._con.execute("ROLLBACK;")
            raise

        logger.info("Deleted analysis %d", analysis_id)
        return True

    # ==================================================================
    # Reads
    # ==================================================================

    def get_analysis(self, analysis_id: int) -> AnalysisRecord | None:
        """Return the stored analysis, or ``None`` if it does not exist."""
        row = self._con.execute(
            "SELECT id, original_data, number_of_rows, number_of_columns,"
            "       total_characters, created_at"
            "  FROM data_analysis WHERE id = ?",
            [analysis_id],
        ).fetchone()
        if row is None:
            return None

        stats = self._con.execute(
            "SELECT column_name, null_count, unique_count"
            "  FROM column_statistics"
            " WHERE data_analysis_id = ?"
            " ORDER BY column_index",
            [analysis_id],
        ).fetchall()
        return self._make_record(row, [ColumnBasicStats(*s) for s in stats])

    def list_analyses(self) -> list[AnalysisRecord]:
        """Return every stored analysis, oldest id first."""
        rows = self._con.execute(
            "SELECT id, original_data, number_of_rows, number_of_columns,"
            "       total_characters, created_at"
            "  FROM data_analysis ORDER BY id"
        ).fetchall()

        by_parent: dict[int, list[ColumnBasicStats]] = defaultdict(list)
        for parent_id, name, nulls, uniques in self._con.execute(
            "SELECT data_analysis_id, column_name, null_count, unique_count"
            "  FROM column_statistics"
            " ORDER BY data_analysis_id, column_index"
        ).fetchall():
            by_parent[parent_id].append(ColumnBasicStats(name, nulls, uniques))

        return [self._make_record(row, by_parent.get(row[0], [])) for row in rows]

    def close(self) -> None:
        """Close the DuckDB connection."""
        self._con.close()

    # ==================================================================
    # Internals
    # ==================================================================

    @staticmethod
    def _make_record(row: tuple, stats: list[ColumnBasicStats]) -> AnalysisRecord:
        analysis_id, original_data, n_rows, n_cols, n_chars, created_at = row
        return AnalysisRecord(
            analysis_id=int(analysis_id),
            original_data=original_data,
            number_of_rows=n_rows,
            number_of_columns=n_cols,
            total_characters=n_chars,
            created_at=_from_db_timestamp(created_at),
            column_statistics=stats,
        )
