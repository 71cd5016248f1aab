"""
Service layer — ingest, retrieve, profile and delete analyses.

``AnalysisService`` glues the pure analysis core to the DuckDB store:

* ``ingest(raw_text)``            — validate, analyse, persist, return summary
* ``get_analysis(id)``            — stored summary, as returned on ingest
* ``get_column_profiles(id)``     — profile recomputed from the stored text
* ``delete_analysis(id)``         — remove the analysis and its column stats

Errors from the core propagate unchanged; unknown ids raise
:class:`~tabstats.errors.AnalysisNotFoundError`.  Transport concerns (status
codes, serialisation) belong to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from tabstats.analysis import analyze_basic, analyze_profile
from tabstats.config import TabstatsConfig
from tabstats.errors import AnalysisNotFoundError, InvalidInputError
from tabstats.models.stats import ColumnProfile, DatasetSummary
from tabstats.store.duck_store import AnalysisRecord, AnalysisStore
from tabstats.validation import Validator, default_validators, run_validators

__all__ = ["AnalysisService", "init_service"]

logger = logging.getLogger(__name__)


class AnalysisService:
    """Analyse CSV text and manage the stored results.

    Parameters
    ----------
    store : AnalysisStore
        Initialised store (tables created).
    config : TabstatsConfig | None
        If ``None``, a default :class:`TabstatsConfig` is used.
    validators : Sequence[Validator] | None
        Pre-parse checks run on ingest.  ``None`` builds them from *config*;
        pass ``[]`` to disable validation.
    """

    def __init__(
        self,
        store: AnalysisStore,
        config: TabstatsConfig | None = None,
        validators: Sequence[Validator] | None = None,
    ) -> None:
        self._store = store
        self._config = config or TabstatsConfig()
        if validators is None:
            validators = default_validators(self._config)
        self._validators = list(validators)

    @property
    def store(self) -> AnalysisStore:
        return self._store

    # ------------------------------------------------------------------
    # Ingest
    # ------------------------------------------------------------------

    def ingest(self, raw_text: str) -> DatasetSummary:
        """Validate and analyse *raw_text*, then persist it.

        Nothing is stored when validation or parsing fails.
        """
        try:
            run_validators(raw_text, self._validators)
            summary = analyze_basic(raw_text, delimiter=self._config.delimiter)
        except InvalidInputError as exc:
            logger.warning("Rejected ingest: %s", exc)
            raise

        summary.analysis_id = self._store.save_analysis(raw_text, summary)
        return summary

    # ------------------------------------------------------------------
    # Retrieval
    # ------------------------------------------------------------------

    def get_analysis(self, analysis_id: int) -> DatasetSummary:
        """Return the stored summary for *analysis_id*."""
        return self._require(analysis_id).to_summary()

    def list_analyses(self) -> list[DatasetSummary]:
        """Summaries of every stored analysis, oldest first."""
        return [record.to_summary() for record in self._store.list_analyses()]

    def get_column_profiles(self, analysis_id: int) -> list[ColumnProfile]:
        """Profile the stored raw text of *analysis_id*.

        Recomputed on every call; profiles are never persisted.
        """
        record = self._require(analysis_id)
        return analyze_profile(
            record.original_data,
            delimiter=self._config.delimiter,
            max_workers=self._config.profile_max_workers,
        )

    # ------------------------------------------------------------------
    # Deletion
    # ------------------------------------------------------------------

    def delete_analysis(self, analysis_id: int) -> None:
        """Delete *analysis_id* and its column statistics."""
        if not self._store.delete_analysis(analysis_id):
            raise AnalysisNotFoundError(analysis_id)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require(self, analysis_id: int) -> AnalysisRecord:
        record = self._store.get_analysis(analysis_id)
        if record is None:
            raise AnalysisNotFoundError(analysis_id)
        return record


def init_service(
    db_path: str | Path | None = None,
    config: TabstatsConfig | None = None,
) -> AnalysisService:
    """Open the DuckDB store and return a ready :class:`AnalysisService`.

    Parameters
    ----------
    db_path : str | Path | None
        Overrides ``config.duckdb_path`` when given.
    config : TabstatsConfig | None
        If ``None``, a default :class:`TabstatsConfig` is created.
    """
    if config is None:
        config = TabstatsConfig()

    store = AnalysisStore(db_path if db_path is not None else config.duckdb_path)
    store.init_tables()
    return AnalysisService(store, config)
