"""Storage backend for ingested analyses — DuckDB."""

from tabstats.store.duck_store import AnalysisRecord, AnalysisStore

__all__ = ["AnalysisRecord", "AnalysisStore"]
