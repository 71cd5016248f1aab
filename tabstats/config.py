"""
tabstats configuration — every tunable knob in one place.

Override via ``TabstatsConfig(duckdb_path=":memory:", ...)`` or build one from
the environment with :meth:`TabstatsConfig.from_env`.

Environment mapping
-------------------
- ``TABSTATS_DB_PATH``           → duckdb_path
- ``TABSTATS_FORBIDDEN_PHRASES`` → forbidden_phrases (``|``-separated, empty disables)
- ``TABSTATS_PROFILE_WORKERS``   → profile_max_workers
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

__all__ = ["TabstatsConfig"]

_PHRASE_SEPARATOR = "|"


@dataclass(frozen=True)
class TabstatsConfig:
    """Immutable configuration for the analysis core, store and CLI."""

    # ── Tabulizer ────────────────────────────────────────────────────
    delimiter: str = ","
    """Cell separator.  Quoting and escaping are not supported."""

    # ── Ingest validation ────────────────────────────────────────────
    forbidden_phrases: tuple[str, ...] = ("Sonny Hayes",)
    """Input containing any of these literals is rejected before parsing."""

    # ── Profiler ─────────────────────────────────────────────────────
    profile_max_workers: int = 1
    """Worker processes for column profiling.  ``1`` profiles inline."""

    # ── DuckDB ───────────────────────────────────────────────────────
    duckdb_path: str = "tabstats.db"
    """Path of the analysis database.  ``":memory:"`` for throwaway runs."""

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TabstatsConfig:
        """Build a config from ``TABSTATS_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        defaults = cls()

        phrases = defaults.forbidden_phrases
        raw_phrases = env.get("TABSTATS_FORBIDDEN_PHRASES")
        if raw_phrases is not None:
            phrases = tuple(p for p in raw_phrases.split(_PHRASE_SEPARATOR) if p)

        workers = defaults.profile_max_workers
        raw_workers = env.get("TABSTATS_PROFILE_WORKERS")
        if raw_workers:
            workers = int(raw_workers)
            if workers < 1:
                raise ValueError(f"TABSTATS_PROFILE_WORKERS must be >= 1, got {workers}")

        return cls(
            forbidden_phrases=phrases,
            profile_max_workers=workers,
            duckdb_path=env.get("TABSTATS_DB_PATH") or defaults.duckdb_path,
        )
