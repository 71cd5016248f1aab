"""
Pre-parse input checks applied by the service layer on ingest.

A validator is any callable taking the raw text and raising
:class:`~tabstats.errors.RejectedInputError` to refuse it.  The parser knows
nothing about these rules; they run before it sees the text.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING

from tabstats.errors import RejectedInputError

if TYPE_CHECKING:
    from tabstats.config import TabstatsConfig

__all__ = [
    "Validator",
    "ForbiddenPhraseValidator",
    "default_validators",
    "run_validators",
]

Validator = Callable[[str], None]


class ForbiddenPhraseValidator:
    """Reject text that contains any of *phrases* verbatim (case-sensitive)."""

    def __init__(self, phrases: Iterable[str]) -> None:
        self.phrases = tuple(p for p in phrases if p)

    def __call__(self, raw_text: str) -> None:
        for phrase in self.phrases:
            if phrase in raw_text:
                raise RejectedInputError(
                    f"CSV data containing '{phrase}' is not allowed",
                    rule="forbidden_phrase",
                )

    def __repr__(self) -> str:
        return f"ForbiddenPhraseValidator({list(self.phrases)!r})"


def default_validators(config: TabstatsConfig) -> list[Validator]:
    """Build the ingest validator chain described by *config*."""
    validators: list[Validator] = []
    if config.forbidden_phrases:
        validators.append(ForbiddenPhraseValidator(config.forbidden_phrases))
    return validators


def run_validators(raw_text: str, validators: Sequence[Validator]) -> None:
    """Apply *validators* in order; the first rejection propagates."""
    for validator in validators:
        validator(raw_text)
