"""
Exception hierarchy.

Input problems derive from :class:`InvalidInputError` (a ``ValueError``) and are
deterministic: the same text always fails the same way.  Callers map them to
a client-facing rejection; :class:`AnalysisNotFoundError` maps to "not found".
"""

from __future__ import annotations

__all__ = [
    "TabstatsError",
    "InvalidInputError",
    "EmptyInputError",
    "MalformedRowError",
    "RejectedInputError",
    "AnalysisNotFoundError",
]


class TabstatsError(Exception):
    """Root of every error raised by tabstats."""


class InvalidInputError(TabstatsError, ValueError):
    """The supplied CSV text cannot be analysed."""


class EmptyInputError(InvalidInputError):
    """No header line could be found."""

    def __init__(self, message: str = "CSV data must contain a header row") -> None:
        super().__init__(message)


class MalformedRowError(InvalidInputError):
    """A data row has a different field count from the header.

    ``line_number`` counts non-empty lines from 1, the header being line 1.
    """

    def __init__(self, line_number: int, expected: int, actual: int) -> None:
        self.line_number = line_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Malformed CSV: line {line_number} has {actual} field(s), "
            f"expected {expected}"
        )


class RejectedInputError(InvalidInputError):
    """A pre-parse validation rule refused the input."""

    def __init__(self, message: str, *, rule: str | None = None) -> None:
        self.rule = rule
        super().__init__(message)


class AnalysisNotFoundError(TabstatsError, LookupError):
    """No stored analysis has the requested id."""

    def __init__(self, analysis_id: int) -> None:
        self.analysis_id = analysis_id
        super().__init__(f"Analysis not found with id: {analysis_id}")
