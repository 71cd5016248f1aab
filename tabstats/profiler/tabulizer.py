"""
Tabulizer — split raw CSV text into a :class:`LogicalTable`.

Dialect
-------
* Lines end with any universal line break (``\\r\\n``, ``\\n``, ``\\r``,
  ``\\x0b``, ``\\x0c``, ``\\x85``, ``\\u2028``, ``\\u2029``).
* Lines that are exactly empty are skipped.  ``,,,`` or a run of spaces is a
  real line.
* Cells are separated by a single delimiter character with no quoting.
  Leading and trailing empty fields are kept, and cells are never trimmed.

The whole document is validated before anything is returned: one ragged row
fails the parse.
"""

from __future__ import annotations

import re

from tabstats.errors import EmptyInputError, MalformedRowError
from tabstats.models.table import LogicalTable

__all__ = ["parse", "split_lines", "split_fields"]

_LINE_BREAK = re.compile("\r\n|[\n\x0b\x0c\r\x85\u2028\u2029]")


def split_lines(raw_text: str) -> list[str]:
    """Return the non-empty lines of *raw_text* in document order."""
    return [line for line in _LINE_BREAK.split(raw_text) if line]


def split_fields(line: str, delimiter: str = ",") -> tuple[str, ...]:
    """Split one line on *delimiter*, keeping empty leading / trailing fields."""
    return tuple(line.split(delimiter))


def parse(raw_text: str, *, delimiter: str = ",") -> LogicalTable:
    """Parse *raw_text* into a rectangular :class:`LogicalTable`.

    Raises
    ------
    EmptyInputError
        If the text holds no non-empty line to use as a header.
    MalformedRowError
        If any data row's field count differs from the header's.
    """
    if not delimiter:
        raise ValueError("delimiter must be a non-empty string")

    lines = split_lines(raw_text)
    if not lines:
        raise EmptyInputError()

    header = split_fields(lines[0], delimiter)
    width = len(header)

    rows: list[tuple[str, ...]] = []
    for line_number, line in enumerate(lines[1:], start=2):
        cells = split_fields(line, delimiter)
        if len(cells) != width:
            raise MalformedRowError(line_number, expected=width, actual=len(cells))
        rows.append(cells)

    return LogicalTable(columns=header, rows=tuple(rows))
