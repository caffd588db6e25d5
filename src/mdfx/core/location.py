# topmark:header:start
#
#   project      : mdfx
#   file         : location.py
#   file_relpath : src/mdfx/core/location.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Offset to line/column conversion."""

from __future__ import annotations

from typing import NamedTuple


class Location(NamedTuple):
    """A 1-based line/column position in a source text."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


def locate(text: str, offset: int) -> Location:
    """Return the 1-based line and column of ``offset`` in ``text``.

    Offsets past the end of ``text`` are clamped to the end.
    """
    offset = max(0, min(offset, len(text)))
    line_start = text.rfind("\n", 0, offset) + 1
    line = text.count("\n", 0, offset) + 1
    return Location(line=line, column=offset - line_start + 1)
