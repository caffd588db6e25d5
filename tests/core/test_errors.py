# topmark:header:start
#
#   project      : mdfx
#   file         : test_errors.py
#   file_relpath : tests/core/test_errors.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for error descriptions, relocation and source positions."""

from __future__ import annotations

from mdfx.core.errors import MdfxError, UnclosedTagError, UnknownStyleError
from mdfx.core.location import Location, locate
from tests.conftest import parametrize


@parametrize(
    "text, offset, expected",
    [
        ("", 0, Location(1, 1)),
        ("abc", 2, Location(1, 3)),
        ("ab\ncd", 3, Location(2, 1)),
        ("ab\ncd\nef", 7, Location(3, 2)),
        ("ab", 99, Location(1, 3)),
        ("ab", -5, Location(1, 1)),
    ],
)
def test_locate(text: str, offset: int, expected: Location) -> None:
    """Offsets map to 1-based positions; out-of-range offsets are clamped."""
    assert locate(text, offset) == expected


def test_location_str() -> None:
    """Locations print as line and column."""
    assert str(Location(3, 7)) == "line 3, column 7"


def test_describe_variants() -> None:
    """Position and suggestions are appended when known."""
    error = MdfxError("boom", offset=4, suggestions=["a", "b"])
    assert error.describe() == "boom at offset 4; did you mean: a, b?"
    assert error.describe("ab\ncdef") == "boom at line 2, column 2; did you mean: a, b?"
    assert str(MdfxError("plain")) == "plain"


def test_relocate_builds_expansion_chain() -> None:
    """Each enclosing component is prepended to the context."""
    error = UnclosedTagError("mathbold", offset=10)
    error.relocate(5, "ui:inner")
    error.relocate(1, "ui:outer")

    assert error.offset == 1
    assert error.context == "ui:outer > ui:inner"
    assert error.describe() == (
        "unclosed tag '{{mathbold}}' (in expansion of ui:outer > ui:inner) at offset 1"
    )


def test_resolution_error_is_mdfx_error() -> None:
    """Namespace errors share the base class and carry suggestions."""
    error = UnknownStyleError("mathbolt", offset=0, suggestions=["mathbold"])
    assert isinstance(error, MdfxError)
    assert error.suggestions == ("mathbold",)
    assert "mathbolt" in error.message
