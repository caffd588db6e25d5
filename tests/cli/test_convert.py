# topmark:header:start
#
#   project      : mdfx
#   file         : test_convert.py
#   file_relpath : tests/cli/test_convert.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""CLI tests for `mdfx convert`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdfx.cli.commands.convert import convert_text
from mdfx.cli.errors import MdfxUsageError
from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli
from tests.conftest import mark_cli, parametrize

if TYPE_CHECKING:
    from click.testing import Result

    from mdfx.registry.registry import Registry


def bold(text: str) -> str:
    """Mathematical bold for ASCII capitals; other characters unchanged."""
    return "".join(chr(0x1D400 + ord(ch) - ord("A")) if "A" <= ch <= "Z" else ch for ch in text)


@parametrize(
    "style, kwargs, expected",
    [
        ("mathbold", {}, bold("AB")),
        ("mb", {}, bold("AB")),
        ("mathbold", {"separator": "dot"}, bold("A") + "·" + bold("B")),
        ("mathbold", {"separator": "middot"}, bold("A") + "·" + bold("B")),
        ("mathbold", {"separator": "-"}, bold("A") + "-" + bold("B")),
        ("mathbold", {"spacing": 2}, bold("A") + "  " + bold("B")),
        ("mathbold", {"separator": "arrow", "spacing": 3}, bold("A") + "→" + bold("B")),
    ],
)
def test_convert_text(registry: Registry, style: str, kwargs: dict[str, object], expected: str) -> None:
    """Separators win over spacing; aliases are accepted."""
    assert convert_text(registry, "AB", style, **kwargs) == expected  # type: ignore[arg-type]


@parametrize("separator", [":", "/", "dott"])
def test_convert_rejects_bad_separator(registry: Registry, separator: str) -> None:
    """Reserved characters and unknown names are usage errors."""
    try:
        convert_text(registry, "AB", "mathbold", separator=separator)
    except MdfxUsageError as exc:
        assert f"Unknown separator '{separator}'" in exc.format_message()
    else:
        raise AssertionError("expected MdfxUsageError")


@mark_cli
def test_convert_joins_words() -> None:
    """Arguments are joined with single spaces."""
    result: Result = run_cli(["--no-config", "convert", "-s", "mathbold", "HELLO", "WORLD"])
    assert_SUCCESS(result)
    assert result.stdout == bold("HELLO WORLD") + "\n"


@mark_cli
def test_convert_with_separator_option() -> None:
    """``--separator`` accepts separator names."""
    result: Result = run_cli(["--no-config", "convert", "--style", "bold", "--separator", "dot", "MDFX"])
    assert_SUCCESS(result)
    assert result.stdout == "𝐌·𝐃·𝐅·𝐗\n"


@mark_cli
def test_convert_unknown_style_suggests() -> None:
    """Typos get a suggestion and a usage error."""
    result: Result = run_cli(["--no-config", "convert", "-s", "mathbolt", "x"])
    assert_USAGE_ERROR(result)
    assert "Did you mean: mathbold" in result.stderr


@mark_cli
def test_convert_requires_text() -> None:
    """TEXT is required."""
    result: Result = run_cli(["--no-config", "convert", "-s", "mathbold"])
    assert result.exit_code == 2
