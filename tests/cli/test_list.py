# topmark:header:start
#
#   project      : mdfx
#   file         : test_list.py
#   file_relpath : tests/cli/test_list.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""CLI tests for `mdfx list`."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdfx.cli.commands.list_cmd import ListKind, format_definitions
from tests.cli.conftest import assert_SUCCESS, run_cli, run_cli_in
from tests.conftest import mark_cli

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result

    from mdfx.registry.registry import Registry


def _line_for(lines: list[str], ident: str) -> str:
    return next(line for line in lines if line.split()[0] == ident)


def test_format_styles_with_aliases(registry: Registry) -> None:
    """Each entry shows its id, its aliases and its name."""
    line = _line_for(format_definitions(registry, ListKind.STYLES, samples=False), "mathbold")
    assert line.startswith("  mathbold (mb, bold)")
    assert line.endswith("Mathematical Bold")


def test_format_samples(registry: Registry) -> None:
    """``samples`` renders each entry instead of describing it."""
    frames = format_definitions(registry, ListKind.FRAMES, samples=True)
    assert _line_for(frames, "gradient").endswith("▓▒░ MDFX sample 123 ░▒▓")

    glyphs = format_definitions(registry, ListKind.GLYPHS, samples=True)
    assert _line_for(glyphs, "check").endswith("✓  (ascii: [x])")

    separators = format_definitions(registry, ListKind.SEPARATORS, samples=True)
    assert _line_for(separators, "arrow").endswith("A→B→C")

    shields = format_definitions(registry, ListKind.SHIELDS, samples=True)
    assert _line_for(shields, "swatch").endswith("{{shields:swatch:color=.../}}")


def test_format_badges_show_charset(registry: Registry) -> None:
    """Badge descriptions include the accepted characters."""
    line = _line_for(format_definitions(registry, ListKind.BADGES, samples=False), "circle")
    assert line.endswith("[0-20]")


def test_format_palette(registry: Registry) -> None:
    """Palette entries are sorted and shown as hex."""
    lines = format_definitions(registry, ListKind.PALETTE, samples=False)
    assert lines == sorted(lines)
    assert f"  {'accent':<20} #f41c80" in lines


@mark_cli
def test_list_single_kind() -> None:
    """A kind argument lists only that namespace, without headers."""
    result: Result = run_cli(["--no-config", "list", "separators"])
    assert_SUCCESS(result)
    assert "separators:" not in result.stdout
    assert any(line.startswith("  dot (middot)") for line in result.stdout.splitlines())


@mark_cli
def test_list_everything_has_headers() -> None:
    """Without a kind every namespace is listed under a header."""
    result: Result = run_cli(["--no-config", "list"])
    assert_SUCCESS(result)
    for kind in ListKind:
        assert f"{kind.value}:" in result.stdout.splitlines()


@mark_cli
def test_list_includes_configured_definitions(tmp_path: Path) -> None:
    """Partials and palette entries from the config show up."""
    (tmp_path / "mdfx.toml").write_text(
        '[palette]\nbrand = "ff6600"\n\n[partials.hero]\ntemplate = "{{frame:star}}$content{{/frame}}"\n',
        encoding="utf-8",
    )

    components: Result = run_cli_in(tmp_path, ["list", "components", "--samples"])
    palette: Result = run_cli_in(tmp_path, ["list", "palette"])

    assert_SUCCESS(components)
    assert any(
        line.split()[0] == "hero" and line.endswith("{{frame:star}}$content{{/frame}}")
        for line in components.stdout.splitlines()
    )
    assert f"  {'brand':<20} #ff6600" in palette.stdout.splitlines()


@mark_cli
def test_list_unknown_kind() -> None:
    """Unknown kinds are rejected by the parameter type."""
    assert run_cli(["list", "fonts"]).exit_code == 2
