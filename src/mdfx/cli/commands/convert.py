# topmark:header:start
#
#   project      : mdfx
#   file         : convert.py
#   file_relpath : src/mdfx/cli/commands/convert.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx `convert` command.

Applies a single Unicode text style to plain text, without template syntax:

    mdfx convert --style mathbold --separator dot TITLE
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdfx.cli.cmd_common import get_console, load_config
from mdfx.cli.errors import MdfxUsageError
from mdfx.cli.options import CONTEXT_SETTINGS
from mdfx.compiler.nodes import SeparatorSpec, Style, Text
from mdfx.registry.model import Namespace
from mdfx.registry.registry import Registry
from mdfx.rendering.renderer import TargetRenderer

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike


def _did_you_mean(suggestions: list[str]) -> str:
    return f" Did you mean: {', '.join(suggestions)}?" if suggestions else ""


def convert_text(
    registry: Registry,
    text: str,
    style: str,
    *,
    separator: str | None = None,
    spacing: int | None = None,
) -> str:
    """Return ``text`` rendered in ``style``.

    Raises:
        MdfxUsageError: On an unknown style or separator.
    """
    style_id = registry.canonical(Namespace.STYLE, style)
    if style_id is None:
        raise MdfxUsageError(
            f"Unknown style '{style}'." + _did_you_mean(registry.suggest(Namespace.STYLE, style))
        )
    sep: SeparatorSpec | None = None
    if separator is not None:
        char = registry.resolve_separator(separator)
        if char is None:
            raise MdfxUsageError(
                f"Unknown separator '{separator}'."
                + _did_you_mean(registry.suggest(Namespace.SEPARATOR, separator))
            )
        sep = SeparatorSpec(char=char, name=separator)
    node = Style(id=style_id, separator=sep, spacing=spacing, children=(Text(text),))
    return TargetRenderer(registry).render([node])


@click.command(
    name="convert",
    help="Convert plain text to a Unicode style.",
    context_settings=CONTEXT_SETTINGS,
)
@click.option("--style", "-s", "style", required=True, help="Style id or alias (see 'mdfx list styles').")
@click.option("--separator", default=None, help="Separator name or single character between characters.")
@click.option(
    "--spacing",
    type=click.IntRange(min=0),
    default=None,
    help="Number of spaces between characters (ignored with --separator).",
)
@click.argument("text", nargs=-1, required=True)
def convert_command(
    *,
    style: str,
    separator: str | None,
    spacing: int | None,
    text: tuple[str, ...],
) -> None:
    """Print TEXT (words joined by single spaces) in the requested style."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    config = load_config(ctx)
    registry = config.build_registry(Registry.builtin())
    console.print(convert_text(registry, " ".join(text), style, separator=separator, spacing=spacing))
