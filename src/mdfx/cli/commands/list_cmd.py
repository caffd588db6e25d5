# topmark:header:start
#
#   project      : mdfx
#   file         : list_cmd.py
#   file_relpath : src/mdfx/cli/commands/list_cmd.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx `list` command.

Lists the definitions available to templates: styles, frames, badges,
glyphs, separators, components (built-in and configured partials), palette
colours and shield kinds. ``--samples`` renders a short example for each.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import click

from mdfx.cli.cli_types import EnumChoiceParam
from mdfx.cli.cmd_common import get_console, load_config
from mdfx.cli.options import CONTEXT_SETTINGS
from mdfx.registry.model import (
    BadgeDef,
    ComponentDef,
    FrameDef,
    GlyphDef,
    Namespace,
    SeparatorDef,
    ShieldKindDef,
    StyleDef,
)
from mdfx.registry.registry import Registry

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike
    from mdfx.registry.model import Definition

SAMPLE_TEXT = "MDFX sample 123"


class ListKind(str, Enum):
    """What ``mdfx list`` can show."""

    STYLES = "styles"
    FRAMES = "frames"
    BADGES = "badges"
    GLYPHS = "glyphs"
    SEPARATORS = "separators"
    COMPONENTS = "components"
    PALETTE = "palette"
    SHIELDS = "shields"


_NAMESPACES: dict[ListKind, Namespace] = {
    ListKind.STYLES: Namespace.STYLE,
    ListKind.FRAMES: Namespace.FRAME,
    ListKind.BADGES: Namespace.BADGE,
    ListKind.GLYPHS: Namespace.GLYPH,
    ListKind.SEPARATORS: Namespace.SEPARATOR,
    ListKind.COMPONENTS: Namespace.COMPONENT,
    ListKind.SHIELDS: Namespace.SHIELD,
}


def sample(definition: Definition) -> str:
    """Return a one-line example of what a definition produces."""
    match definition:
        case StyleDef():
            return "".join(definition.map_char(ch) for ch in SAMPLE_TEXT)
        case FrameDef():
            return f"{definition.prefix}{SAMPLE_TEXT}{definition.suffix}"
        case BadgeDef():
            return " ".join(definition.mappings[k] for k in list(definition.mappings)[:5])
        case GlyphDef():
            fallback = f"  (ascii: {definition.fallback})" if definition.fallback else ""
            return definition.char + fallback
        case SeparatorDef():
            return definition.char.join("ABC")
        case ComponentDef():
            return definition.template.replace("\n", "\\n")
        case ShieldKindDef():
            required = ":".join(f"{p}=..." for p in definition.required)
            return f"{{{{shields:{definition.id}{':' if required else ''}{required}/}}}}"
    return ""


def describe(definition: Definition) -> str:
    """Return the description shown without ``--samples``."""
    text = getattr(definition, "description", "") or getattr(definition, "name", "")
    if isinstance(definition, BadgeDef) and definition.charset:
        text = f"{text} [{definition.charset}]".strip()
    return text


def format_definitions(registry: Registry, kind: ListKind, *, samples: bool) -> list[str]:
    """Return the listing lines for one kind."""
    if kind is ListKind.PALETTE:
        return [f"  {name:<20} #{value.lstrip('#')}" for name, value in sorted(registry.palette.items())]
    lines: list[str] = []
    for definition in registry.definitions(_NAMESPACES[kind]):
        aliases = f" ({', '.join(definition.aliases)})" if definition.aliases else ""
        detail = sample(definition) if samples else describe(definition)
        lines.append(f"  {definition.id + aliases:<28} {detail}".rstrip())
    return lines


@click.command(
    name="list",
    help="List styles, frames, badges, glyphs, separators, components, palette or shields.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("kind", type=EnumChoiceParam(ListKind), required=False, default=None)
@click.option("--samples", is_flag=True, default=False, help="Show a rendered sample for each entry.")
def list_command(*, kind: ListKind | None, samples: bool) -> None:
    """List registry definitions."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    config = load_config(ctx)
    registry = config.build_registry(Registry.builtin())

    kinds = [kind] if kind is not None else list(ListKind)
    for i, k in enumerate(kinds):
        if len(kinds) > 1:
            if i:
                console.print()
            console.print(console.styled(f"{k.value}:", bold=True, underline=True))
        for line in format_definitions(registry, k, samples=samples):
            console.print(line)
