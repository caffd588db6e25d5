# topmark:header:start
#
#   project      : mdfx
#   file         : model.py
#   file_relpath : src/mdfx/registry/model.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Registry definition types.

Each namespace of the template dialect has its own immutable definition type.
Definitions are created by [`Registry.from_dict`][mdfx.registry.registry.Registry.from_dict]
and never mutated afterwards; mappings are exposed as `MappingProxyType`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Mapping


def _empty_mapping() -> Mapping[str, str]:
    return MappingProxyType({})


_NUMBER_RE = re.compile(r"-?[0-9]+(?:\.[0-9]+)?\Z")


def parse_series(value: str) -> tuple[float, ...]:
    """Parse a comma-separated list of decimal numbers (``"3,-1.5,8"``).

    Raises:
        ValueError: If the list is empty or an entry is not a decimal number.
    """
    items = [item.strip() for item in value.split(",")]
    if not all(_NUMBER_RE.match(item) for item in items):
        raise ValueError(f"not a list of numbers: '{value}'")
    return tuple(float(item) for item in items)


class Namespace(str, Enum):
    """Lookup namespaces of the registry."""

    STYLE = "style"
    FRAME = "frame"
    BADGE = "badge"
    GLYPH = "glyph"
    COMPONENT = "component"
    SHIELD = "shield"
    SEPARATOR = "separator"


class PostProcess(str, Enum):
    """Text transformation applied to a component's substituted template."""

    NONE = "none"
    BLOCKQUOTE = "blockquote"


@dataclass(frozen=True)
class StyleDef:
    """A Unicode character-mapping style (e.g. ``mathbold``)."""

    id: str
    name: str = ""
    description: str = ""
    category: str = ""
    aliases: tuple[str, ...] = ()
    mappings: Mapping[str, str] = field(default_factory=_empty_mapping)

    def map_char(self, ch: str) -> str:
        """Return the styled form of ``ch``; unmapped characters pass through."""
        return self.mappings.get(ch, ch)


@dataclass(frozen=True)
class FrameDef:
    """Decorative prefix/suffix wrapped around content."""

    id: str
    prefix: str
    suffix: str
    name: str = ""
    description: str = ""
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class BadgeDef:
    """Enclosed-character badge with a limited character set.

    Attributes:
        charset (str): Human-readable description of the supported content
            (e.g. ``"0-20"``), used in error messages.
        mappings (Mapping[str, str]): Whole-content to glyph table.
    """

    id: str
    charset: str
    name: str = ""
    description: str = ""
    aliases: tuple[str, ...] = ()
    mappings: Mapping[str, str] = field(default_factory=_empty_mapping)

    def lookup(self, content: str) -> str | None:
        """Return the glyph for ``content``, or None when outside the charset."""
        return self.mappings.get(content)


@dataclass(frozen=True)
class GlyphDef:
    """A named single character with an ASCII fallback."""

    id: str
    char: str
    fallback: str = ""
    description: str = ""
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class SeparatorDef:
    """A named separator character for ``separator=`` parameters."""

    id: str
    char: str
    description: str = ""
    aliases: tuple[str, ...] = ()


@dataclass(frozen=True)
class ShieldKindDef:
    """A visual primitive rendered as a shields.io badge, SVG asset or text.

    Attributes:
        required (tuple[str, ...]): Parameters that must be given.
        defaults (Mapping[str, str]): Values for omitted optional parameters.
        color_params (tuple[str, ...]): Parameters holding palette names or hex
            colours (comma-separated lists are allowed).
        param_aliases (Mapping[str, str]): Alternative spellings of parameter keys.
        numeric_params (tuple[str, ...]): Parameters that must be non-negative integers.
        limits (Mapping[str, int]): Upper bounds for numeric parameters.
        decimal_params (tuple[str, ...]): Parameters that must be non-negative decimals.
        series_params (tuple[str, ...]): Comma-separated lists of decimals.
        choices (Mapping[str, tuple[str, ...]]): Allowed values of enumerated parameters.
        prefers_svg (bool): Rendered as an SVG asset by the hybrid backend.
    """

    id: str
    description: str = ""
    aliases: tuple[str, ...] = ()
    required: tuple[str, ...] = ()
    defaults: Mapping[str, str] = field(default_factory=_empty_mapping)
    color_params: tuple[str, ...] = ()
    param_aliases: Mapping[str, str] = field(default_factory=_empty_mapping)
    numeric_params: tuple[str, ...] = ()
    limits: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}))
    decimal_params: tuple[str, ...] = ()
    series_params: tuple[str, ...] = ()
    choices: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: MappingProxyType({}))
    prefers_svg: bool = False

    @property
    def known_params(self) -> frozenset[str]:
        """Return every accepted parameter key (canonical spelling)."""
        return frozenset(self.required) | frozenset(self.defaults)

    def canonical_param(self, key: str) -> str:
        """Return the canonical spelling of a parameter key."""
        return self.param_aliases.get(key, key)


@dataclass(frozen=True)
class ComponentDef:
    """A higher-level component expanding into primitive tags.

    Attributes:
        template (str): Expansion template with ``$content``, ``$1..$n`` and
            ``$name`` placeholders.
        args (tuple[str, ...]): Names of the required positional arguments.
        optional (Mapping[str, str]): Keyword parameters and their defaults.
        self_closing (bool): True if the component takes no content.
    """

    id: str
    template: str
    description: str = ""
    self_closing: bool = False
    args: tuple[str, ...] = ()
    optional: Mapping[str, str] = field(default_factory=_empty_mapping)
    post_process: PostProcess = PostProcess.NONE
    aliases: tuple[str, ...] = ()


Definition = Union[
    StyleDef, FrameDef, BadgeDef, GlyphDef, SeparatorDef, ShieldKindDef, ComponentDef
]
