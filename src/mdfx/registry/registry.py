# topmark:header:start
#
#   project      : mdfx
#   file         : registry.py
#   file_relpath : src/mdfx/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Immutable registry of styles, frames, badges, glyphs, components and colours.

A `Registry` is explicitly constructed and passed to every pipeline stage.
Independently configured registries (custom palette, user partials) can be
used side by side; [`Registry.with_overrides`][mdfx.registry.registry.Registry.with_overrides]
returns a new registry and leaves the original untouched.

The built-in definitions live in ``mdfx/data/registry.json``. Character tables
are declared either as explicit ``mappings`` or as compact ``ranges``:

```json
{"chars": "A-Z", "start": "1D400"}
{"chars": "1-20", "start": "2460"}
```

A letter range maps consecutive characters onto consecutive code points from
``start``; a numeric range maps the decimal strings ``"1"`` .. ``"20"``.
``overrides`` are applied last and fill holes in the Unicode blocks.
"""

from __future__ import annotations

import json
from importlib.resources import files
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar, cast

from mdfx.config.logging import get_logger
from mdfx.constants import MAX_SUGGESTIONS, REGISTRY_DATA_NAME, REGISTRY_DATA_PACKAGE
from mdfx.registry.model import (
    BadgeDef,
    ComponentDef,
    FrameDef,
    GlyphDef,
    Namespace,
    PostProcess,
    SeparatorDef,
    ShieldKindDef,
    StyleDef,
)
from mdfx.registry.suggest import suggest

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from mdfx.config.logging import MdfxLogger
    from mdfx.registry.model import Definition

logger: MdfxLogger = get_logger(__name__)

#: Characters that terminate a tag parameter and can never be separators.
RESERVED_SEPARATOR_CHARS: frozenset[str] = frozenset({":", "/", "}"})

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def is_hex_color(value: str) -> bool:
    """Return True for 3, 4, 6 or 8 digit hex colours (without ``#``)."""
    return len(value) in (3, 4, 6, 8) and all(ch in _HEX_DIGITS for ch in value)


def expand_char_table(spec: Mapping[str, Any]) -> dict[str, str]:
    """Build a character table from ``mappings``, ``ranges`` and ``overrides``.

    Args:
        spec: A style or badge definition from the registry data.

    Returns:
        The expanded table.

    Raises:
        ValueError: If a range is malformed.
    """
    table: dict[str, str] = dict(spec.get("mappings", {}))
    for rng in spec.get("ranges", []):
        chars = str(rng["chars"])
        start = int(str(rng["start"]), 16)
        lo, sep, hi = chars.partition("-")
        if not sep:
            hi = lo
        if lo.isdigit() and hi.isdigit():
            keys = [str(n) for n in range(int(lo), int(hi) + 1)]
        elif len(lo) == 1 and len(hi) == 1:
            keys = [chr(c) for c in range(ord(lo), ord(hi) + 1)]
        else:
            raise ValueError(f"invalid character range {chars!r}")
        for i, key in enumerate(keys):
            table[key] = chr(start + i)
    table.update(spec.get("overrides", {}))
    return table


def _aliases(spec: Mapping[str, Any]) -> tuple[str, ...]:
    return tuple(str(a) for a in spec.get("aliases", []))


def _component_from_dict(ident: str, spec: Mapping[str, Any]) -> ComponentDef:
    return ComponentDef(
        id=ident,
        template=str(spec["template"]),
        description=str(spec.get("description", "")),
        self_closing=bool(spec.get("self_closing", False)),
        args=tuple(str(a) for a in spec.get("args", [])),
        optional=MappingProxyType({str(k): str(v) for k, v in spec.get("optional", {}).items()}),
        post_process=PostProcess(spec.get("post_process", PostProcess.NONE.value)),
        aliases=_aliases(spec),
    )


class Registry:
    """Read-only lookup of definitions by namespace, id or alias.

    Args:
        definitions (Iterable[Definition]): Definitions of every namespace.
        palette (Mapping[str, str] | None): Colour name to hex mapping.
        shield_styles (Mapping[str, str] | None): Shield style name or alias to
            the canonical shields.io style.
    """

    _builtin: ClassVar[Registry | None] = None
    _builtin_lock: ClassVar[RLock] = RLock()

    _TYPES: ClassVar[dict[type, Namespace]] = {
        StyleDef: Namespace.STYLE,
        FrameDef: Namespace.FRAME,
        BadgeDef: Namespace.BADGE,
        GlyphDef: Namespace.GLYPH,
        ComponentDef: Namespace.COMPONENT,
        ShieldKindDef: Namespace.SHIELD,
        SeparatorDef: Namespace.SEPARATOR,
    }

    def __init__(
        self,
        definitions: Iterable[Definition] = (),
        *,
        palette: Mapping[str, str] | None = None,
        shield_styles: Mapping[str, str] | None = None,
    ) -> None:
        tables: dict[Namespace, dict[str, Definition]] = {ns: {} for ns in Namespace}
        aliases: dict[Namespace, dict[str, str]] = {ns: {} for ns in Namespace}
        for definition in definitions:
            ns = self._TYPES[type(definition)]
            tables[ns][definition.id] = definition
            for alias in definition.aliases:
                aliases[ns][alias] = definition.id
        self._tables: Mapping[Namespace, Mapping[str, Definition]] = MappingProxyType(
            {ns: MappingProxyType(t) for ns, t in tables.items()}
        )
        self._aliases: Mapping[Namespace, Mapping[str, str]] = MappingProxyType(
            {ns: MappingProxyType(a) for ns, a in aliases.items()}
        )
        self._palette: Mapping[str, str] = MappingProxyType(dict(palette or {}))
        self._shield_styles: Mapping[str, str] = MappingProxyType(dict(shield_styles or {}))

    # --- Construction ---

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Registry:
        """Build a registry from the JSON data layout.

        Args:
            data: Parsed registry document (see ``mdfx/data/registry.json``).

        Returns:
            The registry.
        """
        defs: list[Definition] = []
        for ident, spec in data.get("separators", {}).items():
            defs.append(
                SeparatorDef(
                    id=ident,
                    char=str(spec["char"]),
                    description=str(spec.get("description", "")),
                    aliases=_aliases(spec),
                )
            )
        for ident, spec in data.get("styles", {}).items():
            defs.append(
                StyleDef(
                    id=ident,
                    name=str(spec.get("name", ident)),
                    description=str(spec.get("description", "")),
                    category=str(spec.get("category", "")),
                    aliases=_aliases(spec),
                    mappings=MappingProxyType(expand_char_table(spec)),
                )
            )
        for ident, spec in data.get("frames", {}).items():
            defs.append(
                FrameDef(
                    id=ident,
                    prefix=str(spec.get("prefix", "")),
                    suffix=str(spec.get("suffix", "")),
                    name=str(spec.get("name", ident)),
                    description=str(spec.get("description", "")),
                    aliases=_aliases(spec),
                )
            )
        for ident, spec in data.get("badges", {}).items():
            defs.append(
                BadgeDef(
                    id=ident,
                    charset=str(spec.get("charset", "")),
                    name=str(spec.get("name", ident)),
                    description=str(spec.get("description", "")),
                    aliases=_aliases(spec),
                    mappings=MappingProxyType(expand_char_table(spec)),
                )
            )
        for ident, spec in data.get("glyphs", {}).items():
            defs.append(
                GlyphDef(
                    id=ident,
                    char=str(spec["char"]),
                    fallback=str(spec.get("fallback", "")),
                    description=str(spec.get("description", "")),
                    aliases=_aliases(spec),
                )
            )
        for ident, spec in data.get("shields", {}).items():
            defs.append(
                ShieldKindDef(
                    id=ident,
                    description=str(spec.get("description", "")),
                    aliases=_aliases(spec),
                    required=tuple(str(p) for p in spec.get("required", [])),
                    defaults=MappingProxyType(
                        {str(k): str(v) for k, v in spec.get("defaults", {}).items()}
                    ),
                    color_params=tuple(str(p) for p in spec.get("colors", [])),
                    param_aliases=MappingProxyType(
                        {str(k): str(v) for k, v in spec.get("param_aliases", {}).items()}
                    ),
                    numeric_params=tuple(str(p) for p in spec.get("numeric", [])),
                    limits=MappingProxyType(
                        {str(k): int(v) for k, v in spec.get("limits", {}).items()}
                    ),
                    decimal_params=tuple(str(p) for p in spec.get("decimal", [])),
                    series_params=tuple(str(p) for p in spec.get("series", [])),
                    choices=MappingProxyType(
                        {str(k): tuple(str(c) for c in v) for k, v in spec.get("choices", {}).items()}
                    ),
                    prefers_svg=bool(spec.get("prefers_svg", False)),
                )
            )
        for ident, spec in data.get("components", {}).items():
            defs.append(_component_from_dict(ident, spec))

        shield_styles: dict[str, str] = {}
        for ident, spec in data.get("shield_styles", {}).items():
            shield_styles[ident] = ident
            for alias in _aliases(spec):
                shield_styles[alias] = ident

        return cls(
            defs,
            palette={str(k): str(v) for k, v in data.get("palette", {}).items()},
            shield_styles=shield_styles,
        )

    @classmethod
    def load_builtin_data(cls) -> dict[str, Any]:
        """Read the packaged ``registry.json`` document."""
        resource = files(REGISTRY_DATA_PACKAGE).joinpath(REGISTRY_DATA_NAME)
        logger.debug("Loading built-in registry from %s", resource)
        return cast("dict[str, Any]", json.loads(resource.read_text(encoding="utf-8")))

    @classmethod
    def builtin(cls) -> Registry:
        """Return the shared registry of built-in definitions (loaded once)."""
        with cls._builtin_lock:
            if cls._builtin is None:
                cls._builtin = cls.from_dict(cls.load_builtin_data())
            return cls._builtin

    def with_overrides(
        self,
        *,
        palette: Mapping[str, str] | None = None,
        components: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> Registry:
        """Return a new registry with palette entries and components layered on top.

        Args:
            palette: Colour names to hex values; replaces same-named entries.
            components: Component specs in the registry data layout, keyed by id;
                replaces same-named components.

        Returns:
            The new registry.
        """
        overrides: dict[str, ComponentDef] = {
            ident: _component_from_dict(ident, spec) for ident, spec in (components or {}).items()
        }
        defs: list[Definition] = []
        for ns, table in self._tables.items():
            for ident, definition in table.items():
                if ns is Namespace.COMPONENT and ident in overrides:
                    continue
                defs.append(definition)
        defs.extend(overrides.values())
        merged_palette = dict(self._palette)
        merged_palette.update(palette or {})
        return Registry(defs, palette=merged_palette, shield_styles=self._shield_styles)

    # --- Lookup ---

    def canonical(self, namespace: Namespace, ident: str) -> str | None:
        """Return the canonical id for an id or alias, or None if unknown."""
        if ident in self._tables[namespace]:
            return ident
        return self._aliases[namespace].get(ident)

    def lookup(self, namespace: Namespace, ident: str) -> Definition | None:
        """Return the definition for an id or alias, or None if unknown.

        Args:
            namespace: The namespace to search.
            ident: Canonical id or alias.

        Returns:
            The definition, or None.
        """
        canonical = self.canonical(namespace, ident)
        if canonical is None:
            return None
        return self._tables[namespace][canonical]

    def suggest(self, namespace: Namespace, ident: str, limit: int = MAX_SUGGESTIONS) -> list[str]:
        """Return near-miss ids and aliases for an unknown identifier."""
        candidates = list(self._tables[namespace]) + list(self._aliases[namespace])
        return suggest(ident, candidates, limit=limit)

    def ids(self, namespace: Namespace) -> tuple[str, ...]:
        """Return the canonical ids of a namespace, sorted."""
        return tuple(sorted(self._tables[namespace]))

    def definitions(self, namespace: Namespace) -> tuple[Definition, ...]:
        """Return the definitions of a namespace, sorted by id."""
        table = self._tables[namespace]
        return tuple(table[ident] for ident in sorted(table))

    @property
    def palette(self) -> Mapping[str, str]:
        """Colour names to hex values (read-only)."""
        return self._palette

    @property
    def shield_styles(self) -> Mapping[str, str]:
        """Shield style names and aliases to canonical style names (read-only)."""
        return self._shield_styles

    # --- Value resolution ---

    def resolve_color(self, value: str) -> str:
        """Return the hex value for a palette name; other values pass through.

        A leading ``#`` is dropped so values can be embedded in shields.io URLs.
        """
        color = self._palette.get(value, value)
        return color[1:] if color.startswith("#") else color

    def resolve_shield_style(self, value: str) -> str:
        """Return the canonical shields.io style for a name or alias."""
        return self._shield_styles.get(value, value)

    def resolve_separator(self, value: str) -> str | None:
        """Return the separator character for a name or single literal character.

        Returns:
            The character, or None if ``value`` is neither a known separator name
            nor a single non-reserved character.
        """
        definition = self.lookup(Namespace.SEPARATOR, value)
        if isinstance(definition, SeparatorDef):
            return definition.char
        if len(value) == 1 and value not in RESERVED_SEPARATOR_CHARS and not value.isspace():
            return value
        return None
