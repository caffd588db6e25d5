# topmark:header:start
#
#   project      : mdfx
#   file         : renderer.py
#   file_relpath : src/mdfx/rendering/renderer.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Render a fully expanded primitive tree to text.

`TargetRenderer` walks the tree once and delegates shields to the backend
selected for the target. Text primitives (styles, frames, badges, glyphs)
render the same way on every backend, except that the plain text backend uses
the ASCII fallback of glyphs.

Style rendering works on *units*: every character of plain text is mapped
through the style table and becomes one unit; a nested style without its own
separator contributes its mapped characters as units; any other node
contributes its rendered text as a single unit. ``separator``/``spacing`` glue
is inserted between units, never next to a line break.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdfx.compiler.nodes import Badge, Component, Frame, Glyph, Shield, Style, Text
from mdfx.config.logging import get_logger
from mdfx.core.errors import RenderError, UnknownShieldError, UnsupportedBadgeCharError
from mdfx.registry.model import BadgeDef, FrameDef, GlyphDef, Namespace, ShieldKindDef, StyleDef
from mdfx.rendering.plaintext import render_plaintext
from mdfx.rendering.shields import ShieldsBackend
from mdfx.rendering.targets import Backend, Target, resolve_backend

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from mdfx.assets.cache import AssetCache
    from mdfx.compiler.nodes import Node
    from mdfx.config.logging import MdfxLogger
    from mdfx.registry.model import Definition
    from mdfx.registry.registry import Registry

logger: MdfxLogger = get_logger(__name__)

_LINE_BREAKS = ("\n", "\r")


def join_units(units: list[str], glue: str) -> str:
    """Join style units with ``glue``, leaving line breaks unglued."""
    if not glue:
        return "".join(units)
    out: list[str] = []
    for i, unit in enumerate(units):
        if i and not units[i - 1].endswith(_LINE_BREAKS) and not unit.startswith(_LINE_BREAKS):
            out.append(glue)
        out.append(unit)
    return "".join(out)


class TargetRenderer:
    """Render primitive trees for one target/backend combination.

    Args:
        registry (Registry): Definitions referenced by the tree.
        target (Target): Publishing target.
        backend (Backend | None): Backend override; validated against the target.
        asset_cache (AssetCache | None): Asset store for shields rendered as SVG
            files (SVG backend, and the SVG-preferring kinds of the hybrid
            backend). Only needed once such a shield is rendered.
        asset_link_prefix (str | None): Asset link prefix for this document,
            overriding the cache-wide prefix.

    Raises:
        UnsupportedTargetFeatureError: If the backend is not usable on the target.
    """

    def __init__(
        self,
        registry: Registry,
        target: Target = Target.GITHUB,
        backend: Backend | None = None,
        asset_cache: AssetCache | None = None,
        asset_link_prefix: str | None = None,
    ) -> None:
        self.registry = registry
        self.target = target
        self.backend = resolve_backend(target, backend)
        self.asset_cache = asset_cache
        self.asset_link_prefix = asset_link_prefix
        self._shields = ShieldsBackend(registry)

    def render(self, nodes: Iterable[Node]) -> str:
        """Return the rendered text of ``nodes``.

        Raises:
            UnsupportedBadgeCharError: If badge content is outside the badge charset.
            RenderError: If the tree still contains components or unknown definitions.
        """
        return "".join(self._render(node) for node in nodes)

    def _definition(self, namespace: Namespace, ident: str, offset: int) -> Definition:
        definition = self.registry.lookup(namespace, ident)
        if definition is None:
            raise RenderError(f"unknown {namespace.value} '{ident}'", offset=offset)
        return definition

    def _render(self, node: Node) -> str:
        match node:
            case Text():
                return node.value
            case Style():
                return self._render_style(node)
            case Frame():
                frame = self._definition(Namespace.FRAME, node.id, node.offset)
                assert isinstance(frame, FrameDef)
                return frame.prefix + self.render(node.children) + frame.suffix
            case Badge():
                badge = self._definition(Namespace.BADGE, node.id, node.offset)
                assert isinstance(badge, BadgeDef)
                glyph = badge.lookup(node.content)
                if glyph is None:
                    raise UnsupportedBadgeCharError(
                        badge.id, node.content, badge.charset, offset=node.offset
                    )
                return glyph
            case Glyph():
                glyph_def = self._definition(Namespace.GLYPH, node.id, node.offset)
                assert isinstance(glyph_def, GlyphDef)
                if self.backend is Backend.PLAINTEXT and glyph_def.fallback:
                    return glyph_def.fallback
                return glyph_def.char
            case Shield():
                return self._render_shield(node)
            case Component():
                raise RenderError(f"component 'ui:{node.id}' was not expanded", offset=node.offset)
        raise RenderError(f"cannot render {type(node).__name__} node", offset=node.offset)

    # --- Styles ---

    def _style_units(self, style: StyleDef, children: Iterable[Node]) -> list[str]:
        units: list[str] = []
        for child in children:
            match child:
                case Text(verbatim=False):
                    units.extend(style.map_char(ch) for ch in child.value)
                case Text():
                    units.append(child.value)
                case Style(separator=None, spacing=None):
                    nested = self._definition(Namespace.STYLE, child.id, child.offset)
                    assert isinstance(nested, StyleDef)
                    units.extend(self._style_units(nested, child.children))
                case _:
                    units.append(self._render(child))
        return units

    def _render_style(self, node: Style) -> str:
        style = self._definition(Namespace.STYLE, node.id, node.offset)
        assert isinstance(style, StyleDef)
        units = self._style_units(style, node.children)
        if node.separator is not None:
            return join_units(units, node.separator.char)
        return join_units(units, " " * (node.spacing or 0))

    # --- Shields ---

    def resolve_params(self, kind: ShieldKindDef, params: Mapping[str, str]) -> dict[str, str]:
        """Return ``params`` with palette names in colour parameters replaced by hex."""
        resolved = dict(params)
        for key in kind.color_params:
            value = resolved.get(key)
            if value is not None:
                resolved[key] = ",".join(self.registry.resolve_color(c.strip()) for c in value.split(","))
        if "style" in resolved:
            resolved["style"] = self.registry.resolve_shield_style(resolved["style"])
        return resolved

    def _render_shield(self, node: Shield) -> str:
        kind = self.registry.lookup(Namespace.SHIELD, node.kind)
        if not isinstance(kind, ShieldKindDef):
            raise UnknownShieldError(node.kind, offset=node.offset)
        params = self.resolve_params(kind, node.params)
        backend = self.backend
        if backend is Backend.HYBRID:
            backend = Backend.SVG if kind.prefers_svg else Backend.SHIELDS
        try:
            if backend is Backend.SHIELDS:
                return self._shields.render(kind.id, params)
            if backend is Backend.PLAINTEXT:
                return render_plaintext(kind.id, params, node.params)
            if self.asset_cache is None:
                raise RenderError(f"the {self.backend.value} backend needs an asset cache for '{kind.id}'")
            link = self.asset_cache.get_or_create(kind.id, params, self.asset_link_prefix)
            return f"![]({link})"
        except RenderError as err:
            if err.offset is None:
                err.offset = node.offset
            raise
