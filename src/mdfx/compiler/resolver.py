# topmark:header:start
#
#   project      : mdfx
#   file         : resolver.py
#   file_relpath : src/mdfx/compiler/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Classify tag occurrences against the registry.

Resolution follows a fixed priority, first match wins:

1. ``frame:`` namespace -> Frame
2. ``badge:`` namespace -> Badge
3. bare identifier -> Frame, then Badge, then Style (by id or alias)
4. ``ui:`` namespace -> Component
5. ``shields:`` namespace -> Shield
6. ``glyph:`` namespace -> Glyph

Namespaced prefixes are checked before bare lookups, so a bare identifier that
is registered both as a frame alias and as a style alias resolves as a Frame.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from mdfx.core.errors import (
    UnknownBadgeError,
    UnknownComponentError,
    UnknownFrameError,
    UnknownGlyphError,
    UnknownShieldError,
    UnknownStyleError,
)
from mdfx.registry.model import Namespace

if TYPE_CHECKING:
    from mdfx.compiler.scanner import TagOccurrence
    from mdfx.core.errors import ResolutionError
    from mdfx.registry.model import Definition
    from mdfx.registry.registry import Registry


class NodeKind(str, Enum):
    """Kinds of AST nodes a tag can resolve to."""

    FRAME = "frame"
    BADGE = "badge"
    STYLE = "style"
    COMPONENT = "component"
    SHIELD = "shield"
    GLYPH = "glyph"


@dataclass(frozen=True)
class ResolvedTag:
    """A tag matched to a registry definition."""

    kind: NodeKind
    id: str
    definition: Definition


@dataclass(frozen=True)
class Closer:
    """What a closing tag is able to close.

    Attributes:
        kind (NodeKind): Kind of the open tag it closes.
        id (str | None): Canonical id it must match, or None for generic
            closers (``{{/frame}}``, ``{{/badge}}``, ``{{/ui}}``).
    """

    kind: NodeKind
    id: str | None = None


_PRIORITY: tuple[tuple[str | None, Namespace, NodeKind], ...] = (
    ("frame", Namespace.FRAME, NodeKind.FRAME),
    ("badge", Namespace.BADGE, NodeKind.BADGE),
    (None, Namespace.FRAME, NodeKind.FRAME),
    (None, Namespace.BADGE, NodeKind.BADGE),
    (None, Namespace.STYLE, NodeKind.STYLE),
    ("ui", Namespace.COMPONENT, NodeKind.COMPONENT),
    ("shields", Namespace.SHIELD, NodeKind.SHIELD),
    ("glyph", Namespace.GLYPH, NodeKind.GLYPH),
)

_UNKNOWN: dict[str | None, tuple[type[ResolutionError], Namespace]] = {
    None: (UnknownStyleError, Namespace.STYLE),
    "frame": (UnknownFrameError, Namespace.FRAME),
    "badge": (UnknownBadgeError, Namespace.BADGE),
    "ui": (UnknownComponentError, Namespace.COMPONENT),
    "shields": (UnknownShieldError, Namespace.SHIELD),
    "glyph": (UnknownGlyphError, Namespace.GLYPH),
}

_GENERIC_CLOSERS: dict[str, NodeKind] = {
    "frame": NodeKind.FRAME,
    "badge": NodeKind.BADGE,
    "ui": NodeKind.COMPONENT,
}

_NAMESPACED_CLOSERS: dict[str, tuple[Namespace, NodeKind]] = {
    "frame": (Namespace.FRAME, NodeKind.FRAME),
    "badge": (Namespace.BADGE, NodeKind.BADGE),
    "ui": (Namespace.COMPONENT, NodeKind.COMPONENT),
}


class TagResolver:
    """Resolve tags against a registry."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def resolve(self, namespace: str | None, ident: str) -> ResolvedTag | None:
        """Return the first definition matching ``namespace``/``ident`` in priority order."""
        for prefix, registry_ns, kind in _PRIORITY:
            if prefix != namespace:
                continue
            definition = self.registry.lookup(registry_ns, ident)
            if definition is not None:
                return ResolvedTag(kind=kind, id=definition.id, definition=definition)
        return None

    def resolve_tag(self, tag: TagOccurrence) -> ResolvedTag | None:
        """Resolve an opening or self-closing tag."""
        return self.resolve(tag.namespace, tag.id)

    def resolve_closer(self, tag: TagOccurrence) -> Closer | None:
        """Classify a closing tag, or return None if it names nothing known."""
        if tag.namespace is None and tag.id in _GENERIC_CLOSERS:
            return Closer(kind=_GENERIC_CLOSERS[tag.id])
        if tag.namespace in _NAMESPACED_CLOSERS:
            registry_ns, kind = _NAMESPACED_CLOSERS[tag.namespace]
            canonical = self.registry.canonical(registry_ns, tag.id)
            return Closer(kind=kind, id=canonical) if canonical is not None else None
        if tag.namespace is None:
            resolved = self.resolve(None, tag.id)
            if resolved is not None:
                return Closer(kind=resolved.kind, id=resolved.id)
            canonical = self.registry.canonical(Namespace.COMPONENT, tag.id)
            if canonical is not None:
                return Closer(kind=NodeKind.COMPONENT, id=canonical)
        return None

    def unknown(self, tag: TagOccurrence) -> ResolutionError:
        """Build the strict-mode error for an unresolvable tag, with suggestions."""
        error_cls, registry_ns = _UNKNOWN.get(tag.namespace, (UnknownStyleError, Namespace.STYLE))
        return error_cls(
            tag.id,
            offset=tag.start,
            suggestions=self.registry.suggest(registry_ns, tag.id),
        )
