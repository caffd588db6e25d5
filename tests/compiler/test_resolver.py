# topmark:header:start
#
#   project      : mdfx
#   file         : test_resolver.py
#   file_relpath : tests/compiler/test_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for tag resolution priority and closer classification."""

from __future__ import annotations

from mdfx.compiler.resolver import Closer, NodeKind, TagResolver
from mdfx.compiler.scanner import Scanner, TagOccurrence
from mdfx.core.errors import (
    UnknownBadgeError,
    UnknownComponentError,
    UnknownGlyphError,
    UnknownShieldError,
    UnknownStyleError,
)
from mdfx.registry.model import FrameDef, StyleDef
from mdfx.registry.registry import Registry
from tests.conftest import parametrize


def _tag(text: str) -> TagOccurrence:
    segments = [s for s in Scanner(text) if isinstance(s, TagOccurrence)]
    assert len(segments) == 1
    return segments[0]


@parametrize(
    "text, kind, ident",
    [
        ("{{frame:gradient}}", NodeKind.FRAME, "gradient"),
        ("{{frame:grad}}", NodeKind.FRAME, "gradient"),
        ("{{badge:negative}}", NodeKind.BADGE, "negative-circle"),
        ("{{mathbold}}", NodeKind.STYLE, "mathbold"),
        ("{{gothic}}", NodeKind.STYLE, "fraktur"),
        ("{{star}}", NodeKind.FRAME, "star"),
        ("{{ui:tech:rust/}}", NodeKind.COMPONENT, "tech"),
        ("{{shields:block:color=accent/}}", NodeKind.SHIELD, "swatch"),
        ("{{glyph:tick/}}", NodeKind.GLYPH, "check"),
    ],
)
def test_resolution(registry: Registry, text: str, kind: NodeKind, ident: str) -> None:
    """Namespaces and aliases resolve to canonical definitions."""
    resolved = TagResolver(registry).resolve_tag(_tag(text))
    assert resolved is not None
    assert resolved.kind is kind
    assert resolved.id == ident


def test_bare_identifier_prefers_frame_over_style() -> None:
    """A bare id registered as both frame alias and style alias is a frame."""
    registry = Registry(
        [
            FrameDef(id="box", prefix="[", suffix="]", aliases=("fancy",)),
            StyleDef(id="script", aliases=("fancy",)),
        ]
    )
    resolved = TagResolver(registry).resolve(None, "fancy")
    assert resolved is not None
    assert resolved.kind is NodeKind.FRAME


def test_unresolvable(registry: Registry) -> None:
    """Unknown identifiers resolve to nothing."""
    resolver = TagResolver(registry)
    assert resolver.resolve(None, "nope") is None
    assert resolver.resolve("glyph", "mathbold") is None


@parametrize(
    "text, expected",
    [
        ("{{/frame}}", Closer(NodeKind.FRAME)),
        ("{{/badge}}", Closer(NodeKind.BADGE)),
        ("{{/ui}}", Closer(NodeKind.COMPONENT)),
        ("{{/mb}}", Closer(NodeKind.STYLE, "mathbold")),
        ("{{/frame:grad}}", Closer(NodeKind.FRAME, "gradient")),
        ("{{/ui:header}}", Closer(NodeKind.COMPONENT, "header")),
        ("{{/header}}", Closer(NodeKind.COMPONENT, "header")),
        ("{{/nothing}}", None),
    ],
)
def test_closers(registry: Registry, text: str, expected: Closer | None) -> None:
    """Closing tags are classified by what they can close."""
    assert TagResolver(registry).resolve_closer(_tag(text)) == expected


@parametrize(
    "text, error_cls",
    [
        ("{{mathbolt}}", UnknownStyleError),
        ("{{badge:circel}}", UnknownBadgeError),
        ("{{ui:swatc/}}", UnknownComponentError),
        ("{{glyph:starr/}}", UnknownGlyphError),
        ("{{shields:swatc/}}", UnknownShieldError),
    ],
)
def test_unknown_errors(registry: Registry, text: str, error_cls: type[Exception]) -> None:
    """Each namespace has its own error with near-miss suggestions."""
    error = TagResolver(registry).unknown(_tag(text))
    assert isinstance(error, error_cls)
    assert error.suggestions
