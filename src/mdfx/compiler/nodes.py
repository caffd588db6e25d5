# topmark:header:start
#
#   project      : mdfx
#   file         : nodes.py
#   file_relpath : src/mdfx/compiler/nodes.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Primitive AST nodes.

`Node` is a closed union of frozen dataclasses. Consumers dispatch with
``match`` over the concrete classes. `Component` nodes only exist between
parsing and expansion; a fully expanded tree is made of primitives only.

Every node records the source ``offset`` it was parsed from. Nodes spliced in
by the component expander carry the offset of the component they came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping


def _empty_params() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True)
class SeparatorSpec:
    """Resolved ``separator=`` value.

    Attributes:
        char (str): The separator character inserted between styled characters.
        name (str | None): Registry name when given by name, else None.
    """

    char: str
    name: str | None = None

    def to_param(self) -> str:
        """Return the value as it is written in a tag."""
        return self.name or self.char


@dataclass(frozen=True)
class Text:
    """Literal passthrough text; ``verbatim`` marks code spans and fences."""

    value: str
    verbatim: bool = False
    offset: int = 0


@dataclass(frozen=True)
class Style:
    """Unicode style applied to the characters of its children."""

    id: str
    separator: SeparatorSpec | None = None
    spacing: int | None = None
    children: tuple[Node, ...] = ()
    offset: int = 0


@dataclass(frozen=True)
class Frame:
    """Prefix/suffix decoration around its children."""

    id: str
    children: tuple[Node, ...] = ()
    offset: int = 0


@dataclass(frozen=True)
class Badge:
    """Enclosed character; children hold a single plain text run."""

    id: str
    children: tuple[Node, ...] = ()
    offset: int = 0

    @property
    def content(self) -> str:
        """Return the enclosed text."""
        return "".join(child.value for child in self.children if isinstance(child, Text))


@dataclass(frozen=True)
class Glyph:
    """A named single character."""

    id: str
    offset: int = 0


@dataclass(frozen=True)
class Shield:
    """A visual primitive rendered by the active backend."""

    kind: str
    params: Mapping[str, str] = field(default_factory=_empty_params)
    offset: int = 0


@dataclass(frozen=True)
class Component:
    """A component invocation awaiting expansion."""

    id: str
    args: tuple[str, ...] = ()
    kwargs: Mapping[str, str] = field(default_factory=_empty_params)
    children: tuple[Node, ...] = ()
    self_closing: bool = False
    offset: int = 0


Node = Union[Text, Style, Frame, Badge, Glyph, Shield, Component]


def _params(pairs: Iterable[tuple[str, str]]) -> str:
    return "".join(f":{key}={value}" for key, value in pairs)


def serialize(nodes: Iterable[Node]) -> str:
    """Serialize nodes back into template syntax.

    Parsing the result yields an equivalent tree. The component expander uses
    this to substitute already-expanded children for ``$content``.
    """
    out: list[str] = []
    for node in nodes:
        match node:
            case Text(value=value):
                out.append(value)
            case Style():
                params: list[tuple[str, str]] = []
                if node.spacing is not None:
                    params.append(("spacing", str(node.spacing)))
                if node.separator is not None:
                    params.append(("separator", node.separator.to_param()))
                out.append(f"{{{{{node.id}{_params(params)}}}}}")
                out.append(serialize(node.children))
                out.append(f"{{{{/{node.id}}}}}")
            case Frame():
                out.append(f"{{{{frame:{node.id}}}}}{serialize(node.children)}{{{{/frame}}}}")
            case Badge():
                out.append(f"{{{{badge:{node.id}}}}}{serialize(node.children)}{{{{/badge}}}}")
            case Glyph():
                out.append(f"{{{{glyph:{node.id}/}}}}")
            case Shield():
                out.append(f"{{{{shields:{node.kind}{_params(node.params.items())}/}}}}")
            case Component():
                head = "ui:" + ":".join((node.id, *node.args))
                head += _params(node.kwargs.items())
                if node.self_closing:
                    out.append(f"{{{{{head}/}}}}")
                else:
                    out.append(f"{{{{{head}}}}}{serialize(node.children)}{{{{/ui}}}}")
    return "".join(out)


def rebase(nodes: Iterable[Node], offset: int) -> list[Node]:
    """Return copies of ``nodes`` (recursively) with every offset set to ``offset``."""
    rebased: list[Node] = []
    for node in nodes:
        if isinstance(node, (Style, Frame, Badge, Component)):
            rebased.append(replace(node, offset=offset, children=tuple(rebase(node.children, offset))))
        else:
            rebased.append(replace(node, offset=offset))
    return rebased


def contains_component(nodes: Iterable[Node]) -> bool:
    """Return True if any node in the tree is a `Component`."""
    for node in nodes:
        if isinstance(node, Component):
            return True
        if isinstance(node, (Style, Frame, Badge)) and contains_component(node.children):
            return True
    return False
