# topmark:header:start
#
#   project      : mdfx
#   file         : parser.py
#   file_relpath : src/mdfx/compiler/parser.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Build the primitive AST from scanner output.

The parser keeps a stack of open block tags. Opening tags push, closing tags
must match the innermost open tag and pop it into a finished node, and
self-closing tags never push. Parameters are validated here: structural
problems raise `ParseError` subclasses, unrecognised parameters are recorded as
warnings so newer templates keep working with older registries.

Unknown identifiers are handled according to `ParseMode`: ``LENIENT`` keeps the
tag as literal text (the braces were coincidental), ``STRICT`` raises the
matching `ResolutionError` with suggestions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING

from mdfx.compiler.nodes import Badge, Component, Frame, Glyph, SeparatorSpec, Shield, Style, Text
from mdfx.compiler.resolver import NodeKind, TagResolver
from mdfx.compiler.scanner import Literal, Scanner, TagForm, is_identifier
from mdfx.config.logging import get_logger
from mdfx.constants import DEFAULT_MAX_EXPANSION_DEPTH, DEFAULT_MAX_NESTING_DEPTH
from mdfx.core.diagnostics import DiagnosticLog
from mdfx.core.errors import (
    InvalidParameterError,
    MismatchedTagError,
    NestingTooDeepError,
    UnclosedTagError,
    UnknownComponentReferenceError,
)
from mdfx.registry.model import (
    ComponentDef,
    Namespace,
    SeparatorDef,
    ShieldKindDef,
    parse_series,
)
from mdfx.registry.registry import RESERVED_SEPARATOR_CHARS

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mdfx.compiler.nodes import Node
    from mdfx.compiler.resolver import ResolvedTag
    from mdfx.compiler.scanner import TagOccurrence
    from mdfx.config.logging import MdfxLogger
    from mdfx.registry.registry import Registry

logger: MdfxLogger = get_logger(__name__)

_UINT_RE = re.compile(r"[0-9]+\Z")
_UDECIMAL_RE = re.compile(r"[0-9]+(?:\.[0-9]+)?\Z")


class ParseMode(str, Enum):
    """Policy for tags that resolve to nothing."""

    LENIENT = "lenient"
    STRICT = "strict"


@dataclass(frozen=True)
class CompileOptions:
    """Options shared by the parser and the component expander.

    Attributes:
        mode (ParseMode): Unknown-tag policy.
        max_nesting_depth (int): Maximum number of simultaneously open block tags.
        max_expansion_depth (int): Maximum component expansion recursion depth.
    """

    mode: ParseMode = ParseMode.LENIENT
    max_nesting_depth: int = DEFAULT_MAX_NESTING_DEPTH
    max_expansion_depth: int = DEFAULT_MAX_EXPANSION_DEPTH

    @property
    def strict(self) -> bool:
        """Return True in strict mode."""
        return self.mode is ParseMode.STRICT


@dataclass
class _OpenTag:
    """An opening tag awaiting its closer."""

    tag: TagOccurrence
    resolved: ResolvedTag
    build: Callable[[tuple[Node, ...]], Node]
    children: list[Node] = field(default_factory=lambda: [])

    @property
    def expected_closer(self) -> str:
        if self.resolved.kind is NodeKind.STYLE:
            return f"{{{{/{self.tag.id}}}}}"
        if self.resolved.kind is NodeKind.COMPONENT:
            return "{{/ui}}"
        return f"{{{{/{self.resolved.kind.value}}}}}"


def _append_text(target: list[Node], text: Text) -> None:
    """Append ``text``, merging it with a preceding text node of the same kind."""
    if target:
        last = target[-1]
        if isinstance(last, Text) and last.verbatim == text.verbatim:
            target[-1] = Text(last.value + text.value, last.verbatim, last.offset)
            return
    target.append(text)


class Parser:
    """Parse template text into a list of nodes.

    Args:
        registry (Registry): Definitions to resolve tags against.
        options (CompileOptions | None): Mode and limits.
        diagnostics (DiagnosticLog | None): Where soft errors are recorded.
        in_expansion (bool): True when parsing a component's expansion template;
            references to unknown components then raise
            `UnknownComponentReferenceError` regardless of the mode.
        content_spans (Sequence[tuple[int, int]]): Ranges of the expansion text
            that hold substituted caller content; unknown tags there follow
            the normal mode rules.
    """

    def __init__(
        self,
        registry: Registry,
        options: CompileOptions | None = None,
        diagnostics: DiagnosticLog | None = None,
        *,
        in_expansion: bool = False,
        content_spans: Sequence[tuple[int, int]] = (),
    ) -> None:
        self.registry = registry
        self.options = options or CompileOptions()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.resolver = TagResolver(registry)
        self.in_expansion = in_expansion
        self.content_spans = tuple(content_spans)

    def parse(self, text: str) -> list[Node]:
        """Parse ``text``.

        Returns:
            The top-level nodes.

        Raises:
            ParseError: On structural errors (unclosed, mismatched, too deep,
                invalid parameters).
            ResolutionError: On unknown tags in strict mode.
            UnknownComponentReferenceError: On unknown components inside an
                expansion template.
        """
        root: list[Node] = []
        stack: list[_OpenTag] = []

        for segment in Scanner(text, self.diagnostics):
            target = stack[-1].children if stack else root
            if isinstance(segment, Literal):
                _append_text(target, Text(segment.text, segment.verbatim, segment.offset))
                continue
            if segment.form is TagForm.CLOSE:
                self._close(segment, stack, root)
                continue
            resolved = self.resolver.resolve_tag(segment)
            if resolved is None:
                self._unknown(segment, target)
                continue
            self._open(segment, resolved, stack, target)

        if stack:
            innermost = stack[-1]
            raise UnclosedTagError(innermost.tag.label, offset=innermost.tag.start)
        return root

    # --- Tag handling ---

    def _unknown(self, tag: TagOccurrence, target: list[Node]) -> None:
        if (
            self.in_expansion
            and tag.namespace == "ui"
            and not any(start <= tag.start < end for start, end in self.content_spans)
        ):
            raise UnknownComponentReferenceError(
                tag.id,
                offset=tag.start,
                suggestions=self.registry.suggest(Namespace.COMPONENT, tag.id),
            )
        error = self.resolver.unknown(tag)
        if self.options.strict:
            raise error
        self.diagnostics.add_warning(
            f"{error.message}; left as text"
            + (f"; did you mean: {', '.join(error.suggestions)}?" if error.suggestions else ""),
            offset=tag.start,
        )
        _append_text(target, Text(tag.raw, offset=tag.start))

    def _close(self, tag: TagOccurrence, stack: list[_OpenTag], root: list[Node]) -> None:
        closer = self.resolver.resolve_closer(tag)
        if stack:
            top = stack[-1]
            if (
                closer is not None
                and closer.kind is top.resolved.kind
                and (closer.id is None or closer.id == top.resolved.id)
            ):
                stack.pop()
                parent = stack[-1].children if stack else root
                parent.append(top.build(tuple(top.children)))
                return
            if closer is not None or self.options.strict:
                raise MismatchedTagError(top.expected_closer, tag.raw, offset=tag.start)
        elif self.options.strict:
            raise MismatchedTagError(None, tag.raw, offset=tag.start)

        target = stack[-1].children if stack else root
        self.diagnostics.add_warning(
            f"closing tag '{tag.raw}' does not close anything; left as text", offset=tag.start
        )
        _append_text(target, Text(tag.raw, offset=tag.start))

    def _push(
        self,
        tag: TagOccurrence,
        resolved: ResolvedTag,
        stack: list[_OpenTag],
        build: Callable[[tuple[Node, ...]], Node],
    ) -> None:
        if len(stack) >= self.options.max_nesting_depth:
            raise NestingTooDeepError(self.options.max_nesting_depth, offset=tag.start)
        stack.append(_OpenTag(tag=tag, resolved=resolved, build=build))

    def _open(
        self,
        tag: TagOccurrence,
        resolved: ResolvedTag,
        stack: list[_OpenTag],
        target: list[Node],
    ) -> None:
        offset = tag.start
        ident = resolved.id
        block = tag.form is TagForm.OPEN

        match resolved.kind:
            case NodeKind.STYLE:
                separator, spacing = self._style_params(tag)

                def build_style(children: tuple[Node, ...]) -> Node:
                    return Style(ident, separator, spacing, children, offset)

                self._block_or_leaf(tag, resolved, stack, target, block, build_style)
            case NodeKind.FRAME:
                self._warn_params(tag)

                def build_frame(children: tuple[Node, ...]) -> Node:
                    return Frame(ident, children, offset)

                self._block_or_leaf(tag, resolved, stack, target, block, build_frame)
            case NodeKind.BADGE:
                self._warn_params(tag)

                def build_badge(children: tuple[Node, ...]) -> Node:
                    if any(not isinstance(c, Text) or c.verbatim for c in children):
                        raise InvalidParameterError(
                            f"badge '{ident}' content must be plain text", offset=offset
                        )
                    return Badge(ident, children, offset)

                self._block_or_leaf(tag, resolved, stack, target, block, build_badge)
            case NodeKind.GLYPH:
                self._warn_params(tag)
                target.append(Glyph(ident, offset))
            case NodeKind.SHIELD:
                assert isinstance(resolved.definition, ShieldKindDef)
                params = self._shield_params(tag, resolved.definition)
                target.append(Shield(ident, params, offset))
            case NodeKind.COMPONENT:
                assert isinstance(resolved.definition, ComponentDef)
                definition = resolved.definition
                args, kwargs = self._component_params(tag, definition)
                if definition.self_closing or not block:
                    target.append(
                        Component(ident, args, kwargs, (), self_closing=True, offset=offset)
                    )
                    return

                def build_component(children: tuple[Node, ...]) -> Node:
                    return Component(ident, args, kwargs, children, self_closing=False, offset=offset)

                self._push(tag, resolved, stack, build_component)

    def _block_or_leaf(
        self,
        tag: TagOccurrence,
        resolved: ResolvedTag,
        stack: list[_OpenTag],
        target: list[Node],
        block: bool,
        build: Callable[[tuple[Node, ...]], Node],
    ) -> None:
        if block:
            self._push(tag, resolved, stack, build)
        else:
            target.append(build(()))

    # --- Parameters ---

    def _warn(self, tag: TagOccurrence, message: str) -> None:
        logger.debug("%s: %s", tag.raw, message)
        self.diagnostics.add_warning(f"{tag.raw}: {message}", offset=tag.start)

    def _warn_params(self, tag: TagOccurrence) -> None:
        for token in tag.params:
            self._warn(tag, f"ignoring unrecognised parameter '{token}'")

    def _style_params(self, tag: TagOccurrence) -> tuple[SeparatorSpec | None, int | None]:
        separator: SeparatorSpec | None = None
        spacing: int | None = None
        for i, token in enumerate(tag.params):
            key, eq, value = token.partition("=")
            if not eq:
                self._warn(tag, f"ignoring unrecognised parameter '{token}'")
            elif key == "spacing":
                if not _UINT_RE.match(value):
                    raise InvalidParameterError(
                        f"spacing must be a non-negative integer, got '{value}'",
                        offset=tag.start,
                    )
                spacing = int(value)
            elif key == "separator":
                if not value and tag.params[i + 1 : i + 2] == ("",):
                    # The tag was split on the ":" separator value itself.
                    value = ":"
                separator = self._separator(tag, value)
            else:
                self._warn(tag, f"ignoring unrecognised parameter '{key}'")
        return separator, spacing

    def _separator(self, tag: TagOccurrence, value: str) -> SeparatorSpec:
        if not value or value in RESERVED_SEPARATOR_CHARS:
            raise InvalidParameterError(
                f"invalid separator '{value}': use a separator name or a single character "
                "other than ':', '/' and '}'",
                offset=tag.start,
            )
        char = self.registry.resolve_separator(value)
        if char is None:
            raise InvalidParameterError(
                f"unknown separator '{value}'",
                offset=tag.start,
                suggestions=self.registry.suggest(Namespace.SEPARATOR, value),
            )
        definition = self.registry.lookup(Namespace.SEPARATOR, value)
        name = definition.id if isinstance(definition, SeparatorDef) else None
        return SeparatorSpec(char=char, name=name)

    def _shield_params(self, tag: TagOccurrence, definition: ShieldKindDef) -> MappingProxyType[str, str]:
        params: dict[str, str] = {}
        known = definition.known_params
        for token in tag.params:
            key, eq, value = token.partition("=")
            if not eq:
                self._warn(tag, f"ignoring positional parameter '{token}'")
                continue
            key = definition.canonical_param(key)
            if key not in known:
                self._warn(tag, f"ignoring unrecognised parameter '{key}'")
                continue
            params[key] = value

        missing = [key for key in definition.required if not params.get(key)]
        if missing:
            raise InvalidParameterError(
                f"shield '{definition.id}' requires parameter(s): {', '.join(missing)}",
                offset=tag.start,
            )
        for key, default in definition.defaults.items():
            params.setdefault(key, default)

        for key in definition.numeric_params:
            value = params.get(key)
            if value is None:
                continue
            if not _UINT_RE.match(value):
                raise InvalidParameterError(
                    f"{key} must be a non-negative integer, got '{value}'", offset=tag.start
                )
            limit = definition.limits.get(key)
            if limit is not None and int(value) > limit:
                raise InvalidParameterError(
                    f"{key} must be at most {limit}, got {value}", offset=tag.start
                )
        for key in definition.decimal_params:
            value = params.get(key)
            if value is not None and not _UDECIMAL_RE.match(value):
                raise InvalidParameterError(
                    f"{key} must be a non-negative number, got '{value}'", offset=tag.start
                )
        for key in definition.series_params:
            value = params.get(key)
            if value is None:
                continue
            try:
                parse_series(value)
            except ValueError:
                raise InvalidParameterError(
                    f"{key} must be comma-separated numbers, got '{value}'", offset=tag.start
                ) from None
        for key, allowed in definition.choices.items():
            value = params.get(key)
            if value is not None and value not in allowed:
                raise InvalidParameterError(
                    f"{key} must be one of {', '.join(allowed)}, got '{value}'", offset=tag.start
                )
        return MappingProxyType(params)

    def _component_params(
        self, tag: TagOccurrence, definition: ComponentDef
    ) -> tuple[tuple[str, ...], MappingProxyType[str, str]]:
        args: list[str] = []
        kwargs: dict[str, str] = {}
        for token in tag.params:
            key, eq, value = token.partition("=")
            if eq and is_identifier(key):
                if key not in definition.optional and key not in definition.args:
                    self._warn(tag, f"component '{definition.id}' has no parameter '{key}'")
                kwargs[key] = value
            else:
                args.append(token)

        for i, name in enumerate(definition.args):
            if i >= len(args) and name not in kwargs:
                raise InvalidParameterError(
                    f"component '{definition.id}' requires argument '{name}'", offset=tag.start
                )
        if len(args) > len(definition.args):
            surplus = ", ".join(args[len(definition.args) :])
            self._warn(tag, f"ignoring surplus argument(s): {surplus}")
        return tuple(args), MappingProxyType(kwargs)
