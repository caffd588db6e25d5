# topmark:header:start
#
#   project      : mdfx
#   file         : expander.py
#   file_relpath : src/mdfx/compiler/expander.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Rewrite component invocations into primitive nodes.

A component's expansion template is a small template document. Expanding a
`Component` node:

1. expands its children (they may hold components themselves);
2. serializes the expanded children back into template syntax, with code
   shelved behind tokens so it is never re-scanned;
3. substitutes ``$content``, ``$1..$n`` and ``$name`` placeholders in the
   template (one pass, substituted text is never re-scanned for placeholders);
4. applies the component's post-process step;
5. re-parses the result, restores the shelved code and expands it again,
   one level deeper.

The spliced nodes take the offset of the component they replace, and errors
raised inside an expansion are relocated there as well, with the chain of
enclosing components recorded on the error.
"""

from __future__ import annotations

import re
from dataclasses import replace
from typing import TYPE_CHECKING

from mdfx.compiler.nodes import Badge, Component, Frame, Style, Text, contains_component, rebase, serialize
from mdfx.compiler.parser import CompileOptions, Parser
from mdfx.config.logging import get_logger
from mdfx.core.diagnostics import DiagnosticLog
from mdfx.core.errors import ExpansionTooDeepError, MdfxError, UnknownComponentReferenceError
from mdfx.registry.model import ComponentDef, Namespace, PostProcess

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mdfx.compiler.nodes import Node
    from mdfx.config.logging import MdfxLogger
    from mdfx.registry.registry import Registry

logger: MdfxLogger = get_logger(__name__)

_PLACEHOLDER_RE = re.compile(r"\$(content|[0-9]+|[A-Za-z_][A-Za-z0-9_]*)")

# Private-use delimiters for code shelved during an expansion.
_SHELF_OPEN = "\ue000"
_SHELF_CLOSE = "\ue001"
_SHELF_TOKEN_RE = re.compile(f"{_SHELF_OPEN}([0-9]+){_SHELF_CLOSE}")


def shelve_verbatim(nodes: Iterable[Node], shelf: list[Text]) -> list[Node]:
    """Replace verbatim `Text` nodes with tokens indexing into ``shelf``.

    Substituted content is re-parsed, and after substitution a code fence may no
    longer start its line. Shelved code is never re-scanned.
    """
    out: list[Node] = []
    for node in nodes:
        match node:
            case Text(verbatim=True):
                out.append(Text(f"{_SHELF_OPEN}{len(shelf)}{_SHELF_CLOSE}", offset=node.offset))
                shelf.append(node)
            case Style() | Frame() | Badge():
                out.append(replace(node, children=tuple(shelve_verbatim(node.children, shelf))))
            case _:
                out.append(node)
    return out


def restore_verbatim(nodes: Iterable[Node], shelf: list[Text], line_prefix: str = "") -> list[Node]:
    """Put shelved code back in place of its tokens.

    ``line_prefix`` is inserted after every line break of the restored code, so
    code moved into a blockquote stays inside it.
    """
    out: list[Node] = []
    for node in nodes:
        match node:
            case Text(verbatim=False) if _SHELF_OPEN in node.value:
                pos = 0
                for token in _SHELF_TOKEN_RE.finditer(node.value):
                    index = int(token.group(1))
                    if index >= len(shelf):
                        continue
                    if token.start() > pos:
                        out.append(Text(node.value[pos : token.start()], offset=node.offset))
                    code = shelf[index]
                    if line_prefix:
                        code = replace(code, value=code.value.replace("\n", "\n" + line_prefix))
                    out.append(code)
                    pos = token.end()
                if pos < len(node.value):
                    out.append(Text(node.value[pos:], offset=node.offset))
            case Style() | Frame() | Badge() | Component():
                out.append(replace(node, children=tuple(restore_verbatim(node.children, shelf, line_prefix))))
            case _:
                out.append(node)
    return out


def placeholder_values(definition: ComponentDef, node: Component) -> dict[str, str]:
    """Return named placeholder values for an invocation.

    Keyword arguments override the definition's optional defaults; named
    positional arguments are bound to ``$name`` as well as ``$N``.
    """
    values: dict[str, str] = dict(definition.optional)
    values.update(node.kwargs)
    for i, name in enumerate(definition.args):
        if i < len(node.args):
            values[name] = node.args[i]
    return values


def substitute(
    definition: ComponentDef, node: Component, content: str
) -> tuple[str, list[tuple[int, int]]]:
    """Fill in a component template.

    Args:
        definition: The component definition.
        node: The invocation.
        content: Serialized, already expanded children.

    Returns:
        The substituted and post-processed text, and the ranges of that text
        that came from ``content``.
    """
    values = placeholder_values(definition, node)
    pieces: list[tuple[str, bool]] = []
    pos = 0
    for match in _PLACEHOLDER_RE.finditer(definition.template):
        pieces.append((definition.template[pos : match.start()], False))
        pos = match.end()
        name = match.group(1)
        if name == "content":
            pieces.append((content, True))
        elif name.isdigit():
            index = int(name) - 1
            if 0 <= index < len(node.args):
                pieces.append((node.args[index], False))
            elif 0 <= index < len(definition.args) and definition.args[index] in values:
                pieces.append((values[definition.args[index]], False))
            else:
                pieces.append((match.group(0), False))
        else:
            pieces.append((values.get(name, match.group(0)), False))
    pieces.append((definition.template[pos:], False))

    if definition.post_process is PostProcess.BLOCKQUOTE:
        pieces = [("> ", False)] + [(text.replace("\n", "\n> "), is_content) for text, is_content in pieces]

    out: list[str] = []
    spans: list[tuple[int, int]] = []
    length = 0
    for text, is_content in pieces:
        if is_content:
            spans.append((length, length + len(text)))
        out.append(text)
        length += len(text)
    return "".join(out), spans


class ComponentExpander:
    """Expand every `Component` in a tree.

    Args:
        registry (Registry): Source of component definitions.
        options (CompileOptions | None): Parse mode and expansion depth limit.
        diagnostics (DiagnosticLog | None): Receives warnings raised by the
            expansion templates themselves.
    """

    def __init__(
        self,
        registry: Registry,
        options: CompileOptions | None = None,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        self.registry = registry
        self.options = options or CompileOptions()
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()

    def expand(self, nodes: Iterable[Node]) -> list[Node]:
        """Return the fully primitive tree for ``nodes``.

        Raises:
            ExpansionTooDeepError: If expansions nest deeper than the configured limit.
            UnknownComponentReferenceError: If a template references an unknown component.
            MdfxError: Any parse error raised by an expansion template, relocated to
                the invoking component.
        """
        expanded = self._expand_all(nodes, 0, self.diagnostics)
        assert not contains_component(expanded)
        return expanded

    def _expand_all(self, nodes: Iterable[Node], depth: int, log: DiagnosticLog) -> list[Node]:
        out: list[Node] = []
        for node in nodes:
            match node:
                case Component():
                    out.extend(self._expand_component(node, depth, log))
                case Style() | Frame() | Badge():
                    out.append(replace(node, children=tuple(self._expand_all(node.children, depth, log))))
                case _:
                    out.append(node)
        return out

    def _expand_component(self, node: Component, depth: int, log: DiagnosticLog) -> list[Node]:
        if depth >= self.options.max_expansion_depth:
            raise ExpansionTooDeepError(node.id, self.options.max_expansion_depth, offset=node.offset)
        definition = self.registry.lookup(Namespace.COMPONENT, node.id)
        if not isinstance(definition, ComponentDef):
            raise UnknownComponentReferenceError(
                node.id,
                offset=node.offset,
                suggestions=self.registry.suggest(Namespace.COMPONENT, node.id),
            )

        shelf: list[Text] = []
        content = ""
        if not node.self_closing:
            content = serialize(shelve_verbatim(self._expand_all(node.children, depth, log), shelf))
        text, spans = substitute(definition, node, content)
        line_prefix = "> " if definition.post_process is PostProcess.BLOCKQUOTE else ""
        logger.trace("Expanding ui:%s (depth %d): %r", node.id, depth, text)

        scratch = DiagnosticLog()
        parser = Parser(
            self.registry,
            self.options,
            scratch,
            in_expansion=True,
            content_spans=spans,
        )
        try:
            parsed = restore_verbatim(parser.parse(text), shelf, line_prefix)
            expanded = self._expand_all(parsed, depth + 1, scratch)
        except MdfxError as err:
            raise err.relocate(node.offset, f"ui:{node.id}") from None

        # Findings inside the caller's content were reported when it was first parsed.
        for diagnostic in scratch:
            if diagnostic.offset is not None and any(s <= diagnostic.offset < e for s, e in spans):
                continue
            log.add_warning(
                f"in expansion of ui:{node.id}: {diagnostic.message}", offset=node.offset
            )
        return rebase(expanded, node.offset)
