# topmark:header:start
#
#   project      : mdfx
#   file         : scanner.py
#   file_relpath : src/mdfx/compiler/scanner.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Code-fence aware scanner for the template dialect.

The scanner splits a document into `Literal` runs and `TagOccurrence`s. It never
fails: text it cannot interpret as a tag stays literal, so concatenating the
raw text of all segments reproduces the input exactly.

Rules:
    * A line starting (after optional indentation) with three or more backticks
      opens a fenced code block; a line made of at least as many backticks
      closes it. Fenced content is verbatim.
    * Outside fences, a backtick run opens an inline code span that closes at the
      next run of the same length on the same line. An unterminated span
      reverts to normal scanning for the rest of that line.
    * ``{{`` starts a tag candidate that ends at the next ``}}`` on the same
      line. Bodies containing ``{{``, a backtick or surrounding whitespace, or
      whose head is not an identifier, are literal text (``{{ jinja }}`` passes
      through untouched).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Union

from mdfx.config.logging import get_logger
from mdfx.core.errors import UnterminatedFenceError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mdfx.config.logging import MdfxLogger
    from mdfx.core.diagnostics import DiagnosticLog

logger: MdfxLogger = get_logger(__name__)

#: Tag prefixes that select a registry namespace.
KNOWN_NAMESPACES: frozenset[str] = frozenset({"frame", "badge", "ui", "shields", "glyph"})

_IDENT_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.\-]*\Z")
_FENCE_OPEN_RE = re.compile(r"[ \t]*(`{3,})")
_FENCE_CLOSE_RE = re.compile(r"[ \t]*(`{3,})[ \t]*\Z")


class TagForm(str, Enum):
    """Syntactic form of a tag occurrence."""

    OPEN = "open"
    CLOSE = "close"
    SELF_CLOSING = "self-closing"


@dataclass(frozen=True)
class Literal:
    """A run of literal text; ``verbatim`` marks code spans and fenced blocks."""

    text: str
    offset: int
    verbatim: bool = False


@dataclass(frozen=True)
class TagOccurrence:
    """A syntactically valid tag found outside code.

    Attributes:
        start (int): Offset of the opening ``{{``.
        end (int): Offset just past the closing ``}}``.
        raw (str): The tag exactly as written.
        namespace (str | None): One of `KNOWN_NAMESPACES`, or None for bare ids.
        id (str): The identifier after the namespace.
        params (tuple[str, ...]): Raw ``key=value`` or positional tokens.
        form (TagForm): Open, close or self-closing.
    """

    start: int
    end: int
    raw: str
    namespace: str | None
    id: str
    params: tuple[str, ...]
    form: TagForm

    @property
    def label(self) -> str:
        """Return ``namespace:id`` (or the bare id)."""
        return f"{self.namespace}:{self.id}" if self.namespace else self.id


Segment = Union[Literal, TagOccurrence]


def is_identifier(token: str) -> bool:
    """Return True if ``token`` is a valid tag identifier."""
    return _IDENT_RE.match(token) is not None


def parse_tag_body(body: str) -> tuple[str | None, str, tuple[str, ...], TagForm] | None:
    """Split a tag body (the text between the braces) into its parts.

    Args:
        body: The raw body, e.g. ``"mathbold:separator=dot"`` or ``"ui:swatch:accent/"``.

    Returns:
        ``(namespace, id, params, form)``, or None if ``body`` is not a tag.
    """
    if not body or body != body.strip():
        return None
    form = TagForm.OPEN
    if body.startswith("/"):
        form = TagForm.CLOSE
        body = body[1:]
    elif body.endswith("/") and not body.endswith("=/"):
        # A '/' right after '=' is a parameter value, not the self-closing marker.
        form = TagForm.SELF_CLOSING
        body = body[:-1]
    if not body:
        return None
    tokens = body.split(":")
    head = tokens[0]
    if not is_identifier(head):
        return None
    if head in KNOWN_NAMESPACES and len(tokens) > 1 and is_identifier(tokens[1]):
        return head, tokens[1], tuple(tokens[2:]), form
    return None, head, tuple(tokens[1:]), form


def _iter_lines(text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(offset, line)`` pairs; lines keep their ``\\n`` terminator."""
    start = 0
    while start < len(text):
        end = text.find("\n", start)
        if end == -1:
            yield start, text[start:]
            return
        yield start, text[start : end + 1]
        start = end + 1


def _find_backtick_run(line: str, start: int, length: int) -> int:
    """Return the index of the next backtick run of exactly ``length``, or -1."""
    j = start
    while True:
        j = line.find("`", j)
        if j == -1:
            return -1
        k = j
        while k < len(line) and line[k] == "`":
            k += 1
        if k - j == length:
            return j
        j = k


class Scanner:
    """Lazy, restartable segmentation of a template document.

    Each call to ``iter()`` starts a fresh scan. Findings that must not abort
    processing (unterminated fences) are recorded in ``diagnostics``.

    Args:
        text (str): The document.
        diagnostics (DiagnosticLog | None): Where to record scan findings.
    """

    def __init__(self, text: str, diagnostics: DiagnosticLog | None = None) -> None:
        self.text = text
        self.diagnostics = diagnostics

    def __iter__(self) -> Iterator[Segment]:
        return self._scan()

    def _scan(self) -> Iterator[Segment]:
        fence: str | None = None
        fence_start = 0
        fence_parts: list[str] = []

        for line_start, line in _iter_lines(self.text):
            content = line.rstrip("\r\n")
            if fence is not None:
                fence_parts.append(line)
                match = _FENCE_CLOSE_RE.match(content)
                if match and len(match.group(1)) >= len(fence):
                    yield Literal("".join(fence_parts), fence_start, verbatim=True)
                    fence = None
                    fence_parts = []
                continue

            match = _FENCE_OPEN_RE.match(content)
            if match and "`" not in content[match.end() :]:
                fence = match.group(1)
                fence_start = line_start
                fence_parts = [line]
                logger.trace("Code fence opened at offset %d", line_start)
                continue

            yield from self._scan_line(line, line_start)

        if fence is not None:
            error = UnterminatedFenceError(offset=fence_start)
            logger.debug("%s", error)
            if self.diagnostics is not None:
                self.diagnostics.add_warning(error.message, offset=fence_start)
            yield Literal("".join(fence_parts), fence_start, verbatim=True)

    def _scan_line(self, line: str, line_start: int) -> Iterator[Segment]:
        i = 0
        lit_start = 0
        n = len(line)
        while i < n:
            ch = line[i]
            if ch == "`":
                run_end = i
                while run_end < n and line[run_end] == "`":
                    run_end += 1
                close = _find_backtick_run(line, run_end, run_end - i)
                if close == -1:
                    # Unterminated inline code: the backticks are plain text.
                    i = run_end
                    continue
                if i > lit_start:
                    yield Literal(line[lit_start:i], line_start + lit_start)
                end = close + (run_end - i)
                yield Literal(line[i:end], line_start + i, verbatim=True)
                i = lit_start = end
                continue
            if ch == "{" and line.startswith("{{", i):
                tag = self._match_tag(line, i, line_start)
                if tag is not None:
                    if i > lit_start:
                        yield Literal(line[lit_start:i], line_start + lit_start)
                    yield tag
                    i = lit_start = tag.end - line_start
                    continue
            i += 1
        if lit_start < n:
            yield Literal(line[lit_start:], line_start + lit_start)

    @staticmethod
    def _match_tag(line: str, i: int, line_start: int) -> TagOccurrence | None:
        close = line.find("}}", i + 2)
        if close == -1:
            return None
        # A closing brace directly after '=' is a (rejected) separator value.
        while line.startswith("=", close - 1) and line.startswith("}}}", close):
            close += 1
        body = line[i + 2 : close]
        if "{{" in body or "`" in body or "\r" in body or "\n" in body:
            return None
        parts = parse_tag_body(body)
        if parts is None:
            return None
        namespace, ident, params, form = parts
        end = close + 2
        return TagOccurrence(
            start=line_start + i,
            end=line_start + end,
            raw=line[i:end],
            namespace=namespace,
            id=ident,
            params=params,
            form=form,
        )
