# topmark:header:start
#
#   project      : mdfx
#   file         : test_scanner.py
#   file_relpath : tests/compiler/test_scanner.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for the code-fence aware scanner.

The scanner must never fail and never lose text: joining the raw text of all
segments reproduces the input exactly.
"""

from __future__ import annotations

from mdfx.compiler.scanner import (
    Literal,
    Scanner,
    Segment,
    TagForm,
    TagOccurrence,
    parse_tag_body,
)
from mdfx.core.diagnostics import DiagnosticLog
from tests.conftest import parametrize


def _raw(segment: Segment) -> str:
    return segment.text if isinstance(segment, Literal) else segment.raw


def _tags(text: str) -> list[TagOccurrence]:
    return [s for s in Scanner(text) if isinstance(s, TagOccurrence)]


@parametrize(
    "text",
    [
        "",
        "plain text only\n",
        "# {{mathbold}}Title{{/mathbold}}\r\n\r\nbody",
        "```\n{{mathbold}}x{{/mathbold}}\n```\n",
        "a `{{ui:swatch:accent/}}` b {{glyph:star/}}",
        "{{ jinja }} and {{unterminated",
        "````md\n```\ninner\n```\n````\ntail",
    ],
)
def test_segments_reproduce_input(text: str) -> None:
    """Concatenating the raw text of all segments yields the input."""
    assert "".join(_raw(s) for s in Scanner(text)) == text


def test_tag_offsets_and_forms() -> None:
    """Tags report their start/end offsets and syntactic form."""
    text = "ab{{mathbold}}x{{/mathbold}}{{glyph:star/}}"
    tags = _tags(text)

    assert [t.form for t in tags] == [TagForm.OPEN, TagForm.CLOSE, TagForm.SELF_CLOSING]
    assert tags[0].start == 2
    assert text[tags[0].start : tags[0].end] == "{{mathbold}}"
    assert tags[2].namespace == "glyph"
    assert tags[2].id == "star"
    assert tags[2].label == "glyph:star"


def test_fenced_block_is_verbatim() -> None:
    """Tags inside a fenced code block are not recognized."""
    text = "```\n{{mathbold}}x{{/mathbold}}\n```\nafter {{glyph:star/}}\n"
    segments = list(Scanner(text))

    assert isinstance(segments[0], Literal)
    assert segments[0].verbatim
    assert segments[0].text == "```\n{{mathbold}}x{{/mathbold}}\n```\n"
    assert [t.label for t in _tags(text)] == ["glyph:star"]


def test_longer_fence_needs_longer_closer() -> None:
    """A shorter backtick run does not close a longer fence."""
    text = "````\n```\n{{glyph:star/}}\n```\n````\n"
    assert _tags(text) == []


def test_inline_code_span_is_verbatim() -> None:
    """Inline code spans protect their content."""
    text = "use `{{mathbold}}` like {{glyph:star/}}"
    segments = list(Scanner(text))

    verbatim = [s for s in segments if isinstance(s, Literal) and s.verbatim]
    assert [s.text for s in verbatim] == ["`{{mathbold}}`"]
    assert [t.label for t in _tags(text)] == ["glyph:star"]


def test_unterminated_inline_code_reverts_to_text() -> None:
    """A lone backtick does not swallow the rest of the line."""
    assert [t.label for t in _tags("it`s {{glyph:star/}}")] == ["glyph:star"]


def test_unterminated_fence_is_warning() -> None:
    """An unterminated fence is emitted verbatim and reported as a warning."""
    log = DiagnosticLog()
    text = "intro\n```\n{{mathbold}}x\n"
    segments = list(Scanner(text, log))

    assert segments[-1] == Literal("```\n{{mathbold}}x\n", 6, verbatim=True)
    assert log.stats().n_warning
    assert [d.offset for d in log] == [6]


@parametrize(
    "text",
    [
        "{{ jinja }}",
        "{{ mathbold}}",
        "{{$var}}",
        "{{mathbold\n}}",
        "{{}}",
    ],
)
def test_non_tags_stay_literal(text: str) -> None:
    """Bodies that are not tags pass through untouched."""
    assert _tags(text) == []


@parametrize(
    "body, expected",
    [
        ("mathbold", (None, "mathbold", (), TagForm.OPEN)),
        ("/mathbold", (None, "mathbold", (), TagForm.CLOSE)),
        ("mathbold:separator=dot", (None, "mathbold", ("separator=dot",), TagForm.OPEN)),
        ("ui:swatch:accent/", ("ui", "swatch", ("accent",), TagForm.SELF_CLOSING)),
        ("frame:gradient", ("frame", "gradient", (), TagForm.OPEN)),
        ("/frame", (None, "frame", (), TagForm.CLOSE)),
        ("mathbold:separator=/", (None, "mathbold", ("separator=/",), TagForm.OPEN)),
        ("unknownns:x", (None, "unknownns", ("x",), TagForm.OPEN)),
    ],
)
def test_parse_tag_body(body: str, expected: tuple[object, ...]) -> None:
    """Tag bodies split into namespace, id, params and form."""
    assert parse_tag_body(body) == expected


def test_scanner_is_restartable() -> None:
    """Iterating twice yields the same segments."""
    scanner = Scanner("a {{glyph:star/}} b")
    assert list(scanner) == list(scanner)
