# topmark:header:start
#
#   project      : mdfx
#   file         : test_backends.py
#   file_relpath : tests/rendering/test_backends.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for the shields.io, SVG and plain text backends."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mdfx.core.errors import RenderError
from mdfx.rendering.plaintext import (
    progress_bar,
    rating_icons,
    render_plaintext,
    spark_blocks,
    status_indicator,
    wave_blocks,
)
from mdfx.rendering.shields import ShieldsBackend, badge_url, escape_badge_text
from mdfx.rendering.svg import render_svg
from tests.conftest import parametrize

if TYPE_CHECKING:
    from mdfx.registry.registry import Registry

BASE = "https://img.shields.io/badge"


@parametrize(
    "text, expected",
    [
        ("", "%20"),
        ("v1.0", "v1.0"),
        ("a-b_c", "a--b__c"),
        ("50%", "50%25"),
        ("two words", "two%20words"),
    ],
)
def test_escape_badge_text(text: str, expected: str) -> None:
    """Dashes and underscores are doubled, the rest percent-encoded."""
    assert escape_badge_text(text) == expected


def test_badge_url_query_order() -> None:
    """Style comes first; extra query parameters keep their order."""
    url = badge_url("%20", "ff0000", "flat", logo="rust", label="")
    assert url == f"{BASE}/-%20-ff0000?style=flat&logo=rust&label="


def test_shields_icon(registry: Registry) -> None:
    """Icons carry logo, logo colour and matching label colour."""
    params = {"logo": "rust", "bg": "292a2d", "logoColor": "ffffff", "style": "ftb", "label": ""}
    assert ShieldsBackend(registry).render("icon", params) == (
        f"![]({BASE}/-%20-292a2d?style=for-the-badge&logo=rust&logoColor=ffffff"
        "&label=&labelColor=292a2d)"
    )


def test_shields_bar_is_one_image_per_colour(registry: Registry) -> None:
    """Empty entries in the colour list are skipped."""
    out = ShieldsBackend(registry).render("bar", {"colors": "111111,,222222"})
    assert out == (
        f"![]({BASE}/-%20-111111?style=flat-square)![]({BASE}/-%20-222222?style=flat-square)"
    )


def test_shields_progress(registry: Registry) -> None:
    """Percent meters show the value as message."""
    params = {"percent": "50", "fill": "f41c80", "track": "35363a"}
    assert ShieldsBackend(registry).render("progress", params) == (
        f"![]({BASE}/-50%25-f41c80?style=flat-square&label=&labelColor=35363a)"
    )


def test_shields_sparkline(registry: Registry) -> None:
    """Series render as block elements in the badge message."""
    params = {"values": "1,8", "stroke": "f41c80", "track": "35363a"}
    assert ShieldsBackend(registry).render("sparkline", params) == (
        f"![]({BASE}/-%E2%96%81%E2%96%88-f41c80?style=flat-square&label=&labelColor=35363a)"
    )


def test_shields_rating(registry: Registry) -> None:
    """Ratings show filled and empty icons."""
    params = {"value": "2", "max": "3", "icon": "heart", "fill": "eab308"}
    assert ShieldsBackend(registry).render("rating", params) == (
        f"![]({BASE}/-%E2%99%A5%E2%99%A5%E2%99%A1-eab308?style=flat-square)"
    )


def test_shields_unknown_kind(registry: Registry) -> None:
    """Kinds without a shields.io form are render errors."""
    with pytest.raises(RenderError):
        ShieldsBackend(registry).render("hologram", {})


@parametrize(
    "percent, bar",
    [
        (0, "[----------]"),
        (50, "[#####-----]"),
        (100, "[##########]"),
        (34, "[###-------]"),
    ],
)
def test_progress_bar(percent: int, bar: str) -> None:
    """Ten cells, rounded."""
    assert progress_bar(percent) == bar


@parametrize(
    "values, blocks",
    [
        ((1, 2, 3, 4, 5, 6, 7, 8), "▁▂▃▄▅▆▇█"),
        ((5, 5, 5), "▄▄▄"),
        ((3,), "▄"),
        ((0, 10, 5), "▁█▅"),
    ],
)
def test_spark_blocks(values: tuple[float, ...], blocks: str) -> None:
    """Values scale between the smallest and largest; flat series sit mid height."""
    assert spark_blocks(values) == blocks


def test_wave_blocks_centre_on_zero() -> None:
    """Zero maps to the middle block whatever the spread of the series."""
    assert wave_blocks((-2, 0, 2)) == "▁▅█"
    assert wave_blocks((0, 0)) == "▄▄"


@parametrize(
    "value, maximum, icon, expected",
    [
        (3.5, 5, "star", "★★★★☆"),
        (3.4, 5, "star", "★★★☆☆"),
        (0, 3, "circle", "○○○"),
        (9, 4, "heart", "♥♥♥♥"),
    ],
)
def test_rating_icons(value: float, maximum: int, icon: str, expected: str) -> None:
    """Scores round half up and never exceed the maximum."""
    assert rating_icons(value, maximum, icon) == expected


@parametrize(
    "level, indicator",
    [
        ("success", "[OK]"),
        ("WARNING", "[WARN]"),
        ("fail", "[ERR]"),
        ("info", "[INFO]"),
        ("mystery", "[?]"),
    ],
)
def test_status_indicator(level: str, indicator: str) -> None:
    """Levels are matched case-insensitively."""
    assert status_indicator(level) == indicator


@parametrize(
    "kind, params, expected",
    [
        ("twotone", {"left": "111111", "right": "abcdef"}, "[#111111|#ABCDEF]"),
        ("bar", {"colors": "111111,222222"}, "--- #111111 #222222 ---"),
        ("bar", {"colors": ""}, "---"),
        ("icon", {"logo": "python", "label": "3.12"}, "[python 3.12]"),
        ("gauge", {"percent": "7"}, "[7/100]"),
        ("sparkline", {"values": "0,10,5"}, "▁█▅"),
        ("rating", {"value": "3.5", "max": "5", "icon": "star"}, "★★★★☆ 3.5/5"),
        ("waveform", {"values": "-2,0,2"}, "▁▅█"),
    ],
)
def test_render_plaintext(kind: str, params: dict[str, str], expected: str) -> None:
    """Every shield kind has a text form."""
    assert render_plaintext(kind, params, params) == expected


def test_render_plaintext_unknown_kind() -> None:
    """Unknown kinds are render errors."""
    with pytest.raises(RenderError):
        render_plaintext("hologram", {}, {})


SPARKLINE = {
    "values": "1,5,3",
    "type": "line",
    "width": "60",
    "height": "20",
    "stroke": "f41c80",
    "track": "35363a",
    "stroke_width": "2",
    "dots": "false",
}
RATING = {
    "value": "2.5",
    "max": "5",
    "size": "20",
    "spacing": "2",
    "icon": "star",
    "fill": "eab308",
    "empty": "64748b",
}
WAVEFORM = {
    "values": "2,-1,0",
    "width": "12",
    "height": "20",
    "bar_width": "3",
    "spacing": "1",
    "positive": "22c55e",
    "negative": "ef4444",
    "track": "35363a",
    "center": "false",
}

SVG_CASES = [
    ("swatch", {"color": "f41c80", "width": "20", "height": "20"}),
    ("twotone", {"left": "111111", "right": "222222", "width": "40", "height": "20"}),
    ("bar", {"colors": "111111,222222,333333", "width": "20", "height": "10"}),
    ("icon", {"logo": "rust", "bg": "292a2d", "logoColor": "ffffff", "label": "<&>"}),
    ("status", {"level": "22c55e"}),
    ("progress", {"percent": "30", "width": "100", "height": "10", "fill": "f41c80", "track": "35363a"}),
    ("donut", {"percent": "75", "size": "40", "thickness": "4", "fill": "f41c80", "track": "35363a"}),
    ("gauge", {"percent": "40", "size": "80", "thickness": "8", "fill": "f41c80", "track": "35363a"}),
    ("sparkline", {**SPARKLINE, "type": "area", "dots": "true"}),
    ("rating", RATING),
    ("waveform", {**WAVEFORM, "values": "1,-2,0,3", "width": "40", "center": "true"}),
]


@parametrize("kind, params", SVG_CASES)
def test_render_svg_is_deterministic(kind: str, params: dict[str, str]) -> None:
    """The same inputs always produce the same document."""
    first = render_svg(kind, params)
    assert first == render_svg(kind, dict(reversed(list(params.items()))))
    assert first.startswith('<svg xmlns="http://www.w3.org/2000/svg"')
    assert first.endswith("</svg>\n")


def test_render_svg_swatch() -> None:
    """A swatch is one filled rectangle."""
    svg = render_svg("swatch", {"color": "f41c80", "width": "20", "height": "10"})
    assert 'width="20" height="10" viewBox="0 0 20 10"' in svg
    assert '<rect x="0" y="0" width="20" height="10" fill="#f41c80"/>' in svg


def test_render_svg_escapes_text() -> None:
    """Label text is XML-escaped."""
    svg = render_svg("icon", {"logo": "rust", "bg": "000000", "logoColor": "ffffff", "label": "<&>"})
    assert "&lt;&amp;&gt;" in svg


def test_render_svg_zero_progress_has_no_fill() -> None:
    """Only the track is drawn at zero percent."""
    svg = render_svg(
        "progress", {"percent": "0", "width": "100", "height": "10", "fill": "f41c80", "track": "35363a"}
    )
    assert "f41c80" not in svg


def test_render_svg_unknown_kind() -> None:
    """Unknown kinds are render errors."""
    with pytest.raises(RenderError):
        render_svg("hologram", {})


def test_render_svg_sparkline_types() -> None:
    """Line charts are one polyline; bar charts are one rectangle per value."""
    line = render_svg("sparkline", SPARKLINE)
    assert line.count("<polyline") == 1
    assert "<circle" not in line
    assert "<polygon" not in line

    bars = render_svg("sparkline", {**SPARKLINE, "type": "bar"})
    assert "<polyline" not in bars
    assert bars.count('fill="#f41c80"') == 3


def test_render_svg_rating_clips_partial_icon() -> None:
    """A fractional score clips one filled icon; the value is capped at the maximum."""
    svg = render_svg("rating", RATING)
    assert 'width="108" height="20"' in svg
    assert svg.count('fill="#64748b"') == 5
    assert svg.count('fill="#eab308"') == 3
    assert svg.count("<clipPath") == 1

    capped = render_svg("rating", {**RATING, "value": "7", "icon": "circle"})
    assert capped.count("<circle") == 10
    assert "<clipPath" not in capped


def test_render_svg_waveform_signs() -> None:
    """Positive values rise above the centre line and negative ones hang below."""
    svg = render_svg("waveform", WAVEFORM)
    assert '<rect x="0" y="0" width="3" height="10" fill="#22c55e"/>' in svg
    assert '<rect x="4" y="10" width="3" height="5" fill="#ef4444"/>' in svg
    assert svg.count("<rect") == 3
