# topmark:header:start
#
#   project      : mdfx
#   file         : svg.py
#   file_relpath : src/mdfx/rendering/svg.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""SVG documents for shield kinds.

`render_svg` is a pure function of the shield kind and its resolved parameters:
the same inputs always produce byte-identical output, which is what makes the
asset cache's content addressing sound.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING
from xml.sax.saxutils import escape

from mdfx.core.errors import RenderError
from mdfx.registry.model import parse_series

if TYPE_CHECKING:
    from collections.abc import Mapping

_SVG_NS = "http://www.w3.org/2000/svg"
_FONT = 'font-family="Verdana, DejaVu Sans, sans-serif"'


def _fmt(value: float) -> str:
    """Format a coordinate with at most two decimals and no trailing zeros."""
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return text if text != "-0" else "0"


def _svg(width: float, height: float, body: list[str]) -> str:
    w, h = _fmt(width), _fmt(height)
    lines = [f'<svg xmlns="{_SVG_NS}" width="{w}" height="{h}" viewBox="0 0 {w} {h}">']
    lines.extend(f"  {element}" for element in body)
    lines.append("</svg>")
    return "\n".join(lines) + "\n"


def _rect(x: float, y: float, width: float, height: float, color: str) -> str:
    return (
        f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(width)}" height="{_fmt(height)}" '
        f'fill="#{color}"/>'
    )


def _swatch(params: Mapping[str, str]) -> str:
    width, height = int(params["width"]), int(params["height"])
    return _svg(width, height, [_rect(0, 0, width, height, params["color"])])


def _twotone(params: Mapping[str, str]) -> str:
    width, height = int(params["width"]), int(params["height"])
    half = width / 2
    return _svg(
        width,
        height,
        [_rect(0, 0, half, height, params["left"]), _rect(half, 0, width - half, height, params["right"])],
    )


def _bar(params: Mapping[str, str]) -> str:
    colors = [c for c in params["colors"].split(",") if c]
    block, height = int(params["width"]), int(params["height"])
    body = [_rect(i * block, 0, block, height, color) for i, color in enumerate(colors)]
    return _svg(block * len(colors), height, body)


def _icon(params: Mapping[str, str]) -> str:
    text = params.get("label") or params["logo"]
    width, height = 16 + 7 * len(text), 20
    return _svg(
        width,
        height,
        [
            _rect(0, 0, width, height, params["bg"]),
            f'<text x="{_fmt(width / 2)}" y="14" text-anchor="middle" fill="#{params["logoColor"]}" '
            f'{_FONT} font-size="11">{escape(text)}</text>',
        ],
    )


def _status(params: Mapping[str, str]) -> str:
    return _svg(16, 16, [f'<circle cx="8" cy="8" r="6" fill="#{params["level"]}"/>'])


def _progress(params: Mapping[str, str]) -> str:
    width, height = int(params["width"]), int(params["height"])
    filled = width * int(params["percent"]) / 100
    body = [_rect(0, 0, width, height, params["track"])]
    if filled > 0:
        body.append(_rect(0, 0, filled, height, params["fill"]))
    return _svg(width, height, body)


def _donut(params: Mapping[str, str]) -> str:
    size, thickness = int(params["size"]), int(params["thickness"])
    center = size / 2
    radius = center - thickness / 2
    circumference = 2 * math.pi * radius
    fill = circumference * int(params["percent"]) / 100
    c, r = _fmt(center), _fmt(radius)
    return _svg(
        size,
        size,
        [
            f'<circle cx="{c}" cy="{c}" r="{r}" fill="none" stroke="#{params["track"]}" '
            f'stroke-width="{thickness}"/>',
            f'<circle cx="{c}" cy="{c}" r="{r}" fill="none" stroke="#{params["fill"]}" '
            f'stroke-width="{thickness}" stroke-dasharray="{_fmt(fill)} {_fmt(circumference - fill)}" '
            f'transform="rotate(-90 {c} {c})"/>',
        ],
    )


def _gauge(params: Mapping[str, str]) -> str:
    size, thickness = int(params["size"]), int(params["thickness"])
    center = size / 2
    radius = center - thickness / 2
    arc_y = radius + thickness / 2
    half_circumference = math.pi * radius
    fill = half_circumference * int(params["percent"]) / 100
    path = (
        f"M {_fmt(center - radius)} {_fmt(arc_y)} "
        f"A {_fmt(radius)} {_fmt(radius)} 0 0 1 {_fmt(center + radius)} {_fmt(arc_y)}"
    )
    return _svg(
        size,
        size / 2 + thickness,
        [
            f'<path d="{path}" fill="none" stroke="#{params["track"]}" stroke-width="{thickness}"/>',
            f'<path d="{path}" fill="none" stroke="#{params["fill"]}" stroke-width="{thickness}" '
            f'stroke-dasharray="{_fmt(fill)} {_fmt(half_circumference)}"/>',
        ],
    )




def _scale(values: tuple[float, ...]) -> list[float]:
    """Map values to 0..1 between their minimum and maximum (0.5 when flat)."""
    low, high = min(values), max(values)
    if high <= low:
        return [0.5] * len(values)
    return [(v - low) / (high - low) for v in values]


def _sparkline(params: Mapping[str, str]) -> str:
    values = parse_series(params["values"])
    width, height = int(params["width"]), int(params["height"])
    stroke, stroke_width = params["stroke"], int(params["stroke_width"])
    body = [_rect(0, 0, width, height, params["track"])]
    levels = _scale(values)

    if params["type"] == "bar":
        slot = width / len(values)
        for i, level in enumerate(levels):
            bar = max(level * height, 1)
            body.append(_rect(i * slot + slot * 0.1, height - bar, slot * 0.8, bar, stroke))
        return _svg(width, height, body)

    pad = stroke_width / 2
    step = (width - 2 * pad) / (len(values) - 1) if len(values) > 1 else 0
    points = [
        (pad + i * step if len(values) > 1 else width / 2, pad + (1 - level) * (height - 2 * pad))
        for i, level in enumerate(levels)
    ]
    line = " ".join(f"{_fmt(x)},{_fmt(y)}" for x, y in points)
    if params["type"] == "area":
        area = f"{_fmt(points[0][0])},{_fmt(height)} {line} {_fmt(points[-1][0])},{_fmt(height)}"
        body.append(f'<polygon points="{area}" fill="#{stroke}" fill-opacity="0.35"/>')
    body.append(
        f'<polyline points="{line}" fill="none" stroke="#{stroke}" stroke-width="{stroke_width}" '
        'stroke-linejoin="round" stroke-linecap="round"/>'
    )
    if params["dots"] == "true":
        body.extend(
            f'<circle cx="{_fmt(x)}" cy="{_fmt(y)}" r="{_fmt(stroke_width)}" fill="#{stroke}"/>'
            for x, y in points
        )
    return _svg(width, height, body)


def _star_points(cx: float, cy: float, radius: float) -> str:
    points: list[str] = []
    for i in range(10):
        r = radius if i % 2 == 0 else radius * 0.4
        angle = math.pi / 5 * i - math.pi / 2
        points.append(f"{_fmt(cx + r * math.cos(angle))},{_fmt(cy + r * math.sin(angle))}")
    return " ".join(points)


def _rating_icon(icon: str, x: float, size: float, color: str, clip: str = "") -> str:
    r = size / 2
    attrs = f'fill="#{color}"' + (f' clip-path="url(#{clip})"' if clip else "")
    match icon:
        case "heart":
            path = (
                f"M {_fmt(x + r)} {_fmt(size * 0.9)} "
                f"L {_fmt(x + size * 0.1)} {_fmt(size * 0.5)} "
                f"A {_fmt(size * 0.24)} {_fmt(size * 0.24)} 0 0 1 {_fmt(x + r)} {_fmt(size * 0.25)} "
                f"A {_fmt(size * 0.24)} {_fmt(size * 0.24)} 0 0 1 {_fmt(x + size * 0.9)} {_fmt(size * 0.5)} Z"
            )
            return f'<path d="{path}" {attrs}/>'
        case "circle":
            return f'<circle cx="{_fmt(x + r)}" cy="{_fmt(r)}" r="{_fmt(r * 0.8)}" {attrs}/>'
    return f'<polygon points="{_star_points(x + r, r, r)}" {attrs}/>'


def _rating(params: Mapping[str, str]) -> str:
    maximum, size, spacing = int(params["max"]), int(params["size"]), int(params["spacing"])
    value = min(float(params["value"]), maximum)
    icon = params["icon"]
    width = maximum * size + max(maximum - 1, 0) * spacing
    body: list[str] = []
    for i in range(maximum):
        x = i * (size + spacing)
        body.append(_rating_icon(icon, x, size, params["empty"]))
        fraction = min(max(value - i, 0), 1)
        if fraction >= 1:
            body.append(_rating_icon(icon, x, size, params["fill"]))
        elif fraction > 0:
            clip = f"part{i}"
            body.append(
                f'<clipPath id="{clip}"><rect x="{_fmt(x)}" y="0" width="{_fmt(size * fraction)}" '
                f'height="{size}"/></clipPath>'
            )
            body.append(_rating_icon(icon, x, size, params["fill"], clip))
    return _svg(width, size, body)


def _waveform(params: Mapping[str, str]) -> str:
    values = parse_series(params["values"])
    width, height = int(params["width"]), int(params["height"])
    bar_width, spacing = int(params["bar_width"]), int(params["spacing"])
    middle = height / 2
    peak = max(abs(v) for v in values) or 1
    body = [_rect(0, 0, width, height, params["track"])]
    if params["center"] == "true":
        body.append(_rect(0, middle - 0.5, width, 1, params["positive"]))
    for i, v in enumerate(values):
        x = i * (bar_width + spacing)
        if x + bar_width > width:
            break
        bar = abs(v) / peak * middle
        if bar == 0:
            continue
        if v > 0:
            body.append(_rect(x, middle - bar, bar_width, bar, params["positive"]))
        else:
            body.append(_rect(x, middle, bar_width, bar, params["negative"]))
    return _svg(width, height, body)


_RENDERERS = {
    "swatch": _swatch,
    "twotone": _twotone,
    "bar": _bar,
    "icon": _icon,
    "status": _status,
    "progress": _progress,
    "donut": _donut,
    "gauge": _gauge,
    "sparkline": _sparkline,
    "rating": _rating,
    "waveform": _waveform,
}


def render_svg(kind: str, params: Mapping[str, str]) -> str:
    """Return the SVG document for a shield.

    Args:
        kind: Canonical shield kind id.
        params: Parameters with colours resolved to hex and defaults filled in.

    Raises:
        RenderError: If ``kind`` has no SVG rendering.
    """
    renderer = _RENDERERS.get(kind)
    if renderer is None:
        raise RenderError(f"no SVG rendering for shield kind '{kind}'")
    return renderer(params)
