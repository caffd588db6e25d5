# topmark:header:start
#
#   project      : mdfx
#   file         : plaintext.py
#   file_relpath : src/mdfx/rendering/plaintext.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Plain text backend: text fallbacks for destinations without images.

Flat badges become bracketed ASCII; charts of number series use Unicode block
elements, which every Markdown destination displays.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from mdfx.core.errors import RenderError
from mdfx.registry.model import parse_series

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

PROGRESS_CELLS = 10

SPARK_BLOCKS = "▁▂▃▄▅▆▇█"

RATING_ICONS: dict[str, tuple[str, str]] = {
    "star": ("★", "☆"),
    "heart": ("♥", "♡"),
    "circle": ("●", "○"),
}

_STATUS_INDICATORS: dict[str, str] = {
    "success": "[OK]",
    "ok": "[OK]",
    "pass": "[OK]",
    "green": "[OK]",
    "warning": "[WARN]",
    "warn": "[WARN]",
    "yellow": "[WARN]",
    "error": "[ERR]",
    "err": "[ERR]",
    "fail": "[ERR]",
    "red": "[ERR]",
    "info": "[INFO]",
    "blue": "[INFO]",
}


def _hex(color: str) -> str:
    return f"#{color.upper()}"


def progress_bar(percent: int, cells: int = PROGRESS_CELLS) -> str:
    """Return ``[#####-----]`` style bar for ``percent`` (0-100)."""
    filled = round(percent * cells / 100)
    return "[" + "#" * filled + "-" * (cells - filled) + "]"


def status_indicator(level: str) -> str:
    """Return the bracketed indicator for a status level name."""
    return _STATUS_INDICATORS.get(level.lower(), "[?]")


def spark_blocks(values: Sequence[float], low: float | None = None, high: float | None = None) -> str:
    """Return one block element per value, scaled between ``low`` and ``high``.

    The bounds default to the smallest and largest value; a flat series sits
    at mid height.
    """
    low = min(values) if low is None else low
    high = max(values) if high is None else high
    top = len(SPARK_BLOCKS) - 1
    if high <= low:
        return SPARK_BLOCKS[top // 2] * len(values)
    return "".join(SPARK_BLOCKS[round((v - low) / (high - low) * top)] for v in values)


def wave_blocks(values: Sequence[float]) -> str:
    """Return block elements for a signed series, zero at mid height."""
    peak = max(abs(v) for v in values)
    return spark_blocks(values, -peak, peak)


def rating_icons(value: float, maximum: int, icon: str = "star") -> str:
    """Return ``maximum`` icons, the first ``value`` (rounded half up) filled."""
    filled_icon, empty_icon = RATING_ICONS[icon]
    filled = min(math.floor(value + 0.5), maximum)
    return filled_icon * filled + empty_icon * (maximum - filled)


def render_plaintext(kind: str, params: Mapping[str, str], raw: Mapping[str, str]) -> str:
    """Return the text fallback for one shield.

    Args:
        kind: Canonical shield kind id.
        params: Parameters with colours resolved to hex.
        raw: Parameters as written (palette names intact).
    """
    match kind:
        case "swatch":
            return f"[{_hex(params['color'])}]"
        case "twotone":
            return f"[{_hex(params['left'])}|{_hex(params['right'])}]"
        case "bar":
            colors = [c for c in params["colors"].split(",") if c]
            if not colors:
                return "---"
            return "--- " + " ".join(_hex(c) for c in colors) + " ---"
        case "icon":
            label = params.get("label")
            return f"[{params['logo']} {label}]" if label else f"[{params['logo']}]"
        case "status":
            return status_indicator(raw["level"])
        case "progress":
            percent = int(params["percent"])
            return f"{progress_bar(percent)} {percent}%"
        case "donut":
            return f"({params['percent']}%)"
        case "gauge":
            return f"[{params['percent']}/100]"
        case "sparkline":
            return spark_blocks(parse_series(params["values"]))
        case "rating":
            icons = rating_icons(float(params["value"]), int(params["max"]), params["icon"])
            return f"{icons} {params['value']}/{params['max']}"
        case "waveform":
            return wave_blocks(parse_series(params["values"]))
    raise RenderError(f"no text rendering for shield kind '{kind}'")
