# topmark:header:start
#
#   project      : mdfx
#   file         : shields.py
#   file_relpath : src/mdfx/rendering/shields.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""shields.io backend: visual primitives as remote badge image URLs.

Only URLs are built; nothing is fetched. Colour parameters arrive already
resolved to hex values (see `TargetRenderer`), shield styles are normalised
through the registry's style aliases.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from urllib.parse import quote

from mdfx.constants import SHIELDS_BASE_URL
from mdfx.core.errors import RenderError
from mdfx.registry.model import parse_series
from mdfx.rendering.plaintext import rating_icons, spark_blocks, wave_blocks

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mdfx.registry.registry import Registry

DEFAULT_SHIELD_STYLE = "flat-square"


def escape_badge_text(text: str) -> str:
    """Escape text for a shields.io static badge path segment.

    Dashes and underscores are doubled (shields.io uses them as delimiters),
    everything else is percent-encoded; an empty text becomes a single space.
    """
    if not text:
        return "%20"
    return quote(text.replace("-", "--").replace("_", "__"), safe="")


def badge_url(message: str, color: str, style: str, **query: str) -> str:
    """Return a static badge URL with an empty label.

    Args:
        message: Already escaped message segment.
        color: Hex colour (no ``#``).
        style: shields.io style name.
        **query: Additional query parameters, appended in order.
    """
    params = [f"style={style}"] + [f"{key}={quote(value, safe='')}" for key, value in query.items()]
    return f"{SHIELDS_BASE_URL}/-{message}-{color}?{'&'.join(params)}"


def image(url: str) -> str:
    """Wrap a URL in Markdown image syntax."""
    return f"![]({url})"


class ShieldsBackend:
    """Render shield kinds as shields.io Markdown images."""

    def __init__(self, registry: Registry) -> None:
        self.registry = registry

    def _style(self, params: Mapping[str, str]) -> str:
        return self.registry.resolve_shield_style(params.get("style", DEFAULT_SHIELD_STYLE))

    def render(self, kind: str, params: Mapping[str, str]) -> str:
        """Return the Markdown for one shield.

        Args:
            kind: Canonical shield kind id.
            params: Parameters with colours resolved to hex.

        Returns:
            One or more Markdown image references.
        """
        style = self._style(params)
        match kind:
            case "swatch" | "status":
                color = params["color"] if kind == "swatch" else params["level"]
                return image(badge_url("%20", color, style))
            case "twotone":
                return image(badge_url("%20", params["right"], style, label="", labelColor=params["left"]))
            case "bar":
                colors = [c for c in params["colors"].split(",") if c]
                return "".join(image(badge_url("%20", color, style)) for color in colors)
            case "icon":
                bg = params["bg"]
                return image(
                    badge_url(
                        escape_badge_text(params.get("label", "")),
                        bg,
                        style,
                        logo=params["logo"],
                        logoColor=params["logoColor"],
                        label="",
                        labelColor=bg,
                    )
                )
            case "progress" | "donut" | "gauge":
                message = escape_badge_text(f"{params['percent']}%")
                return image(badge_url(message, params["fill"], style, label="", labelColor=params["track"]))
            case "sparkline":
                message = escape_badge_text(spark_blocks(parse_series(params["values"])))
                return image(
                    badge_url(message, params["stroke"], style, label="", labelColor=params["track"])
                )
            case "rating":
                icons = rating_icons(float(params["value"]), int(params["max"]), params["icon"])
                return image(badge_url(escape_badge_text(icons), params["fill"], style))
            case "waveform":
                message = escape_badge_text(wave_blocks(parse_series(params["values"])))
                return image(
                    badge_url(message, params["positive"], style, label="", labelColor=params["track"])
                )
        raise RenderError(f"no shields.io rendering for shield kind '{kind}'")
