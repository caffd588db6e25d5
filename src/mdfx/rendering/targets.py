# topmark:header:start
#
#   project      : mdfx
#   file         : targets.py
#   file_relpath : src/mdfx/rendering/targets.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Publishing targets and their rendering capabilities.

Each `Target` is described by a `TargetSpec`: what the destination can display
and which `Backend` it prefers. An explicitly requested backend is validated
against those capabilities by [`resolve_backend`][mdfx.rendering.targets.resolve_backend].
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING

from mdfx.core.errors import UnsupportedTargetFeatureError

if TYPE_CHECKING:
    from collections.abc import Mapping


class Target(str, Enum):
    """Where rendered Markdown is published."""

    GITHUB = "github"
    GITLAB = "gitlab"
    NPM = "npm"
    PYPI = "pypi"
    LOCAL = "local"


class Backend(str, Enum):
    """How visual primitives (shields) are rendered.

    ``HYBRID`` uses shields.io images for flat badges and local SVG assets for
    charts (shield kinds flagged ``prefers_svg`` in the registry).
    """

    SHIELDS = "shields"
    SVG = "svg"
    HYBRID = "hybrid"
    PLAINTEXT = "plaintext"


@dataclass(frozen=True)
class TargetSpec:
    """Capabilities of a publishing target.

    Attributes:
        target (Target): The target described.
        description (str): One-line description for listings.
        supports_html (bool): Raw HTML survives on the destination.
        supports_svg_embed (bool): Locally hosted SVG images are displayed.
        supports_external_images (bool): Remote images (shields.io) are displayed.
        preferred_backend (Backend): Backend used when none is requested.
    """

    target: Target
    description: str
    supports_html: bool
    supports_svg_embed: bool
    supports_external_images: bool
    preferred_backend: Backend

    def supports(self, backend: Backend) -> bool:
        """Return True if ``backend`` output can be displayed on this target."""
        if backend is Backend.SHIELDS:
            return self.supports_external_images
        if backend is Backend.SVG:
            return self.supports_svg_embed
        if backend is Backend.HYBRID:
            return self.supports_external_images and self.supports_svg_embed
        return True


TARGET_SPECS: Mapping[Target, TargetSpec] = MappingProxyType(
    {
        Target.GITHUB: TargetSpec(
            Target.GITHUB,
            "GitHub README and wiki pages",
            supports_html=False,
            supports_svg_embed=True,
            supports_external_images=True,
            preferred_backend=Backend.SHIELDS,
        ),
        Target.GITLAB: TargetSpec(
            Target.GITLAB,
            "GitLab README and wiki pages",
            supports_html=True,
            supports_svg_embed=True,
            supports_external_images=True,
            preferred_backend=Backend.SHIELDS,
        ),
        Target.NPM: TargetSpec(
            Target.NPM,
            "npm package README",
            supports_html=False,
            supports_svg_embed=True,
            supports_external_images=True,
            preferred_backend=Backend.SHIELDS,
        ),
        Target.PYPI: TargetSpec(
            Target.PYPI,
            "PyPI long description",
            supports_html=False,
            supports_svg_embed=False,
            supports_external_images=True,
            preferred_backend=Backend.PLAINTEXT,
        ),
        Target.LOCAL: TargetSpec(
            Target.LOCAL,
            "Local documentation with offline SVG assets",
            supports_html=True,
            supports_svg_embed=True,
            supports_external_images=False,
            preferred_backend=Backend.SVG,
        ),
    }
)


def resolve_backend(target: Target, backend: Backend | None = None) -> Backend:
    """Return the backend to use for ``target``.

    Args:
        target: The publishing target.
        backend: Explicit backend override, or None for the target's preference.

    Returns:
        The backend.

    Raises:
        UnsupportedTargetFeatureError: If ``backend`` output cannot be displayed
            on ``target``.
    """
    spec = TARGET_SPECS[target]
    if backend is None:
        return spec.preferred_backend
    if not spec.supports(backend):
        feature = {
            Backend.SHIELDS: "external images",
            Backend.SVG: "embedded SVG images",
            Backend.HYBRID: "external and embedded SVG images",
        }[backend]
        raise UnsupportedTargetFeatureError(target.value, f"{feature} ({backend.value} backend)")
    return backend


def detect_target(path: Path | str) -> Target | None:
    """Guess the publishing target from an output path.

    ``README.md`` is a GitHub page, ``PKG-INFO`` a PyPI description,
    ``package.json`` an npm package, and anything below a ``docs`` or
    ``documentation`` directory local documentation.

    Returns:
        The detected target, or None.
    """
    path = Path(path)
    match path.name:
        case "README.md":
            return Target.GITHUB
        case "PKG-INFO" | "PKG-INFO.md":
            return Target.PYPI
        case "package.json":
            return Target.NPM
    if any(part in ("docs", "documentation") for part in path.parts[:-1]):
        return Target.LOCAL
    return None
