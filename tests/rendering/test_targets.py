# topmark:header:start
#
#   project      : mdfx
#   file         : test_targets.py
#   file_relpath : tests/rendering/test_targets.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for publishing targets, backend selection and target detection."""

from __future__ import annotations

from pathlib import Path

import pytest

from mdfx.core.errors import UnsupportedTargetFeatureError
from mdfx.rendering.targets import TARGET_SPECS, Backend, Target, detect_target, resolve_backend
from tests.conftest import parametrize


def test_every_target_has_capabilities() -> None:
    """Capabilities are declared for all targets."""
    assert set(TARGET_SPECS) == set(Target)
    for target, spec in TARGET_SPECS.items():
        assert spec.target is target
        assert spec.supports(spec.preferred_backend)


@parametrize(
    "target, backend",
    [
        (Target.GITHUB, Backend.SHIELDS),
        (Target.GITLAB, Backend.SHIELDS),
        (Target.NPM, Backend.SHIELDS),
        (Target.PYPI, Backend.PLAINTEXT),
        (Target.LOCAL, Backend.SVG),
    ],
)
def test_preferred_backend(target: Target, backend: Backend) -> None:
    """Without an override the target's preference is used."""
    assert resolve_backend(target) is backend


@parametrize(
    "target, backend",
    [
        (Target.GITHUB, Backend.SVG),
        (Target.PYPI, Backend.SHIELDS),
        (Target.GITLAB, Backend.HYBRID),
        (Target.NPM, Backend.HYBRID),
        (Target.LOCAL, Backend.PLAINTEXT),
    ],
)
def test_supported_override(target: Target, backend: Backend) -> None:
    """Supported overrides are accepted."""
    assert resolve_backend(target, backend) is backend


def test_unsupported_override_names_target_and_feature() -> None:
    """The error says what the target cannot show."""
    with pytest.raises(UnsupportedTargetFeatureError) as excinfo:
        resolve_backend(Target.PYPI, Backend.SVG)
    assert excinfo.value.target == "pypi"
    assert "svg" in excinfo.value.feature


@parametrize(
    "path, target",
    [
        ("README.md", Target.GITHUB),
        ("pkg/README.md", Target.GITHUB),
        ("PKG-INFO", Target.PYPI),
        ("package.json", Target.NPM),
        ("docs/guide.md", Target.LOCAL),
        ("site/documentation/api/index.md", Target.LOCAL),
        ("notes.md", None),
        ("docs.md", None),
    ],
)
def test_detect_target(path: str, target: Target | None) -> None:
    """Output paths suggest a target."""
    assert detect_target(Path(path)) == target
    assert detect_target(path) == target
