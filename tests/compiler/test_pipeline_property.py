# topmark:header:start
#
#   project      : mdfx
#   file         : test_pipeline_property.py
#   file_relpath : tests/compiler/test_pipeline_property.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

# pyright: strict

"""Property tests for the compile/render pipeline.

This suite generates plain text and well-formed templates and asserts:
1) text without tags passes through byte for byte, for every target,
   including the local target without an asset cache,
2) rendering is idempotent: output contains no tags, so a second pass is a no-op,
3) every line ending of the template survives rendering.
"""

from __future__ import annotations

from hypothesis import HealthCheck, given, settings

from mdfx.compiler.pipeline import process_text
from mdfx.registry.registry import Registry
from mdfx.rendering.targets import Target
from tests.conftest import mark_hypothesis_slow
from tests.strategies_mdfx import s_plain_text, s_template

REGISTRY: Registry = Registry.builtin()


@mark_hypothesis_slow
@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(text=s_plain_text(max_size=200))
def test_plain_text_passes_through(text: str) -> None:
    """Documents without tags are returned unchanged."""
    for target in Target:
        assert process_text(text, REGISTRY, target) == text


@mark_hypothesis_slow
@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(template=s_template())
def test_render_is_idempotent(template: str) -> None:
    """Rendered output has no tags left, so processing it again changes nothing."""
    once = process_text(template, REGISTRY)
    assert "{{" not in once
    assert process_text(once, REGISTRY) == once


@mark_hypothesis_slow
@settings(suppress_health_check=[HealthCheck.too_slow], deadline=None, max_examples=60)
@given(template=s_template())
def test_line_endings_survive(template: str) -> None:
    """Tags never add or remove line breaks."""
    out = process_text(template, REGISTRY, Target.PYPI)
    assert out.count("\r\n") == template.count("\r\n")
    assert out.count("\n") == template.count("\n")
