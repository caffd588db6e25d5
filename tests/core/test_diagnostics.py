# topmark:header:start
#
#   project      : mdfx
#   file         : test_diagnostics.py
#   file_relpath : tests/core/test_diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for the diagnostic log."""

from __future__ import annotations

from mdfx.core.diagnostics import Diagnostic, DiagnosticLevel, DiagnosticLog, compute_diagnostic_stats


def test_levels_and_stats() -> None:
    """Diagnostics are counted per level."""
    log = DiagnosticLog()
    log.add_info("i")
    log.add_warning("w", offset=3)
    log.add_warning("w2")

    stats = log.stats()
    assert (stats.n_info, stats.n_warning, stats.n_error) == (1, 2, 0)
    assert stats.total == 3
    assert log.stats().n_warning == 2
    assert not log.has_error()

    log.add_error("e")
    assert log.has_error()
    assert compute_diagnostic_stats(log).n_error == 1


def test_extend_keeps_order() -> None:
    """Merged logs keep the original order."""
    first, second = DiagnosticLog(), DiagnosticLog()
    first.add_warning("a")
    second.add_error("b")
    first.extend(second)
    assert [d.message for d in first] == ["a", "b"]
    assert len(first) == 2


def test_describe_position() -> None:
    """Offsets are reported as positions when the source is known."""
    diagnostic = Diagnostic(DiagnosticLevel.WARNING, "careful", 4)
    assert diagnostic.describe() == "careful (offset 4)"
    assert diagnostic.describe("ab\ncdef") == "careful (line 2, column 2)"
    assert Diagnostic(DiagnosticLevel.INFO, "note").describe("x") == "note"
