# topmark:header:start
#
#   project      : mdfx
#   file         : diagnostics.py
#   file_relpath : src/mdfx/core/diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Soft diagnostics collected while compiling and rendering templates.

Hard failures are raised as `mdfx.core.errors.MdfxError`. Everything that must
not abort a document (unknown tags in lenient mode, unrecognised parameters,
unterminated code fences, corrupt manifests, failed asset writes) is recorded
here instead and reported by the caller.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * Diagnostic: immutable payload (level, message, optional offset).
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable collection with helpers for adding and summarizing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, cast

from yachalk import chalk

from mdfx.config.logging import get_logger
from mdfx.core.location import locate

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from mdfx.config.logging import MdfxLogger


logger: MdfxLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics, ordered ERROR > WARNING > INFO."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.INFO: chalk.blue,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class Diagnostic:
    """A structured diagnostic with a severity level, message and source offset."""

    level: DiagnosticLevel
    message: str
    offset: int | None = None

    def describe(self, source: str | None = None) -> str:
        """Return ``message``, suffixed with the line/column when known."""
        if self.offset is None:
            return self.message
        if source is None:
            return f"{self.message} (offset {self.offset})"
        return f"{self.message} ({locate(source, self.offset)})"


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics for one compile/render run."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str, *, offset: int | None = None) -> None:
        """Add an ``info`` diagnostic.

        Args:
            message: The diagnostic message.
            offset: Optional source offset the diagnostic refers to.
        """
        self._add(Diagnostic(DiagnosticLevel.INFO, message, offset))

    def add_warning(self, message: str, *, offset: int | None = None) -> None:
        """Add a ``warning`` diagnostic.

        Args:
            message: The diagnostic message.
            offset: Optional source offset the diagnostic refers to.
        """
        self._add(Diagnostic(DiagnosticLevel.WARNING, message, offset))

    def add_error(self, message: str, *, offset: int | None = None) -> None:
        """Add an ``error`` diagnostic.

        Args:
            message: The diagnostic message.
            offset: Optional source offset the diagnostic refers to.
        """
        self._add(Diagnostic(DiagnosticLevel.ERROR, message, offset))

    def extend(self, diagnostics: Iterable[Diagnostic]) -> None:
        """Append diagnostics collected elsewhere, keeping their order."""
        for diagnostic in diagnostics:
            self._add(diagnostic)

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_error(self) -> bool:
        """Return True if the log contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: The diagnostics to count.

    Returns:
        The per-level counts.
    """
    n_info = n_warning = n_error = 0
    for d in diagnostics:
        if d.level == DiagnosticLevel.INFO:
            n_info += 1
        elif d.level == DiagnosticLevel.WARNING:
            n_warning += 1
        else:
            n_error += 1
    return DiagnosticStats(n_info=n_info, n_warning=n_warning, n_error=n_error)
