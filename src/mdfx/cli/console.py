# topmark:header:start
#
#   project      : mdfx
#   file         : console.py
#   file_relpath : src/mdfx/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end


"""Console for user-facing program output.

Rendered Markdown and listings go to stdout through `ClickConsole.print`;
diagnostics and errors go to stderr. Internal tracing uses `logging` instead
(see `mdfx.config.logging`).
"""

from __future__ import annotations

from typing import Protocol

import click


class ConsoleLike(Protocol):
    """What CLI commands need from a console."""

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write to stdout."""
        ...

    def warn(self, text: str) -> None:
        """Write a diagnostic line to stderr."""
        ...

    def error(self, text: str) -> None:
        """Write an error line to stderr."""
        ...

    def styled(
        self,
        text: str,
        *,
        fg: str | None = None,
        bold: bool = False,
        dim: bool = False,
        underline: bool = False,
    ) -> str:
        """Return ``text`` with ANSI styling, or unchanged when colour is off."""
        ...


class ClickConsole(ConsoleLike):
    """`click.echo` based console.

    Args:
        enable_color (bool): Emit ANSI colour codes.
    """

    def __init__(self, *, enable_color: bool = True) -> None:
        self.enable_color = enable_color

    def print(self, text: str = "", *, nl: bool = True) -> None:
        click.echo(text, nl=nl, color=self.enable_color)

    def warn(self, text: str) -> None:
        click.echo(text, err=True, color=self.enable_color)

    def error(self, text: str) -> None:
        click.echo(self.styled(text, fg="bright_red"), err=True, color=self.enable_color)

    def styled(
        self,
        text: str,
        *,
        fg: str | None = None,
        bold: bool = False,
        dim: bool = False,
        underline: bool = False,
    ) -> str:
        if not self.enable_color:
            return text
        return click.style(text, fg=fg, bold=bold, dim=dim, underline=underline)
