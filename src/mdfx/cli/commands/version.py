# topmark:header:start
#
#   project      : mdfx
#   file         : version.py
#   file_relpath : src/mdfx/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx `version` command.

Prints the mdfx version as installed in the active Python environment.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from mdfx.cli.cmd_common import get_console, get_effective_verbosity
from mdfx.cli.options import CONTEXT_SETTINGS
from mdfx.constants import MDFX_VERSION

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of mdfx.",
    context_settings=CONTEXT_SETTINGS,
)
def version_command() -> None:
    """Print the installed version."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)

    if get_effective_verbosity(ctx) <= logging.INFO:
        console.print(console.styled("mdfx version:", bold=True, underline=True))
        console.print(f"    {console.styled(MDFX_VERSION, bold=True)}")
    else:
        console.print(console.styled(MDFX_VERSION, bold=True))
