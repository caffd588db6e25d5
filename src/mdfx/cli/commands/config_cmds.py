# topmark:header:start
#
#   project      : mdfx
#   file         : config_cmds.py
#   file_relpath : src/mdfx/cli/commands/config_cmds.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx `init-config` and `dump-config` commands.

``init-config`` prints the bundled default configuration (comments included)
as a starting point for ``mdfx.toml``; with ``--pyproject`` it is nested under
``[tool.mdfx]`` for pasting into ``pyproject.toml``.

``dump-config`` prints the effective configuration after merging defaults,
user and project files and ``--config`` files, wrapped between
``# === BEGIN ===`` and ``# === END ===`` markers.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import click

from mdfx.cli.cmd_common import get_console, get_effective_verbosity, load_config
from mdfx.cli.options import CONTEXT_SETTINGS
from mdfx.config.io import load_default_config_text, nest_toml_under_section, to_toml
from mdfx.constants import PYPROJECT_TOOL_SECTION

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike


@click.command(
    name="init-config",
    help="Display an initial mdfx configuration file.",
    context_settings=CONTEXT_SETTINGS,
)
@click.option(
    "--pyproject",
    is_flag=True,
    default=False,
    help=f"Nest the configuration under [tool.{PYPROJECT_TOOL_SECTION}] for pyproject.toml.",
)
def init_config_command(*, pyproject: bool) -> None:
    """Print a starter config file to stdout."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)

    text = load_default_config_text()
    if pyproject:
        text = nest_toml_under_section(text, f"tool.{PYPROJECT_TOOL_SECTION}")
    console.print(text, nl=not text.endswith("\n"))


@click.command(
    name="dump-config",
    help="Dump the final merged mdfx configuration as TOML.",
    context_settings=CONTEXT_SETTINGS,
)
def dump_config_command() -> None:
    """Print the effective configuration between BEGIN/END markers."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    config = load_config(ctx)

    if get_effective_verbosity(ctx) <= logging.INFO:
        for source in config.config_files:
            console.print(console.styled(f"# config: {source}", dim=True))
    console.print("# === BEGIN ===")
    console.print(to_toml(config.to_toml_dict()), nl=False)
    console.print("# === END ===")
