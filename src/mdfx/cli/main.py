# topmark:header:start
#
#   project      : mdfx
#   file         : main.py
#   file_relpath : src/mdfx/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Click entry point for the mdfx CLI.

Key ideas:
- Group-level options (verbosity, color, ``--config``/``--no-config``) are
  initialized once and placed into ``ctx.obj``.
- Subcommands read that state through `mdfx.cli.cmd_common`.
- Internal logging is configured from ``MDFX_LOG_LEVEL`` and goes to stderr;
  stdout carries rendered Markdown only.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mdfx.cli.commands.assets import clean_command, verify_command
from mdfx.cli.commands.build import build_command
from mdfx.cli.commands.config_cmds import dump_config_command, init_config_command
from mdfx.cli.commands.convert import convert_command
from mdfx.cli.commands.list_cmd import list_command
from mdfx.cli.commands.process import process_command
from mdfx.cli.commands.version import version_command
from mdfx.cli.console import ClickConsole
from mdfx.cli.options import (
    CONTEXT_SETTINGS,
    ColorMode,
    common_color_options,
    common_config_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from mdfx.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_paths: tuple[str, ...] = (),
    no_config: bool = False,
) -> None:
    """Initialize shared state (verbosity, color, config flags) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
        config_paths (tuple[str, ...]): Extra config files from ``--config``.
        no_config (bool): Whether ``--no-config`` was passed.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)
    ctx.obj["config_paths"] = tuple(config_paths)
    ctx.obj["no_config"] = no_config


@click.group(
    cls=click.Group,
    context_settings=CONTEXT_SETTINGS,
    invoke_without_command=True,
    help="mdfx: Markdown effects compiler.",
)
@common_verbose_options
@common_color_options
@common_config_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
) -> None:
    """Entry point for the mdfx CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
        config_paths=config_paths,
        no_config=no_config,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'mdfx process FILE' to render a template.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(init_config_command)

cli.add_command(dump_config_command)

cli.add_command(process_command)

cli.add_command(build_command)

cli.add_command(convert_command)

cli.add_command(list_command)

cli.add_command(verify_command)

cli.add_command(clean_command)

if __name__ == "__main__":
    cli()
