# topmark:header:start
#
#   project      : mdfx
#   file         : options.py
#   file_relpath : src/mdfx/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, config, render
settings) and their resolution logic, so commands and the group stay thin.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from mdfx.cli.cli_types import EnumChoiceParam
from mdfx.cli.errors import MdfxUsageError
from mdfx.config.logging import TRACE_LEVEL, get_logger
from mdfx.rendering.targets import Backend, Target

P = ParamSpec("P")
R = TypeVar("R")

LOG_LEVELS = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}

logger = get_logger(__name__)


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity as a logging level.

    One ``-v`` selects INFO, two DEBUG, three or more TRACE; ``-q`` selects
    ERROR. The default is WARNING. Diagnostics are printed when their level is
    at least the resolved level.

    Raises:
        MdfxUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise MdfxUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")

    if verbose_count >= 3:  # -vvv
        return LOG_LEVELS["TRACE"]
    if verbose_count == 2:  # -vv
        return LOG_LEVELS["DEBUG"]
    if verbose_count == 1:  # -v
        return LOG_LEVELS["INFO"]
    if quiet_count >= 1:  # -q
        return LOG_LEVELS["ERROR"]
    return LOG_LEVELS["WARNING"]


#: Click context settings shared by the group and its commands.
CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
}


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add counting ``-v/--verbose`` and ``-q/--quiet`` options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to three times for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress warnings and informational output.",
    )(f)
    return f


class ColorMode(str, Enum):
    """Color output modes for ``--color``."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Honors ``--color``/``--no-color`` first, then ``FORCE_COLOR`` and
    ``NO_COLOR``, and finally enables color when stdout is a TTY.
    """
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` (auto, always, never) and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config FILE`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore user and project config files (only use defaults).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def assets_dir_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--assets-dir DIR``."""
    return click.option(
        "--assets-dir",
        "assets_dir",
        type=click.Path(file_okay=False, dir_okay=True),
        default=None,
        help="Directory for generated SVG assets and manifest.json.",
    )(f)


def common_render_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--backend``, ``--assets-dir`` and ``--strict``."""
    f = click.option(
        "--strict",
        is_flag=True,
        default=False,
        help="Treat unknown tags as errors instead of literal text.",
    )(f)
    f = assets_dir_option(f)
    f = click.option(
        "--backend",
        type=EnumChoiceParam(Backend),
        default=None,
        help=f"Shield backend ({', '.join(b.value for b in Backend)}); default depends on target.",
    )(f)
    return f


def target_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--target``."""
    return click.option(
        "--target",
        type=EnumChoiceParam(Target),
        default=None,
        help=f"Publishing target ({', '.join(t.value for t in Target)}).",
    )(f)
