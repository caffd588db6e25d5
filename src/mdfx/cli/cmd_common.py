# topmark:header:start
#
#   project      : mdfx
#   file         : cmd_common.py
#   file_relpath : src/mdfx/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Helpers shared by the mdfx CLI commands.

Commands stay thin: they read shared state from ``ctx.obj`` (console,
verbosity, config flags), resolve the effective `Config` through
`load_config`, and delegate I/O and error translation to this module.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdfx.cli.errors import MdfxConfigError, MdfxEncodingError, from_os_error
from mdfx.config.logging import get_logger
from mdfx.config.model import MutableConfig
from mdfx.core.diagnostics import DiagnosticLevel

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mdfx.cli.console import ConsoleLike
    from mdfx.config.logging import MdfxLogger
    from mdfx.config.model import ArgsLike, Config
    from mdfx.core.diagnostics import Diagnostic

logger: MdfxLogger = get_logger(__name__)

#: Label used for documents read from standard input.
STDIN_LABEL = "<stdin>"

_LEVEL_THRESHOLDS = {
    DiagnosticLevel.INFO: logging.INFO,
    DiagnosticLevel.WARNING: logging.WARNING,
    DiagnosticLevel.ERROR: logging.ERROR,
}


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the project console stored on the context."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity as a logging level (WARNING by default)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", logging.WARNING))


def load_config(ctx: click.Context, cli_args: ArgsLike | None = None) -> Config:
    """Resolve the effective configuration for a command.

    Merges defaults, user and project config files (unless ``--no-config``),
    explicit ``--config`` files and finally ``cli_args``. Config diagnostics
    are printed; an unreadable explicit config file is fatal.

    Raises:
        MdfxConfigError: If an explicit config file cannot be loaded.
    """
    ctx.ensure_object(dict)
    draft = MutableConfig.load_merged(
        extra_config_files=[Path(p) for p in ctx.obj.get("config_paths", ())],
        no_config=bool(ctx.obj.get("no_config", False)),
    )
    draft.apply_cli_args(cli_args or {})
    config = draft.freeze()
    logger.debug("Effective config files: %s", [str(p) for p in config.config_files])

    report_diagnostics(ctx, config.diagnostics, label="config")
    if draft.diagnostics.has_error():
        first = next(d for d in draft.diagnostics if d.level is DiagnosticLevel.ERROR)
        raise MdfxConfigError(first.message)
    return config


def report_diagnostics(
    ctx: click.Context,
    diagnostics: Iterable[Diagnostic],
    *,
    label: str,
    source: str | None = None,
) -> None:
    """Print diagnostics at or above the effective verbosity to stderr.

    Args:
        ctx (click.Context): Current context (console and verbosity).
        diagnostics (Iterable[Diagnostic]): Diagnostics to print.
        label (str): Prefix naming the document or subsystem.
        source (str | None): Document text, for line/column positions.
    """
    console = get_console(ctx)
    threshold = get_effective_verbosity(ctx)
    for diag in diagnostics:
        if _LEVEL_THRESHOLDS[diag.level] < threshold:
            continue
        line = f"{label}: {diag.level.value}: {diag.describe(source)}"
        if ctx.obj.get("color_enabled", False):
            line = diag.level.color(line)
        if diag.level is DiagnosticLevel.INFO:
            console.print(line)
        else:
            console.warn(line)


def read_document(name: str) -> tuple[str, str]:
    """Read a template from a path, or from stdin when ``name`` is ``-``.

    Line endings are preserved as-is.

    Returns:
        tuple[str, str]: The label (path or ``<stdin>``) and the text.

    Raises:
        MdfxCliError: Mapped from filesystem and decoding errors.
    """
    if name == "-":
        label = STDIN_LABEL
        data = sys.stdin.buffer.read()
    else:
        label = name
        try:
            data = Path(name).read_bytes()
        except OSError as exc:
            raise from_os_error(exc, name) from exc
    try:
        return label, data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MdfxEncodingError(
            f"{label}: not valid UTF-8 (byte {exc.start}: {exc.reason})"
        ) from exc


def write_document(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` as UTF-8, creating parent directories.

    Raises:
        MdfxCliError: Mapped from filesystem errors.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
    except OSError as exc:
        raise from_os_error(exc, path) from exc
    logger.debug("Wrote %s", path)


def asset_link_prefix(assets_dir: Path, document: Path | None) -> str:
    """Return how a document refers to ``assets_dir``.

    Relative to the document's directory when the document is written to a
    file; otherwise ``assets_dir`` as given.
    """
    if document is None:
        return assets_dir.as_posix()
    rel = os.path.relpath(assets_dir.resolve(), document.resolve().parent)
    return Path(rel).as_posix()
