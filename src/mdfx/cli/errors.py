# topmark:header:start
#
#   project      : mdfx
#   file         : errors.py
#   file_relpath : src/mdfx/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Exceptions for the mdfx CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. `from_core_error` and `from_os_error` translate
    pipeline and filesystem exceptions.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no
    console is present in the Click context, they fall back to Click's default
    styling.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Any

import click

from mdfx.core.errors import (
    AssetError,
    ExpansionError,
    MdfxError,
    ParseError,
    RenderError,
    ResolutionError,
    UnsupportedTargetFeatureError,
)
from mdfx.core.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path


class MdfxCliError(click.ClickException):
    """Base class for all mdfx CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colour is added by `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class MdfxUsageError(MdfxCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class MdfxTemplateError(MdfxCliError):
    """Error for malformed templates (parse, resolution, expansion, render)."""

    exit_code = ExitCode.TEMPLATE_ERROR


class MdfxEncodingError(MdfxCliError):
    """Error for input that is not valid UTF-8."""

    exit_code = ExitCode.TEMPLATE_ERROR


class MdfxFileNotFoundError(MdfxCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class MdfxUnsupportedTargetError(MdfxCliError):
    """Error when a target cannot host the requested backend."""

    exit_code = ExitCode.UNSUPPORTED_TARGET


class MdfxIOError(MdfxCliError):
    """Error for I/O errors reading/writing files or assets."""

    exit_code = ExitCode.IO_ERROR


class MdfxPermissionDeniedError(MdfxCliError):
    """Error for insufficient permissions (read/write)."""

    exit_code = ExitCode.PERMISSION_DENIED


class MdfxConfigError(MdfxCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class MdfxUnexpectedError(MdfxCliError):
    """Error for unhandled/unknown errors (last resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


def from_core_error(err: MdfxError, *, label: str, source: str | None = None) -> MdfxCliError:
    """Translate a pipeline error into the CLI error carrying its exit code.

    Args:
        err (MdfxError): The pipeline error.
        label (str): Name of the document (path or ``<stdin>``).
        source (str | None): The document text, to report line/column positions.

    Returns:
        MdfxCliError: The CLI error to raise.
    """
    message = f"{label}: {err.describe(source)}"
    if isinstance(err, UnsupportedTargetFeatureError):
        return MdfxUnsupportedTargetError(message)
    if isinstance(err, (ParseError, ResolutionError, ExpansionError, RenderError)):
        return MdfxTemplateError(message)
    if isinstance(err, AssetError):
        return MdfxIOError(message)
    return MdfxUnexpectedError(message)


def from_os_error(err: OSError, path: Path | str) -> MdfxCliError:
    """Translate a filesystem error for ``path`` into a CLI error."""
    if isinstance(err, FileNotFoundError):
        return MdfxFileNotFoundError(f"{path}: no such file")
    if isinstance(err, IsADirectoryError):
        return MdfxUsageError(f"{path}: is a directory")
    if isinstance(err, PermissionError):
        return MdfxPermissionDeniedError(f"{path}: permission denied")
    return MdfxIOError(f"{path}: {err.strerror or err}")
