# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Command-line interface for mdfx.

The CLI is built with Click. Group-level options (verbosity, color, config
files) are resolved once in `mdfx.cli.main.cli` and stored on ``ctx.obj``;
subcommands live in `mdfx.cli.commands`.
"""

from __future__ import annotations
