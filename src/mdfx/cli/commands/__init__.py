# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Subcommands of the mdfx CLI (registered in `mdfx.cli.main`)."""
