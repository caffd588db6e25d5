# topmark:header:start
#
#   project      : mdfx
#   file         : __main__.py
#   file_relpath : src/mdfx/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Module entry point for running mdfx via ``python -m mdfx``.

Equivalent to running the ``mdfx`` console script; delegates to
:func:`mdfx.cli.main.cli`.

Examples:
    Render a README for GitHub::

        python -m mdfx process README.template.md -o README.md
"""

from __future__ import annotations

from mdfx.cli.main import cli

if __name__ == "__main__":
    cli()
