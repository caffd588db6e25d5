# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Core, UI-agnostic primitives shared across mdfx.

The ``mdfx.core`` package holds small building blocks that are safe to import
from anywhere (compiler, rendering, CLI, tests):

- ``errors``: the typed error taxonomy raised by the template pipeline.
- ``diagnostics``: soft diagnostics (info, warnings, errors) collected while
  compiling and rendering.
- ``exit_codes``: CLI exit codes aligned with BSD ``sysexits``.
- ``location``: offset to line/column conversion for error messages.
"""

from __future__ import annotations
