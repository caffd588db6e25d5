# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Configuration and logging for mdfx.

- ``io``: TOML loading and serialization helpers.
- ``model``: the mutable builder (`MutableConfig`) and the frozen runtime
  snapshot (`Config`), including layered discovery of config files.
- ``logging``: the mdfx logger class and log setup.

Import the submodules directly; this package does not re-export them so that
``mdfx.config.logging`` stays importable from every layer without cycles.
"""

from __future__ import annotations
