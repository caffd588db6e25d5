# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Registry of template definitions.

Exports:
    Registry: immutable lookup of definitions by namespace, id or alias.
    Namespace: the lookup namespaces.
"""

from __future__ import annotations

from mdfx.registry.model import Namespace
from mdfx.registry.registry import Registry

__all__ = ["Namespace", "Registry"]
