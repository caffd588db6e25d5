# topmark:header:start
#
#   project      : mdfx
#   file         : constants.py
#   file_relpath : src/mdfx/constants.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

MDFX_VERSION: str = get_version("mdfx")

# Bundled registry data inside the package `mdfx.data`:
REGISTRY_DATA_PACKAGE: str = "mdfx.data"
REGISTRY_DATA_NAME: str = "registry.json"

# Bundled default configuration:
DEFAULT_TOML_CONFIG_PACKAGE: str = "mdfx.data"
DEFAULT_TOML_CONFIG_NAME: str = "mdfx-default.toml"

# Config discovery, merged in this order per directory (`pyproject.toml` uses `[tool.mdfx]`):
CONFIG_FILE_NAMES: tuple[str, ...] = ("pyproject.toml", ".mdfx.toml", "mdfx.toml")
PYPROJECT_TOOL_SECTION: str = "mdfx"

DEFAULT_ASSETS_DIR: str = "assets/mdfx"
MANIFEST_NAME: str = "manifest.json"
MANIFEST_VERSION: str = "1.0.0"

DEFAULT_MAX_NESTING_DEPTH: int = 64
DEFAULT_MAX_EXPANSION_DEPTH: int = 16

# Number of hex characters kept from the SHA-256 asset digest (64 bits).
ASSET_HASH_LENGTH: int = 16

# Strict-mode suggestions.
MAX_SUGGESTIONS: int = 3
MAX_SUGGESTION_DISTANCE: int = 2

SHIELDS_BASE_URL: str = "https://img.shields.io/badge"
