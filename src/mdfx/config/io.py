# topmark:header:start
#
#   project      : mdfx
#   file         : io.py
#   file_relpath : src/mdfx/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""TOML I/O helpers for the mdfx configuration layer.

Kept apart from the model classes to avoid import cycles.

Typical flow:
    1. Load defaults from the packaged resource (``load_defaults_dict``).
    2. Load project/user TOML files (``load_toml_dict``).
    3. Inspect values with the typed helpers (``get_table_value``, ...).
    4. Serialize back to TOML when needed (``to_toml``), optionally nested
       under ``[tool.mdfx]`` for ``pyproject.toml`` (``nest_toml_under_section``).

Notes:
    - Parsing uses `toml`; `tomlkit` is only used by ``nest_toml_under_section``,
      which must preserve the comments of the default configuration.
"""

from __future__ import annotations

from importlib.resources import files
from typing import TYPE_CHECKING, Any, TypeGuard

import toml
import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError
from tomlkit.items import Table

from mdfx.config.logging import get_logger
from mdfx.constants import DEFAULT_TOML_CONFIG_NAME, DEFAULT_TOML_CONFIG_PACKAGE

if TYPE_CHECKING:
    from pathlib import Path

    from mdfx.config.logging import MdfxLogger

logger: MdfxLogger = get_logger(__name__)

TomlTable = dict[str, Any]

__all__: list[str] = [
    "TomlTable",
    "is_toml_table",
    "get_table_value",
    "get_string_value_or_none",
    "get_bool_value_or_none",
    "get_int_value_or_none",
    "load_default_config_text",
    "load_defaults_dict",
    "read_toml_dict",
    "load_toml_dict",
    "to_toml",
    "nest_toml_under_section",
]


def is_toml_table(val: Any) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(val, dict)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Extract a sub-table; missing or non-table values yield an empty dict."""
    value: Any | None = table.get(key)
    return value if is_toml_table(value) else {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table.

    Strings are returned as is; ``int``, ``float`` and ``bool`` values are
    coerced with ``str(...)``. Missing or non-coercible values yield ``None``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        str | None: The string value, or ``None``.
    """
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    return None


def get_bool_value_or_none(table: TomlTable, key: str) -> bool | None:
    """Extract an optional boolean value; integers are coerced with ``bool()``."""
    value: Any | None = table.get(key)
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return bool(value)
    return None


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Extract an optional integer value (booleans are rejected)."""
    value: Any | None = table.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def load_default_config_text() -> str:
    """Return the packaged default configuration, comments included.

    Raises:
        RuntimeError: If the bundled resource cannot be read.
    """
    resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
    logger.debug("Loading defaults from package resource: %s", resource)
    try:
        return resource.read_text(encoding="utf8")
    except OSError as exc:
        raise RuntimeError(
            f"Cannot read bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r}: {exc}"
        ) from exc


def load_defaults_dict() -> TomlTable:
    """Return the packaged default configuration as a Python dict.

    Raises:
        RuntimeError: If the bundled resource cannot be read or is invalid TOML.
    """
    text: str = load_default_config_text()
    try:
        data: TomlTable = toml.loads(text)
    except toml.TomlDecodeError as exc:
        raise RuntimeError(
            f"Bundled default config {DEFAULT_TOML_CONFIG_PACKAGE!r}/"
            f"{DEFAULT_TOML_CONFIG_NAME!r} is invalid TOML: {exc}"
        ) from exc
    return data


def read_toml_dict(path: Path) -> TomlTable:
    """Parse a TOML file, letting read and decode errors propagate.

    Raises:
        OSError: If the file cannot be read.
        toml.TomlDecodeError: If the file is not valid TOML.
    """
    return toml.load(path)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``mdfx.toml``, ``pyproject.toml``, ...).

    Returns:
        TomlTable: The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        val: TomlTable = read_toml_dict(path)
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        val = {}
    except toml.TomlDecodeError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        val = {}
    return val


def to_toml(data: TomlTable) -> str:
    """Serialize a TOML table to a string."""
    return toml.dumps(data)


def nest_toml_under_section(toml_doc: str, section_keys: str) -> str:
    r"""Return ``toml_doc`` nested under a dotted section path, comments preserved.

    ``nest_toml_under_section("a = 1\\n", "tool.mdfx")`` yields a document
    equivalent to ``[tool.mdfx]\na = 1``. Leading comments stay in front of the
    new section.

    Args:
        toml_doc (str): Original TOML document.
        section_keys (str): Dotted section path such as ``"tool.mdfx"``.

    Returns:
        str: The nested document.

    Raises:
        ValueError: If ``section_keys`` has no non-empty component.
        RuntimeError: If the document cannot be parsed.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(toml_doc)
    except TomlkitParseError as exc:
        raise RuntimeError(f"Error parsing TOML document: {exc}") from exc

    keys: list[str] = [k for k in section_keys.split(".") if k]
    if not keys:
        raise ValueError("section_keys must contain at least one non-empty component")

    # Leading comments and whitespace (before the first key) stay at the top.
    start_index: int = len(doc.body)
    for i, (key, _) in enumerate(doc.body):
        if key is not None:
            start_index = i
            break

    new_doc: tomlkit.TOMLDocument = tomlkit.document()
    new_doc.body.extend(doc.body[0:start_index])

    current_level: tomlkit.TOMLDocument | Table = new_doc
    for key in keys:
        current_level.add(key, tomlkit.table())
        next_level = current_level[key]
        assert isinstance(next_level, Table)
        current_level = next_level

    for item_key, item_value in doc.items():
        current_level.add(item_key, item_value)
    return new_doc.as_string()
