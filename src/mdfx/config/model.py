# topmark:header:start
#
#   project      : mdfx
#   file         : model.py
#   file_relpath : src/mdfx/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Configuration model for mdfx: a mutable builder and a frozen snapshot.

`MutableConfig` collects settings from the bundled defaults, the user config,
project config files discovered upward from the working directory, explicit
``--config`` files and finally CLI flags. `MutableConfig.freeze` turns the
result into an immutable `Config` used at runtime.

Recognized keys (top level of ``mdfx.toml`` / ``.mdfx.toml``, or under
``[tool.mdfx]`` in ``pyproject.toml``):

```toml
root = false
target = "github"
backend = ""
assets_dir = "assets/mdfx"
strict = false
max_nesting_depth = 64
max_expansion_depth = 16

[palette]
brand = "ff6600"

[partials.hero]
template = "{{frame:gradient}}{{mathbold}}$1{{/mathbold}}{{/frame}}"
self_closing = true
args = ["title"]
```

Invalid values and unknown keys never abort loading; they are recorded as
diagnostics on the draft and carried into the frozen `Config`.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

import toml

from mdfx.compiler.parser import CompileOptions, ParseMode
from mdfx.config.io import (
    TomlTable,
    get_bool_value_or_none,
    get_int_value_or_none,
    get_string_value_or_none,
    get_table_value,
    is_toml_table,
    load_defaults_dict,
    load_toml_dict,
    read_toml_dict,
)
from mdfx.config.logging import get_logger
from mdfx.constants import (
    CONFIG_FILE_NAMES,
    DEFAULT_ASSETS_DIR,
    DEFAULT_MAX_EXPANSION_DEPTH,
    DEFAULT_MAX_NESTING_DEPTH,
    PYPROJECT_TOOL_SECTION,
)
from mdfx.core.diagnostics import Diagnostic, DiagnosticLog
from mdfx.registry.model import PostProcess
from mdfx.registry.registry import is_hex_color
from mdfx.rendering.targets import Backend, Target

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mdfx.config.logging import MdfxLogger
    from mdfx.registry.registry import Registry

logger: MdfxLogger = get_logger(__name__)

# ArgsLike keeps the config layer decoupled from click: the CLI passes a plain
# mapping of option names to values (None = not given).
ArgsLike = Mapping[str, Any]

KNOWN_KEYS: frozenset[str] = frozenset(
    {
        "root",
        "target",
        "backend",
        "assets_dir",
        "strict",
        "max_nesting_depth",
        "max_expansion_depth",
        "palette",
        "partials",
    }
)

PARTIAL_KEYS: frozenset[str] = frozenset(
    {"template", "description", "self_closing", "args", "optional", "post_process", "aliases"}
)

_PARTIAL_ID_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.\-]*\Z")


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True)
class Config:
    """Immutable runtime configuration for mdfx.

    Attributes:
        target (Target): Default publishing target.
        backend (Backend | None): Backend override; None uses the target's preferred backend.
        assets_dir (Path): Directory for SVG assets and ``manifest.json``.
        strict (bool): Unknown tags are errors instead of literal text.
        max_nesting_depth (int): Maximum number of simultaneously open block tags.
        max_expansion_depth (int): Maximum component expansion depth.
        palette (Mapping[str, str]): Extra colour names to hex values.
        partials (Mapping[str, Mapping[str, Any]]): User components in the
            registry data layout, keyed by id.
        config_files (tuple[Path | str, ...]): Config sources merged, lowest precedence first.
        diagnostics (tuple[Diagnostic, ...]): Problems found while loading or merging.
    """

    target: Target
    backend: Backend | None
    assets_dir: Path
    strict: bool
    max_nesting_depth: int
    max_expansion_depth: int
    palette: Mapping[str, str]
    partials: Mapping[str, Mapping[str, Any]]
    config_files: tuple[Path | str, ...]
    diagnostics: tuple[Diagnostic, ...]

    def compile_options(self) -> CompileOptions:
        """Return the parser/expander options described by this config."""
        return CompileOptions(
            mode=ParseMode.STRICT if self.strict else ParseMode.LENIENT,
            max_nesting_depth=self.max_nesting_depth,
            max_expansion_depth=self.max_expansion_depth,
        )

    def build_registry(self, base: Registry) -> Registry:
        """Return ``base`` with the configured palette and partials layered on top."""
        if not self.palette and not self.partials:
            return base
        return base.with_overrides(palette=self.palette, components=self.partials)

    def to_toml_dict(self) -> TomlTable:
        """Convert this config into a TOML-serializable dict (for ``dump-config``)."""
        return {
            "target": self.target.value,
            "backend": self.backend.value if self.backend is not None else "",
            "assets_dir": self.assets_dir.as_posix(),
            "strict": self.strict,
            "max_nesting_depth": self.max_nesting_depth,
            "max_expansion_depth": self.max_expansion_depth,
            "palette": dict(self.palette),
            "partials": {k: dict(v) for k, v in self.partials.items()},
        }


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    Scalar fields are tri-state: ``None`` means "not set by this layer" so that
    `merge_with` can fall back to lower layers. ``palette`` and ``partials``
    merge key by key.
    """

    target: Target | None = None
    backend: Backend | None = None
    # True when a layer explicitly cleared the backend (``backend = ""``).
    backend_cleared: bool = False
    assets_dir: str | None = None
    strict: bool | None = None
    max_nesting_depth: int | None = None
    max_expansion_depth: int | None = None
    palette: dict[str, str] = field(default_factory=lambda: {})
    partials: dict[str, TomlTable] = field(default_factory=lambda: {})
    root: bool = False

    config_files: list[Path | str] = field(default_factory=lambda: [])
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------

    def freeze(self) -> Config:
        """Freeze this builder into an immutable `Config`, filling built-in fallbacks."""
        return Config(
            target=self.target or Target.GITHUB,
            backend=self.backend,
            assets_dir=Path(self.assets_dir or DEFAULT_ASSETS_DIR),
            strict=bool(self.strict),
            max_nesting_depth=self.max_nesting_depth or DEFAULT_MAX_NESTING_DEPTH,
            max_expansion_depth=self.max_expansion_depth or DEFAULT_MAX_EXPANSION_DEPTH,
            palette=MappingProxyType(dict(self.palette)),
            partials=MappingProxyType({k: MappingProxyType(dict(v)) for k, v in self.partials.items()}),
            config_files=tuple(self.config_files),
            diagnostics=tuple(self.diagnostics),
        )

    # --------------------------- Loaders/parsers --------------------------

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Load the bundled ``mdfx-default.toml``."""
        draft = cls.from_toml_dict(load_defaults_dict(), source="<defaults>")
        draft.config_files = ["<defaults>"]
        return draft

    @classmethod
    def from_toml_file(cls, path: Path, *, explicit: bool = False) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        ``pyproject.toml`` contributes its ``[tool.mdfx]`` table only.

        Args:
            path (Path): The TOML file.
            explicit (bool): The file was named on the command line. Read and
                decode failures are then recorded as errors instead of warnings.

        Returns:
            MutableConfig | None: The draft, or None when a ``pyproject.toml``
            has no ``[tool.mdfx]`` table.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)
        try:
            data: TomlTable = read_toml_dict(path)
        except (OSError, toml.TomlDecodeError) as exc:
            logger.error("Error loading TOML from %s: %s", path, exc)
            draft = cls(config_files=[path])
            message = f"cannot load config file {path}: {exc}"
            if explicit:
                draft.diagnostics.add_error(message)
            else:
                draft.diagnostics.add_warning(message)
            return draft

        if path.name == "pyproject.toml":
            section: Any = get_table_value(data, "tool").get(PYPROJECT_TOOL_SECTION)
            if not is_toml_table(section):
                if explicit:
                    logger.warning("[tool.%s] section missing or malformed in %s", PYPROJECT_TOOL_SECTION, path)
                return None
            data = section

        draft = cls.from_toml_dict(data, source=str(path))
        draft.config_files = [path]
        logger.trace("Generated MutableConfig: %s", draft)
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable, source: str = "<config>") -> MutableConfig:
        """Create a draft from a parsed TOML table, validating every key.

        Args:
            data (TomlTable): The mdfx table.
            source (str): Label used in diagnostics (usually the file path).

        Returns:
            MutableConfig: The draft; problems are recorded in ``diagnostics``.
        """
        draft = cls()
        log = draft.diagnostics

        for key in sorted(set(data) - KNOWN_KEYS):
            log.add_warning(f"{source}: unknown config key '{key}' ignored")

        draft.root = bool(get_bool_value_or_none(data, "root"))

        target_name = get_string_value_or_none(data, "target")
        if target_name is not None:
            try:
                draft.target = Target(target_name)
            except ValueError:
                log.add_warning(
                    f"{source}: invalid target '{target_name}' "
                    f"(expected one of: {', '.join(t.value for t in Target)})"
                )

        backend_name = get_string_value_or_none(data, "backend")
        if backend_name == "":
            draft.backend_cleared = True
        elif backend_name is not None:
            try:
                draft.backend = Backend(backend_name)
            except ValueError:
                log.add_warning(
                    f"{source}: invalid backend '{backend_name}' "
                    f"(expected one of: {', '.join(b.value for b in Backend)})"
                )

        if "assets_dir" in data:
            assets_dir = data["assets_dir"]
            if isinstance(assets_dir, str) and assets_dir:
                draft.assets_dir = assets_dir
            else:
                log.add_warning(f"{source}: 'assets_dir' must be a non-empty string")

        if "strict" in data:
            draft.strict = get_bool_value_or_none(data, "strict")
            if draft.strict is None:
                log.add_warning(f"{source}: 'strict' must be a boolean")

        for key in ("max_nesting_depth", "max_expansion_depth"):
            if key not in data:
                continue
            value = get_int_value_or_none(data, key)
            if value is None or value < 1:
                log.add_warning(f"{source}: '{key}' must be a positive integer")
                continue
            setattr(draft, key, value)

        palette_tbl = data.get("palette", {})
        if not is_toml_table(palette_tbl):
            log.add_warning(f"{source}: [palette] must be a table")
        else:
            for name, value in palette_tbl.items():
                color = value.lstrip("#") if isinstance(value, str) else ""
                if not is_hex_color(color):
                    log.add_warning(f"{source}: palette colour '{name}' is not a hex value")
                    continue
                draft.palette[str(name)] = color.lower()

        partials_tbl = data.get("partials", {})
        if not is_toml_table(partials_tbl):
            log.add_warning(f"{source}: [partials] must be a table")
        else:
            for name, spec in partials_tbl.items():
                problem = _check_partial(name, spec)
                if problem is not None:
                    log.add_warning(f"{source}: partial '{name}' ignored: {problem}")
                    continue
                draft.partials[name] = dict(spec)

        return draft

    # ----------------------------- Discovery ------------------------------

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found by walking upward from ``start``.

        Files are returned root-most first, nearest last, so that a later merge
        gives precedence to nearer files. Within one directory the order of
        ``CONFIG_FILE_NAMES`` applies (``pyproject.toml`` first). A
        ``pyproject.toml`` only counts when it has a ``[tool.mdfx]`` table.
        A file setting ``root = true`` stops the walk after its directory.

        Args:
            start (Path): Anchor path; a file anchors at its parent directory.

        Returns:
            list[Path]: The discovered files in merge order.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []
            for name in CONFIG_FILE_NAMES:
                p: Path = cur / name
                if not p.is_file():
                    continue
                data: TomlTable = load_toml_dict(p)
                if name == "pyproject.toml":
                    section: Any = get_table_value(data, "tool").get(PYPROJECT_TOOL_SECTION)
                    if not is_toml_table(section):
                        continue
                    data = section
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if get_bool_value_or_none(data, "root"):
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur:
                break
            if root_stop_here:
                logger.debug("Stopping upward config discovery at %s due to root=true", cur)
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def discover_user_config_file(cls) -> Path | None:
        """Return the user config path if it exists.

        Looks at ``$XDG_CONFIG_HOME/mdfx/mdfx.toml`` (``~/.config`` when unset),
        then ``~/.mdfx.toml``.
        """
        xdg: str | None = os.environ.get("XDG_CONFIG_HOME")
        base: Path = Path(xdg) if xdg else Path.home() / ".config"
        for p in (base / "mdfx" / "mdfx.toml", Path.home() / ".mdfx.toml"):
            if p.is_file():
                return p
        return None

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers.

        Merge order (lowest to highest precedence):
            1) Built-in defaults
            2) User config (XDG or ``~/.mdfx.toml``)
            3) Project configs discovered upward from ``anchor``, root-most first
            4) Explicit config files (``--config``), in the given order

        ``no_config`` skips layers 2 and 3 only.

        Args:
            anchor (Path | None): Discovery start; the working directory when None.
            extra_config_files (Iterable[Path] | None): Explicit config files.
            no_config (bool): Skip user and project discovery.

        Returns:
            MutableConfig: The merged draft.
        """
        draft: MutableConfig = cls.from_defaults()
        anchor = anchor if anchor is not None else Path.cwd()

        if not no_config:
            user_cfg_path: Path | None = cls.discover_user_config_file()
            if user_cfg_path is not None:
                user_cfg: MutableConfig | None = cls.from_toml_file(user_cfg_path)
                if user_cfg is not None:
                    draft = draft.merge_with(user_cfg)

            for cfg_path in cls.discover_local_config_files(anchor):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra), explicit=True)
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------

    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        if other.backend is not None:
            backend: Backend | None = other.backend
        elif other.backend_cleared:
            backend = None
        else:
            backend = self.backend

        diagnostics = DiagnosticLog()
        diagnostics.extend(self.diagnostics)
        diagnostics.extend(other.diagnostics)

        return MutableConfig(
            target=other.target if other.target is not None else self.target,
            backend=backend,
            backend_cleared=False,
            assets_dir=other.assets_dir if other.assets_dir is not None else self.assets_dir,
            strict=other.strict if other.strict is not None else self.strict,
            max_nesting_depth=other.max_nesting_depth
            if other.max_nesting_depth is not None
            else self.max_nesting_depth,
            max_expansion_depth=other.max_expansion_depth
            if other.max_expansion_depth is not None
            else self.max_expansion_depth,
            palette={**self.palette, **other.palette},
            partials={**self.partials, **other.partials},
            root=other.root,
            config_files=self.config_files + other.config_files,
            diagnostics=diagnostics,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableConfig:
        """Apply CLI overrides in place; keys whose value is None are ignored.

        Recognized keys: ``target``, ``backend``, ``assets_dir``, ``strict``.
        """
        target = args.get("target")
        if target is not None:
            self.target = Target(target)
        backend = args.get("backend")
        if backend is not None:
            self.backend = Backend(backend)
        assets_dir = args.get("assets_dir")
        if assets_dir is not None:
            self.assets_dir = str(assets_dir)
        if args.get("strict"):
            self.strict = True
        return self


def _check_partial(name: str, spec: Any) -> str | None:
    """Return why a ``[partials.<name>]`` table is unusable, or None."""
    if not _PARTIAL_ID_RE.match(name):
        return "invalid component id"
    if not is_toml_table(spec):
        return "not a table"
    template = spec.get("template")
    if not isinstance(template, str):
        return "'template' must be a string"
    unknown = sorted(set(spec) - PARTIAL_KEYS)
    if unknown:
        return f"unknown keys: {', '.join(unknown)}"
    args = spec.get("args", [])
    if not isinstance(args, list) or not all(isinstance(a, str) for a in args):
        return "'args' must be a list of strings"
    aliases = spec.get("aliases", [])
    if not isinstance(aliases, list) or not all(isinstance(a, str) for a in aliases):
        return "'aliases' must be a list of strings"
    optional = spec.get("optional", {})
    if not is_toml_table(optional):
        return "'optional' must be a table"
    if not isinstance(spec.get("self_closing", False), bool):
        return "'self_closing' must be a boolean"
    post_process = spec.get("post_process", PostProcess.NONE.value)
    if post_process not in {p.value for p in PostProcess}:
        return f"unknown post_process '{post_process}'"
    return None
