# topmark:header:start
#
#   project      : mdfx
#   file         : manifest.py
#   file_relpath : src/mdfx/assets/manifest.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""The asset manifest: ``manifest.json`` inside the assets directory.

Layout:

```json
{"version": "1.0.0", "assets": {"<hash>": "<kind>_<hash>.svg"}}
```

File names are relative to the assets directory. The manifest is owned by
`mdfx.assets.cache.AssetCache`; this module only reads, writes and checks it.
"""

from __future__ import annotations

import json
import os
import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from mdfx.config.logging import get_logger
from mdfx.constants import MANIFEST_NAME, MANIFEST_VERSION
from mdfx.core.errors import AssetIOError, ManifestCorruptError

logger = get_logger(__name__)


def manifest_path(assets_dir: Path) -> Path:
    """Return the manifest location for ``assets_dir``."""
    return assets_dir / MANIFEST_NAME


@dataclass
class Manifest:
    """In-memory manifest: content hash to asset file name."""

    version: str = MANIFEST_VERSION
    assets: dict[str, str] = field(default_factory=lambda: {})

    @classmethod
    def from_dict(cls, data: Any, *, path: Path) -> Manifest:
        """Validate the decoded JSON document.

        Raises:
            ManifestCorruptError: If the document does not have the manifest shape.
        """
        if not isinstance(data, dict):
            raise ManifestCorruptError(path, "top-level value is not an object")
        version = data.get("version", MANIFEST_VERSION)
        assets = data.get("assets", {})
        if not isinstance(version, str):
            raise ManifestCorruptError(path, "'version' is not a string")
        if not isinstance(assets, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in assets.items()
        ):
            raise ManifestCorruptError(path, "'assets' is not an object of strings")
        return cls(version=version, assets=dict(assets))

    @classmethod
    def load(cls, path: Path) -> Manifest:
        """Read a manifest; a missing file yields an empty manifest.

        Raises:
            ManifestCorruptError: If the file is not valid JSON or has the wrong shape.
            AssetIOError: If the file exists but cannot be read.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No manifest at %s", path)
            return cls()
        except OSError as exc:
            raise AssetIOError(path, exc) from exc
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestCorruptError(path, str(exc)) from exc
        return cls.from_dict(data, path=path)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON document, entries sorted by hash."""
        return {"version": self.version, "assets": dict(sorted(self.assets.items()))}

    def save(self, path: Path) -> None:
        """Write the manifest atomically (temporary file, then ``os.replace``).

        Raises:
            AssetIOError: If the file cannot be written.
        """
        text = json.dumps(self.to_dict(), indent=2) + "\n"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".manifest-", suffix=".json", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
                    f.write(text)
                os.replace(tmp, path)
            except OSError:
                Path(tmp).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise AssetIOError(path, exc) from exc
        logger.debug("Wrote manifest %s (%d entries)", path, len(self.assets))

    def prune(self, filenames: set[str]) -> int:
        """Drop entries pointing at ``filenames``; return how many were removed."""
        stale = [digest for digest, name in self.assets.items() if name in filenames]
        for digest in stale:
            del self.assets[digest]
        return len(stale)


class ProblemKind(str, Enum):
    """Kinds of manifest inconsistencies."""

    MISSING = "missing"
    MISMATCH = "mismatch"
    UNTRACKED = "untracked"


@dataclass(frozen=True)
class ManifestProblem:
    """One inconsistency between the manifest and the assets directory."""

    kind: ProblemKind
    filename: str
    digest: str | None = None

    def describe(self) -> str:
        """Return a one-line description."""
        if self.kind is ProblemKind.MISSING:
            return f"{self.filename}: listed in manifest but missing on disk"
        if self.kind is ProblemKind.MISMATCH:
            return f"{self.filename}: file name does not carry hash {self.digest}"
        return f"{self.filename}: SVG file not listed in manifest"


def verify_manifest(assets_dir: Path) -> list[ManifestProblem]:
    """Check the manifest in ``assets_dir`` against the files on disk.

    Reports entries whose file is missing, entries whose file name does not end
    in their hash, and SVG files the manifest does not list.

    Raises:
        ManifestCorruptError: If the manifest cannot be parsed.
        AssetIOError: If the manifest cannot be read.
    """
    manifest = Manifest.load(manifest_path(assets_dir))
    problems: list[ManifestProblem] = []
    for digest, filename in sorted(manifest.assets.items()):
        if not filename.endswith(f"_{digest}.svg"):
            problems.append(ManifestProblem(ProblemKind.MISMATCH, filename, digest))
        if not (assets_dir / filename).is_file():
            problems.append(ManifestProblem(ProblemKind.MISSING, filename, digest))
    listed = set(manifest.assets.values())
    if assets_dir.is_dir():
        for path in sorted(assets_dir.glob("*.svg")):
            if path.name not in listed:
                problems.append(ManifestProblem(ProblemKind.UNTRACKED, path.name))
    return problems
