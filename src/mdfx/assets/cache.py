# topmark:header:start
#
#   project      : mdfx
#   file         : cache.py
#   file_relpath : src/mdfx/assets/cache.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Content-addressed cache of generated SVG assets.

An asset is named by a hash of what it depicts (shield kind plus resolved
parameters), not by its bytes or by the order it was requested in. Identical
shields anywhere in a batch, or in a later run, map to the same file, which is
written once.

`AssetCache` is safe to share between worker threads: the insert-if-absent
step runs under a lock, and the manifest is written once by `flush()` (called
when the cache is used as a context manager).

Failed writes do not abort rendering. The error is recorded in
`AssetCache.errors` and as a diagnostic, and the intended path is still
returned so the Markdown reference points where the file belongs.
"""

from __future__ import annotations

import hashlib
import json
import re
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from mdfx.assets.manifest import Manifest, manifest_path
from mdfx.config.logging import get_logger
from mdfx.constants import ASSET_HASH_LENGTH
from mdfx.core.diagnostics import DiagnosticLog
from mdfx.core.errors import AssetError, AssetIOError, ManifestCorruptError
from mdfx.rendering.svg import render_svg

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from types import TracebackType

    from mdfx.config.logging import MdfxLogger

logger: MdfxLogger = get_logger(__name__)

#: Matches asset file names as they appear in rendered Markdown.
ASSET_NAME_RE = re.compile(r"[A-Za-z0-9.\-]+_[0-9a-f]{%d}\.svg" % ASSET_HASH_LENGTH)


def content_hash(kind: str, params: Mapping[str, str]) -> str:
    """Return the content address of a shield.

    SHA-256 over the compact JSON encoding of ``[kind, sorted(params.items())]``,
    truncated to 16 hex characters (64 bits). Parameter order does not matter.
    """
    payload = json.dumps([kind, sorted(params.items())], separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:ASSET_HASH_LENGTH]


def asset_filename(kind: str, digest: str) -> str:
    """Return the file name for an asset."""
    return f"{kind}_{digest}.svg"


class AssetCache:
    """Shared SVG asset store for one assets directory.

    Args:
        assets_dir (Path): Directory holding the SVG files and ``manifest.json``.
        link_prefix (str | None): Path prefix used in Markdown references; defaults
            to ``assets_dir`` as given.
        diagnostics (DiagnosticLog | None): Where corrupt-manifest and write
            failures are recorded.

    Attributes:
        errors (list[AssetError]): Asset failures collected so far.
        written (list[Path]): Files written by this cache instance.
    """

    def __init__(
        self,
        assets_dir: Path | str,
        link_prefix: str | None = None,
        diagnostics: DiagnosticLog | None = None,
    ) -> None:
        self.assets_dir = Path(assets_dir)
        self.link_prefix = (link_prefix if link_prefix is not None else self.assets_dir.as_posix()).rstrip("/")
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog()
        self.errors: list[AssetError] = []
        self.written: list[Path] = []
        self._manifest = Manifest()
        self._dirty = False
        self._loaded = False
        self._lock = threading.Lock()

    @property
    def manifest(self) -> Manifest:
        """The in-memory manifest."""
        return self._manifest

    def load(self) -> None:
        """Read the manifest from disk.

        A corrupt manifest is reported as a warning and replaced by an empty one,
        which is rewritten on the next flush.
        """
        path = manifest_path(self.assets_dir)
        try:
            self._manifest = Manifest.load(path)
        except ManifestCorruptError as exc:
            logger.warning("%s; starting with an empty manifest", exc)
            self.diagnostics.add_warning(f"{exc.message}; starting with an empty manifest")
            self.errors.append(exc)
            self._manifest = Manifest()
            self._dirty = True
        except AssetIOError as exc:
            logger.warning("%s", exc)
            self.diagnostics.add_warning(exc.message)
            self.errors.append(exc)
            self._manifest = Manifest()
        self._loaded = True

    def link(self, filename: str, link_prefix: str | None = None) -> str:
        """Return the Markdown link target for an asset file name."""
        prefix = self.link_prefix if link_prefix is None else link_prefix.rstrip("/")
        return f"{prefix}/{filename}" if prefix else filename

    def get_or_create(
        self, kind: str, params: Mapping[str, str], link_prefix: str | None = None
    ) -> str:
        """Return the link to the asset for a shield, writing it if needed.

        Args:
            kind: Canonical shield kind id.
            params: Resolved parameters (colours as hex, defaults filled in).
            link_prefix: Overrides the cache-wide link prefix, for documents
                that live in another directory.

        Returns:
            The Markdown link target, also when writing failed.
        """
        digest = content_hash(kind, params)
        with self._lock:
            if not self._loaded:
                self.load()
            filename = self._manifest.assets.get(digest) or asset_filename(kind, digest)
            path = self.assets_dir / filename
            if path.is_file():
                if digest not in self._manifest.assets:
                    self._manifest.assets[digest] = filename
                    self._dirty = True
                    self.diagnostics.add_info(f"adopted existing asset {filename} into the manifest")
                logger.trace("Asset cache hit: %s", filename)
                return self.link(filename, link_prefix)

            svg = render_svg(kind, params)
            try:
                self.assets_dir.mkdir(parents=True, exist_ok=True)
                with open(path, "w", encoding="utf-8", newline="\n") as f:
                    f.write(svg)
            except OSError as exc:
                error = AssetIOError(path, exc)
                logger.warning("%s", error)
                self.errors.append(error)
                self.diagnostics.add_warning(error.message)
                return self.link(filename, link_prefix)

            self._manifest.assets[digest] = filename
            self._dirty = True
            self.written.append(path)
            logger.debug("Wrote asset %s", path)
            return self.link(filename, link_prefix)

    def flush(self) -> None:
        """Write the manifest if it changed."""
        with self._lock:
            if not self._dirty:
                return
            try:
                self._manifest.save(manifest_path(self.assets_dir))
            except AssetIOError as exc:
                logger.warning("%s", exc)
                self.errors.append(exc)
                self.diagnostics.add_warning(exc.message)
                return
            self._dirty = False

    def __enter__(self) -> AssetCache:
        if not self._loaded:
            self.load()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.flush()


def referenced_assets(texts: Iterable[str]) -> set[str]:
    """Return the asset file names referenced in rendered documents."""
    names: set[str] = set()
    for text in texts:
        names.update(ASSET_NAME_RE.findall(text))
    return names


def collect_orphans(assets_dir: Path, referenced: set[str] | None = None) -> list[Path]:
    """Return SVG files in ``assets_dir`` that nothing refers to.

    Args:
        assets_dir: The assets directory.
        referenced: File names referenced by scanned documents. When None, the
            manifest decides what is referenced.

    Raises:
        ManifestCorruptError: If ``referenced`` is None and the manifest is corrupt.
    """
    if not assets_dir.is_dir():
        return []
    if referenced is None:
        referenced = set(Manifest.load(manifest_path(assets_dir)).assets.values())
    return [path for path in sorted(assets_dir.glob("*.svg")) if path.name not in referenced]
