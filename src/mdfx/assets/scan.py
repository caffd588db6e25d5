# topmark:header:start
#
#   project      : mdfx
#   file         : scan.py
#   file_relpath : src/mdfx/assets/scan.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Find rendered documents that may reference assets.

Used by ``mdfx clean --scan`` to decide which SVG files are still in use.
Patterns use gitignore syntax (via `pathspec`) and match POSIX paths relative
to the scan root, so ``**/*.md`` and ``docs/`` both work.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from mdfx.assets.cache import referenced_assets
from mdfx.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from mdfx.config.logging import MdfxLogger

logger: MdfxLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.resolve().relative_to(base.resolve()).as_posix()
    except ValueError:
        return path.as_posix()


def find_documents(patterns: Iterable[str], root: Path) -> list[Path]:
    """Return files below ``root`` matching any of ``patterns``, sorted.

    Hidden directories (``.git``, ``.venv``, ...) are not descended into.
    """
    spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, list(patterns))
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
        for name in filenames:
            path = Path(dirpath) / name
            if spec.match_file(_rel_for_match(path, root)):
                found.append(path)
    logger.debug("Scan of %s matched %d file(s)", root, len(found))
    return sorted(found)


def scan_referenced_assets(patterns: Iterable[str], root: Path) -> set[str]:
    """Return asset file names referenced by the documents matching ``patterns``.

    Unreadable or non-UTF-8 files are skipped with a warning.
    """
    texts: list[str] = []
    for path in find_documents(patterns, root):
        try:
            texts.append(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", path, exc)
    return referenced_assets(texts)
