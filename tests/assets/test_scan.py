# topmark:header:start
#
#   project      : mdfx
#   file         : test_scan.py
#   file_relpath : tests/assets/test_scan.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Tests for scanning rendered documents for asset references."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdfx.assets.scan import find_documents, scan_referenced_assets

if TYPE_CHECKING:
    from pathlib import Path

DIGEST = "0123456789abcdef"


def _tree(root: Path) -> None:
    (root / "docs" / "api").mkdir(parents=True)
    (root / ".git").mkdir()
    (root / "README.md").write_text(f"![](assets/swatch_{DIGEST}.svg)\n", encoding="utf-8")
    (root / "docs" / "index.md").write_text("no assets\n", encoding="utf-8")
    (root / "docs" / "api" / "ref.md").write_text(f"![](../../assets/bar_{DIGEST}.svg)\n", encoding="utf-8")
    (root / "docs" / "notes.txt").write_text(f"status_{DIGEST}.svg\n", encoding="utf-8")
    (root / ".git" / "x.md").write_text(f"icon_{DIGEST}.svg\n", encoding="utf-8")


def test_find_documents_gitignore_patterns(tmp_path: Path) -> None:
    """Patterns use gitignore semantics; hidden directories are skipped."""
    _tree(tmp_path)

    assert find_documents(["*.md"], tmp_path) == sorted(
        [tmp_path / "README.md", tmp_path / "docs" / "index.md", tmp_path / "docs" / "api" / "ref.md"]
    )
    assert find_documents(["docs/"], tmp_path) == sorted(
        [tmp_path / "docs" / "index.md", tmp_path / "docs" / "api" / "ref.md", tmp_path / "docs" / "notes.txt"]
    )
    assert find_documents(["*.md", "!docs/**"], tmp_path) == [tmp_path / "README.md"]


def test_scan_referenced_assets(tmp_path: Path) -> None:
    """References are collected from every matching document."""
    _tree(tmp_path)
    (tmp_path / "bad.md").write_bytes(b"\xff\xfe broken")

    assert scan_referenced_assets(["**/*.md"], tmp_path) == {
        f"swatch_{DIGEST}.svg",
        f"bar_{DIGEST}.svg",
    }
