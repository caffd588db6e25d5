# topmark:header:start
#
#   project      : mdfx
#   file         : assets.py
#   file_relpath : src/mdfx/cli/commands/assets.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx `verify` and `clean` commands for the SVG asset directory.

- ``verify`` compares ``manifest.json`` with the files on disk and exits with
  FAILURE when they disagree.
- ``clean`` removes SVG files nothing refers to. By default the manifest
  decides what is referenced; with ``--scan`` the given documents do, and
  the manifest is pruned accordingly.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdfx.assets.cache import collect_orphans
from mdfx.assets.manifest import Manifest, manifest_path, verify_manifest
from mdfx.assets.scan import scan_referenced_assets
from mdfx.cli.cmd_common import get_console, load_config
from mdfx.cli.errors import MdfxCliError, from_core_error, from_os_error
from mdfx.cli.options import CONTEXT_SETTINGS, assets_dir_option
from mdfx.config.logging import get_logger
from mdfx.core.errors import AssetError

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike
    from mdfx.config.logging import MdfxLogger

logger: MdfxLogger = get_logger(__name__)


@click.command(
    name="verify",
    help="Check that manifest.json and the SVG assets on disk agree.",
    context_settings=CONTEXT_SETTINGS,
)
@assets_dir_option
def verify_command(*, assets_dir: str | None) -> None:
    """Report missing, mismatched and untracked assets."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    config = load_config(ctx, {"assets_dir": assets_dir})
    directory = config.assets_dir

    try:
        problems = verify_manifest(directory)
    except AssetError as exc:
        raise from_core_error(exc, label=str(directory)) from exc

    if not problems:
        console.print(console.styled(f"{directory}: assets and manifest are consistent", fg="green"))
        return
    for problem in problems:
        console.print(f"  {problem.kind.value:<9} {problem.describe()}")
    raise MdfxCliError(f"{directory}: {len(problems)} problem(s) found")


@click.command(
    name="clean",
    help="Remove SVG assets that are no longer referenced.",
    context_settings=CONTEXT_SETTINGS,
)
@assets_dir_option
@click.option(
    "--scan",
    "scan_patterns",
    multiple=True,
    metavar="GLOB",
    help="Gitignore-style pattern of rendered documents whose references are kept.",
)
@click.option("--dry-run", "dry_run", is_flag=True, default=False, help="Only list what would be removed.")
def clean_command(*, assets_dir: str | None, scan_patterns: tuple[str, ...], dry_run: bool) -> None:
    """Delete orphaned assets (or list them with ``--dry-run``)."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    config = load_config(ctx, {"assets_dir": assets_dir})
    directory = config.assets_dir

    referenced: set[str] | None = None
    if scan_patterns:
        referenced = scan_referenced_assets(scan_patterns, Path.cwd())
        logger.info("Scanned documents reference %d asset(s)", len(referenced))
    try:
        orphans = collect_orphans(directory, referenced)
    except AssetError as exc:
        raise from_core_error(exc, label=str(directory)) from exc

    if not orphans:
        console.print(f"{directory}: no unreferenced assets")
        return

    verb = "would remove" if dry_run else "removed"
    for path in orphans:
        if not dry_run:
            try:
                path.unlink()
            except OSError as exc:
                raise from_os_error(exc, path) from exc
        console.print(f"  {verb} {path}")

    if not dry_run:
        _prune_manifest(directory, {p.name for p in orphans})
    console.print(console.styled(f"{len(orphans)} asset(s) {verb}", bold=True))


def _prune_manifest(directory: Path, removed: set[str]) -> None:
    path = manifest_path(directory)
    try:
        manifest = Manifest.load(path)
        if manifest.prune(removed):
            manifest.save(path)
    except AssetError as exc:
        raise from_core_error(exc, label=str(directory)) from exc
