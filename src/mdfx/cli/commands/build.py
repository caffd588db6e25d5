# topmark:header:start
#
#   project      : mdfx
#   file         : build.py
#   file_relpath : src/mdfx/cli/commands/build.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx `build` command.

Compiles one template once and renders it for several targets, writing
``<stem>.<target>.md`` into the output directory. Each target uses its
preferred backend; SVG assets go to the configured assets directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdfx.assets.cache import AssetCache
from mdfx.cli.cmd_common import (
    asset_link_prefix,
    get_console,
    get_effective_verbosity,
    load_config,
    read_document,
    report_diagnostics,
    write_document,
)
from mdfx.cli.errors import MdfxUsageError, from_core_error
from mdfx.cli.options import CONTEXT_SETTINGS, assets_dir_option
from mdfx.compiler.pipeline import compile_document, render_document
from mdfx.core.errors import MdfxError
from mdfx.registry.registry import Registry
from mdfx.rendering.targets import Target

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike

DEFAULT_OUT_DIR = "dist"


def parse_targets(value: str) -> list[Target]:
    """Parse a comma-separated target list, keeping order and dropping duplicates.

    Raises:
        MdfxUsageError: On an unknown target name or an empty list.
    """
    targets: list[Target] = []
    for name in (part.strip().lower() for part in value.split(",")):
        if not name:
            continue
        try:
            target = Target(name)
        except ValueError:
            raise MdfxUsageError(
                f"Unknown target '{name}'. Available: {', '.join(t.value for t in Target)}"
            ) from None
        if target not in targets:
            targets.append(target)
    if not targets:
        raise MdfxUsageError("--targets needs at least one target.")
    return targets


@click.command(
    name="build",
    help="Render one template for several targets at once.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--all-targets",
    "all_targets",
    is_flag=True,
    default=False,
    help="Build for every known target.",
)
@click.option(
    "--targets",
    "targets_csv",
    default=None,
    metavar="LIST",
    help="Comma-separated targets (e.g. github,pypi,npm).",
)
@click.option(
    "--out-dir",
    "out_dir",
    type=click.Path(file_okay=False),
    default=DEFAULT_OUT_DIR,
    show_default=True,
    help="Directory for the generated files.",
)
@assets_dir_option
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat unknown tags as errors instead of literal text.",
)
def build_command(
    *,
    file: str,
    all_targets: bool,
    targets_csv: str | None,
    out_dir: str,
    assets_dir: str | None,
    strict: bool,
) -> None:
    """Build ``<stem>.<target>.md`` for each selected target."""
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)

    if all_targets and targets_csv is not None:
        raise MdfxUsageError("--all-targets and --targets are mutually exclusive.")

    config = load_config(ctx, {"assets_dir": assets_dir, "strict": strict})
    if all_targets:
        targets = list(Target)
    elif targets_csv is not None:
        targets = parse_targets(targets_csv)
    else:
        targets = [config.target]

    label, source = read_document(file)
    registry = config.build_registry(Registry.builtin())
    try:
        document = compile_document(source, registry, config.compile_options())
    except MdfxError as exc:
        raise from_core_error(exc, label=label, source=source) from exc
    report_diagnostics(ctx, document.diagnostics, label=label, source=source)

    stem = Path(file).stem
    written: list[Path] = []
    with AssetCache(config.assets_dir) as cache:
        for target in targets:
            dest = Path(out_dir) / f"{stem}.{target.value}.md"
            try:
                result = render_document(
                    document,
                    registry,
                    target,
                    None,
                    cache,
                    asset_link_prefix(config.assets_dir, dest),
                )
            except MdfxError as exc:
                raise from_core_error(exc, label=f"{label} [{target.value}]", source=source) from exc
            write_document(dest, result.markdown)
            written.append(dest)
            if get_effective_verbosity(ctx) <= logging.INFO:
                console.print(f"{target.value}: {dest} ({result.backend.value})")
    report_diagnostics(ctx, cache.diagnostics, label=str(config.assets_dir))

    console.print(console.styled(f"Built {len(written)} target(s) into {out_dir}", bold=True))
