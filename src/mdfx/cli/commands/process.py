# topmark:header:start
#
#   project      : mdfx
#   file         : process.py
#   file_relpath : src/mdfx/cli/commands/process.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx `process` command.

Compiles one or more template documents and renders them for a target.

Input/output modes:
  * ``mdfx process FILE`` writes the result to stdout.
  * ``mdfx process FILE -o OUT`` writes to OUT (``-o -`` is stdout).
  * ``mdfx process --in-place FILE...`` rewrites each file; with ``--jobs N``
    files are processed by N worker threads sharing one asset cache.
  * ``-`` (or no FILE at all) reads the template from stdin.

Target resolution: ``--target``, else a target detected from the output
path (``README.md`` is GitHub, ``PKG-INFO`` is PyPI, ...), else the
configured target.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import click

from mdfx.assets.cache import AssetCache
from mdfx.cli.cmd_common import (
    asset_link_prefix,
    get_console,
    load_config,
    read_document,
    report_diagnostics,
    write_document,
)
from mdfx.cli.errors import MdfxCliError, MdfxUsageError, from_core_error
from mdfx.cli.options import CONTEXT_SETTINGS, common_render_options, target_option
from mdfx.compiler.pipeline import compile_document, render_document
from mdfx.config.logging import get_logger
from mdfx.core.errors import MdfxError
from mdfx.registry.registry import Registry
from mdfx.rendering.targets import detect_target

if TYPE_CHECKING:
    from mdfx.cli.console import ConsoleLike
    from mdfx.compiler.pipeline import RenderResult
    from mdfx.config.logging import MdfxLogger
    from mdfx.config.model import Config
    from mdfx.rendering.targets import Backend, Target

logger: MdfxLogger = get_logger(__name__)


@dataclass(frozen=True)
class _Job:
    """One document to process: where it comes from and where it goes."""

    name: str  # path or "-"
    dest: Path | None  # None = stdout


@dataclass(frozen=True)
class _Outcome:
    job: _Job
    label: str
    source: str
    result: RenderResult | None
    error: MdfxCliError | None


@click.command(
    name="process",
    help="Render template documents to Markdown for a publishing target.",
    context_settings=CONTEXT_SETTINGS,
)
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(dir_okay=False, allow_dash=True),
)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, allow_dash=True),
    default=None,
    help="Write the result to this file ('-' for stdout).",
)
@click.option(
    "--in-place",
    "in_place",
    is_flag=True,
    default=False,
    help="Rewrite each FILE with its rendered output.",
)
@target_option
@common_render_options
@click.option(
    "-j",
    "--jobs",
    type=click.IntRange(min=1),
    default=1,
    show_default=True,
    help="Number of worker threads for --in-place batches.",
)
def process_command(
    *,
    files: tuple[str, ...],
    output: str | None,
    in_place: bool,
    target: Target | None,
    backend: Backend | None,
    assets_dir: str | None,
    strict: bool,
    jobs: int,
) -> None:
    """Render templates.

    Args:
        files (tuple[str, ...]): Template paths; ``-`` for stdin.
        output (str | None): Output path for a single input.
        in_place (bool): Rewrite inputs in place.
        target (Target | None): Explicit target.
        backend (Backend | None): Explicit backend.
        assets_dir (str | None): SVG asset directory override.
        strict (bool): Strict mode.
        jobs (int): Worker threads.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)

    job_list = _plan_jobs(files or ("-",), output=output, in_place=in_place)
    config = load_config(
        ctx, {"backend": backend, "assets_dir": assets_dir, "strict": strict}
    )
    registry = config.build_registry(Registry.builtin())
    cache = AssetCache(config.assets_dir)

    def run(job: _Job) -> _Outcome:
        return _process_one(job, config=config, registry=registry, target=target, cache=cache)

    try:
        if jobs > 1 and len(job_list) > 1:
            with ThreadPoolExecutor(max_workers=jobs) as pool:
                outcomes = list(pool.map(run, job_list))
        else:
            outcomes = [run(job) for job in job_list]
    finally:
        cache.flush()

    report_diagnostics(ctx, cache.diagnostics, label=str(config.assets_dir))
    stats = cache.diagnostics.stats()
    logger.debug(
        "Assets: %d file(s) written, %d warning(s), %d info", len(cache.written), stats.n_warning, stats.n_info
    )

    first_error: MdfxCliError | None = None
    for outcome in outcomes:
        if outcome.error is not None:
            if len(outcomes) == 1:
                raise outcome.error
            console.error(outcome.error.format_message())
            first_error = first_error or outcome.error
            continue
        assert outcome.result is not None
        report_diagnostics(
            ctx, outcome.result.diagnostics, label=outcome.label, source=outcome.source
        )
        _emit(console, outcome)

    if first_error is not None:
        failed = sum(o.error is not None for o in outcomes)
        summary = MdfxCliError(f"{failed} of {len(outcomes)} document(s) failed")
        summary.exit_code = first_error.exit_code
        raise summary


def _plan_jobs(names: tuple[str, ...], *, output: str | None, in_place: bool) -> list[_Job]:
    """Validate the input/output flags and return the jobs to run."""
    if in_place and output is not None:
        raise MdfxUsageError("--in-place and --output are mutually exclusive.")
    if in_place:
        if "-" in names:
            raise MdfxUsageError("--in-place cannot rewrite stdin.")
        return [_Job(name=name, dest=Path(name)) for name in names]
    if len(names) > 1:
        raise MdfxUsageError("Several input files require --in-place.")
    dest = None if output in (None, "-") else Path(str(output))
    return [_Job(name=names[0], dest=dest)]


def _process_one(
    job: _Job,
    *,
    config: Config,
    registry: Registry,
    target: Target | None,
    cache: AssetCache,
) -> _Outcome:
    """Read, compile and render one document; errors are returned, not raised."""
    try:
        label, source = read_document(job.name)
    except MdfxCliError as exc:
        return _Outcome(job, job.name, "", None, exc)

    effective_target = target or (detect_target(job.dest) if job.dest else None) or config.target
    logger.debug("Processing %s for target %s", label, effective_target.value)
    try:
        document = compile_document(source, registry, config.compile_options())
        result = render_document(
            document,
            registry,
            effective_target,
            config.backend,
            cache,
            asset_link_prefix(config.assets_dir, job.dest),
        )
    except MdfxError as exc:
        return _Outcome(job, label, source, None, from_core_error(exc, label=label, source=source))
    return _Outcome(job, label, source, result, None)


def _emit(console: ConsoleLike, outcome: _Outcome) -> None:
    assert outcome.result is not None
    text = outcome.result.markdown
    dest = outcome.job.dest
    if dest is None:
        console.print(text, nl=False)
        return
    if outcome.job.name != "-" and dest == Path(outcome.job.name) and text == outcome.source:
        logger.info("%s unchanged", dest)
        return
    write_document(dest, text)
