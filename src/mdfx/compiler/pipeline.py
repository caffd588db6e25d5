# topmark:header:start
#
#   project      : mdfx
#   file         : pipeline.py
#   file_relpath : src/mdfx/compiler/pipeline.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""End-to-end entry points: compile once, render for any target.

```python
from mdfx.compiler.pipeline import compile_document, render_document
from mdfx.registry import Registry
from mdfx.rendering.targets import Target

registry = Registry.builtin()
doc = compile_document("# {{mathbold}}TITLE{{/mathbold}}", registry)
print(render_document(doc, registry, Target.GITHUB).markdown)
```

A compiled document is a fully expanded primitive tree; targets are pure
functions of it, so one compilation can be rendered for several targets.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mdfx.compiler.expander import ComponentExpander
from mdfx.compiler.parser import CompileOptions, ParseMode, Parser
from mdfx.config.logging import get_logger
from mdfx.core.diagnostics import DiagnosticLog
from mdfx.registry.registry import Registry
from mdfx.rendering.renderer import TargetRenderer
from mdfx.rendering.targets import Backend, Target

if TYPE_CHECKING:
    from mdfx.assets.cache import AssetCache
    from mdfx.compiler.nodes import Node
    from mdfx.config.logging import MdfxLogger

__all__ = [
    "CompileOptions",
    "CompiledDocument",
    "ParseMode",
    "RenderResult",
    "compile_document",
    "process_text",
    "render_document",
]

logger: MdfxLogger = get_logger(__name__)


@dataclass(frozen=True)
class CompiledDocument:
    """A parsed and fully expanded document.

    Attributes:
        source (str): The template text.
        nodes (tuple[Node, ...]): Primitive nodes, no components.
        diagnostics (DiagnosticLog): Soft findings from scanning, parsing and expansion.
    """

    source: str
    nodes: tuple[Node, ...]
    diagnostics: DiagnosticLog


@dataclass(frozen=True)
class RenderResult:
    """Rendered output for one target."""

    markdown: str
    target: Target
    backend: Backend
    diagnostics: DiagnosticLog


def compile_document(
    text: str,
    registry: Registry | None = None,
    options: CompileOptions | None = None,
) -> CompiledDocument:
    """Scan, parse and expand ``text``.

    Args:
        text: The template document.
        registry: Definitions to use; the built-in registry when None.
        options: Parse mode and limits.

    Returns:
        The compiled document.

    Raises:
        ParseError: On structural template errors.
        ResolutionError: On unknown tags in strict mode.
        ExpansionError: On component expansion failures.
    """
    registry = registry or Registry.builtin()
    options = options or CompileOptions()
    diagnostics = DiagnosticLog()
    nodes = Parser(registry, options, diagnostics).parse(text)
    expanded = ComponentExpander(registry, options, diagnostics).expand(nodes)
    logger.debug("Compiled %d characters into %d nodes", len(text), len(expanded))
    return CompiledDocument(source=text, nodes=tuple(expanded), diagnostics=diagnostics)


def render_document(
    document: CompiledDocument,
    registry: Registry | None = None,
    target: Target = Target.GITHUB,
    backend: Backend | None = None,
    asset_cache: AssetCache | None = None,
    asset_link_prefix: str | None = None,
) -> RenderResult:
    """Render a compiled document for ``target``.

    Asset write failures do not raise; they are recorded on ``asset_cache``.
    ``asset_link_prefix`` is how the document refers to the assets directory
    (by default the cache-wide prefix).

    Raises:
        RenderError: On badge charset violations and target/backend mismatches.
    """
    registry = registry or Registry.builtin()
    renderer = TargetRenderer(registry, target, backend, asset_cache, asset_link_prefix)
    return RenderResult(
        markdown=renderer.render(document.nodes),
        target=target,
        backend=renderer.backend,
        diagnostics=document.diagnostics,
    )


def process_text(
    text: str,
    registry: Registry | None = None,
    target: Target = Target.GITHUB,
    *,
    backend: Backend | None = None,
    options: CompileOptions | None = None,
    asset_cache: AssetCache | None = None,
) -> str:
    """Compile and render ``text`` in one call and return the output."""
    registry = registry or Registry.builtin()
    document = compile_document(text, registry, options)
    return render_document(document, registry, target, backend, asset_cache).markdown
