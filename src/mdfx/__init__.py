# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""mdfx package.

mdfx is a template compiler for Markdown. It expands an embedded tag dialect
(``{{mathbold}}TITLE{{/mathbold}}``, ``{{frame:gradient}}...{{/frame}}``,
``{{ui:swatch:accent/}}``) into Unicode-styled text, shields.io image links or
locally generated SVG assets, and exposes both a CLI and a small typed API.
"""

from __future__ import annotations
