# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/compiler/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Template compiler: scanning, tag resolution, parsing and component expansion.

Use [`mdfx.compiler.pipeline`][mdfx.compiler.pipeline] for the end-to-end
compile and render entry points.
"""
