# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/assets/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Content-addressed SVG asset cache and its manifest."""
