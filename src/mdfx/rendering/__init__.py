# topmark:header:start
#
#   project      : mdfx
#   file         : __init__.py
#   file_relpath : src/mdfx/rendering/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Rendering of primitive trees for publishing targets.

A target (GitHub, GitLab, npm, PyPI, local docs) selects a backend: shields.io
image URLs, locally generated SVG assets, or plain text fallbacks.
"""
