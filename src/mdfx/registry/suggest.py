# topmark:header:start
#
#   project      : mdfx
#   file         : suggest.py
#   file_relpath : src/mdfx/registry/suggest.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Near-miss suggestions for unknown identifiers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdfx.constants import MAX_SUGGESTION_DISTANCE, MAX_SUGGESTIONS

if TYPE_CHECKING:
    from collections.abc import Iterable


def edit_distance(a: str, b: str) -> int:
    """Return the Levenshtein distance between ``a`` and ``b``."""
    if a == b:
        return 0
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (ca != cb),
                )
            )
        previous = current
    return previous[-1]


def suggest(
    ident: str,
    candidates: Iterable[str],
    *,
    limit: int = MAX_SUGGESTIONS,
    max_distance: int = MAX_SUGGESTION_DISTANCE,
) -> list[str]:
    """Return up to ``limit`` candidates within ``max_distance`` edits of ``ident``.

    Matching is case-insensitive. Results are ordered by distance, then name.

    Args:
        ident: The unknown identifier.
        candidates: Known identifiers (ids and aliases).
        limit: Maximum number of suggestions.
        max_distance: Largest accepted edit distance.

    Returns:
        The suggestions, closest first.
    """
    needle = ident.lower()
    scored: list[tuple[int, str]] = []
    for name in set(candidates):
        distance = edit_distance(needle, name.lower())
        if distance <= max_distance:
            scored.append((distance, name))
    scored.sort()
    return [name for _, name in scored[:limit]]
