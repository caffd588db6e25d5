# topmark:header:start
#
#   project      : mdfx
#   file         : errors.py
#   file_relpath : src/mdfx/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end

"""Typed errors raised by the mdfx template pipeline.

Every failure mode of scanning, parsing, resolving, expanding, rendering and
asset caching is represented by a subclass of `MdfxError`. Errors carry the
character offset of the offending construct so that callers can report a
line/column position, and resolution errors carry near-miss suggestions.

Hierarchy:
    * ScanError: UnterminatedFenceError (reported as a diagnostic, never raised
      by the scanner).
    * ParseError: UnclosedTagError, MismatchedTagError, NestingTooDeepError,
      InvalidParameterError.
    * ResolutionError: UnknownStyleError, UnknownFrameError, UnknownBadgeError,
      UnknownComponentError, UnknownGlyphError, UnknownShieldError.
    * ExpansionError: ExpansionTooDeepError, UnknownComponentReferenceError.
    * RenderError: UnsupportedBadgeCharError, UnsupportedTargetFeatureError.
    * AssetError: AssetIOError, ManifestCorruptError.

The CLI maps these to exit codes in `mdfx.cli.errors`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mdfx.core.location import locate

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path


class MdfxError(Exception):
    """Base class for all mdfx pipeline errors.

    Attributes:
        message (str): Human-readable description without position info.
        offset (int | None): Character offset into the source document.
        suggestions (tuple[str, ...]): Near-miss identifiers, closest first.
        context (str | None): Chain of component expansions the error was raised in.
    """

    def __init__(
        self,
        message: str,
        *,
        offset: int | None = None,
        suggestions: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.message: str = message
        self.offset: int | None = offset
        self.suggestions: tuple[str, ...] = tuple(suggestions)
        self.context: str | None = None

    def relocate(self, offset: int, context: str) -> MdfxError:
        """Move the error to an enclosing construct and record the expansion chain.

        Errors raised while parsing a component's expansion carry offsets into
        the expansion text; the expander rebinds them to the component's own
        offset in the enclosing document.

        Args:
            offset (int): Offset of the enclosing construct.
            context (str): Label of the enclosing construct (e.g. ``ui:header``).

        Returns:
            MdfxError: ``self``, for use in ``raise err.relocate(...) from None``.
        """
        self.offset = offset
        self.context = context if self.context is None else f"{context} > {self.context}"
        return self

    def describe(self, source: str | None = None) -> str:
        """Return the message with expansion context, position and suggestions.

        Args:
            source (str | None): The source document; when given, the offset is
                reported as a line/column position.

        Returns:
            str: The formatted description.
        """
        text = self.message
        if self.context:
            text += f" (in expansion of {self.context})"
        if self.offset is not None:
            if source is not None:
                text += f" at {locate(source, self.offset)}"
            else:
                text += f" at offset {self.offset}"
        if self.suggestions:
            text += f"; did you mean: {', '.join(self.suggestions)}?"
        return text

    def __str__(self) -> str:
        return self.describe()


# --- Scanning ---


class ScanError(MdfxError):
    """Base class for scanner findings."""


class UnterminatedFenceError(ScanError):
    """The input ended inside a fenced code block."""

    def __init__(self, *, offset: int) -> None:
        super().__init__("unterminated code fence; content emitted as-is", offset=offset)


# --- Parsing ---


class ParseError(MdfxError):
    """Base class for structural template errors."""


class UnclosedTagError(ParseError):
    """A block tag was still open at the end of the input."""

    def __init__(self, opener_id: str, *, offset: int) -> None:
        super().__init__(f"unclosed tag '{{{{{opener_id}}}}}'", offset=offset)
        self.opener_id: str = opener_id


class MismatchedTagError(ParseError):
    """A closing tag does not match the innermost open tag."""

    def __init__(self, expected: str | None, found: str, *, offset: int) -> None:
        if expected is None:
            message = f"unexpected closing tag '{found}' with no open tag"
        else:
            message = f"mismatched closing tag: expected '{expected}', found '{found}'"
        super().__init__(message, offset=offset)
        self.expected: str | None = expected
        self.found: str = found


class NestingTooDeepError(ParseError):
    """Block tags are nested deeper than the configured limit."""

    def __init__(self, limit: int, *, offset: int) -> None:
        super().__init__(f"tags nested deeper than {limit} levels", offset=offset)
        self.limit: int = limit


class InvalidParameterError(ParseError):
    """A tag parameter failed validation."""


# --- Resolution ---


class ResolutionError(MdfxError):
    """Base class for unknown identifiers (raised in strict mode).

    Attributes:
        label (str): Namespace label used in messages.
        ident (str): The identifier as written.
    """

    label: str = "tag"

    def __init__(
        self,
        ident: str,
        *,
        offset: int | None = None,
        suggestions: Sequence[str] = (),
    ) -> None:
        super().__init__(f"unknown {self.label} '{ident}'", offset=offset, suggestions=suggestions)
        self.ident: str = ident


class UnknownStyleError(ResolutionError):
    """No style, frame or badge matches a bare identifier."""

    label = "style"


class UnknownFrameError(ResolutionError):
    """No frame matches a ``frame:`` tag."""

    label = "frame"


class UnknownBadgeError(ResolutionError):
    """No badge matches a ``badge:`` tag."""

    label = "badge"


class UnknownComponentError(ResolutionError):
    """No component matches a ``ui:`` tag."""

    label = "component"


class UnknownGlyphError(ResolutionError):
    """No glyph matches a ``glyph:`` tag."""

    label = "glyph"


class UnknownShieldError(ResolutionError):
    """No shield kind matches a ``shields:`` tag."""

    label = "shield kind"


# --- Expansion ---


class ExpansionError(MdfxError):
    """Base class for component expansion failures."""


class ExpansionTooDeepError(ExpansionError):
    """Component expansions recurse deeper than the configured limit."""

    def __init__(self, component_id: str, limit: int, *, offset: int | None = None) -> None:
        super().__init__(
            f"expansion of component '{component_id}' exceeds depth {limit}", offset=offset
        )
        self.component_id: str = component_id
        self.limit: int = limit


class UnknownComponentReferenceError(ExpansionError):
    """A component being expanded, or referenced by a template, is not registered."""

    def __init__(
        self,
        component_id: str,
        *,
        offset: int | None = None,
        suggestions: Sequence[str] = (),
    ) -> None:
        super().__init__(
            f"reference to unknown component '{component_id}'",
            offset=offset,
            suggestions=suggestions,
        )
        self.component_id: str = component_id


# --- Rendering ---


class RenderError(MdfxError):
    """Base class for rendering failures."""


class UnsupportedBadgeCharError(RenderError):
    """Badge content outside the badge's character set."""

    def __init__(self, badge_id: str, content: str, charset: str, *, offset: int) -> None:
        super().__init__(
            f"badge '{badge_id}' cannot render '{content}' (supported: {charset})",
            offset=offset,
        )
        self.badge_id: str = badge_id
        self.content: str = content
        self.charset: str = charset


class UnsupportedTargetFeatureError(RenderError):
    """The target cannot host the requested backend or feature."""

    def __init__(self, target: str, feature: str) -> None:
        super().__init__(f"target '{target}' does not support {feature}")
        self.target: str = target
        self.feature: str = feature


# --- Assets ---


class AssetError(MdfxError):
    """Base class for asset cache failures."""


class AssetIOError(AssetError):
    """Writing an asset file or the manifest failed."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"cannot write asset '{path}': {cause.strerror or cause}")
        self.path: Path = path
        self.cause: OSError = cause


class ManifestCorruptError(AssetError):
    """``manifest.json`` could not be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"corrupt asset manifest '{path}': {reason}")
        self.path: Path = path
