# topmark:header:start
#
#   project      : mdfx
#   file         : cli_types.py
#   file_relpath : src/mdfx/cli/cli_types.py
#   license      : MIT
#   copyright    : (c) 2025 The mdfx contributors
#
# topmark:header:end


"""Click parameter types for the mdfx CLI."""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

import click
from click.shell_completion import CompletionItem

E = TypeVar("E", bound=Enum)


class EnumChoiceParam(click.ParamType, Generic[E]):
    """Choice of a string-valued Enum member (``Target``, ``Backend``, ``ListKind``).

    Values match case-insensitively, so ``--target GitHub`` selects
    ``Target.GITHUB``.
    """

    def __init__(self, enum_cls: type[E]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__.lower()
        self.choices = [str(member.value) for member in enum_cls]

    def convert(self, value: str | E, param: click.Parameter | None, ctx: click.Context | None) -> E:
        if isinstance(value, self.enum_cls):
            return value
        wanted = str(value).lower()
        for member in self.enum_cls:
            if str(member.value).lower() == wanted:
                return member
        self.fail(f"'{value}' is not one of: {', '.join(self.choices)}", param, ctx)

    def shell_complete(
        self, ctx: click.Context, param: click.Parameter, incomplete: str
    ) -> list[CompletionItem]:
        """Complete ``mdfx --target g<TAB>``; see ``_MDFX_COMPLETE=bash_source mdfx``."""
        prefix = incomplete.lower()
        return [CompletionItem(choice) for choice in self.choices if choice.startswith(prefix)]
