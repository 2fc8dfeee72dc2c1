"""Command-line lexical helpers.

``split_arguments`` is the tokenizer used for every string that is turned
into process arguments. It understands single and double quotes and the
`` ` `` / ``'`` line-continuation markers used by multi-line shell
snippets, but it performs no escaping or expansion.

Quoting and joining use `mslex` on Windows for cmd.exe-compatible rules
and `shlex` elsewhere.
"""

from __future__ import annotations

import platform
import shlex
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import ModuleType

_CONTINUATION_MARKERS = ("'", "`")


class _Quote(IntEnum):
    NONE = 0
    SINGLE = 1
    DOUBLE = 2


def _continuation_length(value: str, index: int) -> int:
    """Return how many characters a line continuation at *index* spans, or 0.

    *index* points at the space that precedes the marker.
    """
    if value[index + 1 : index + 2] not in _CONTINUATION_MARKERS:
        return 0
    if value[index + 2 : index + 3] == "\n":
        return 3
    if value[index + 2 : index + 4] == "\r\n":
        return 4
    return 0


def split_arguments(value: str) -> list[str]:
    """Split *value* into shell-like tokens.

    Examples:
        >>> split_arguments("a 'b c' \\"d 'e'\\"")
        ['a', 'b c', "d 'e'"]

    A quote only opens at the start of a token; a closing quote always
    ends the token, even when it is empty. Characters buffered inside an
    unterminated quote are dropped at the end of input.
    """
    tokens: list[str] = []
    token: list[str] = []
    quote = _Quote.NONE
    index = 0
    length = len(value)

    while index < length:
        char = value[index]

        if quote is not _Quote.NONE:
            if (quote is _Quote.SINGLE and char == "'") or (quote is _Quote.DOUBLE and char == '"'):
                tokens.append("".join(token))
                token.clear()
                quote = _Quote.NONE
            else:
                token.append(char)
            index += 1
            continue

        if char == " ":
            skip = _continuation_length(value, index)
            if token:
                tokens.append("".join(token))
                token.clear()
            index += skip or 1
            continue

        if not token:
            if char == "'":
                quote = _Quote.SINGLE
                index += 1
                continue
            if char == '"':
                quote = _Quote.DOUBLE
                index += 1
                continue

        token.append(char)
        index += 1

    if token and quote is _Quote.NONE:
        tokens.append("".join(token))

    return tokens


def _lex() -> ModuleType:
    """Return the appropriate quoting module for the current platform."""
    if platform.system() == "Windows":
        import mslex

        return mslex
    return shlex


def quote_arg(value: str) -> str:
    """Quote a single argument safely for the active platform shell."""
    return _lex().quote(value)


def join_args(args: Iterable[str]) -> str:
    """Join argv into a shell command fragment for the active platform."""
    return _lex().join(list(args))


__all__ = ["join_args", "quote_arg", "split_arguments"]
