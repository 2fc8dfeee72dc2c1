"""Wrappers for the ``age`` file encryption tool and ``age-keygen``."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypedDict, Unpack

from proctools.args import ArgsConversionOptions, ProcessArgs
from proctools.finder import ExecutableLookup, default_registry
from proctools.process import call, call_async

if TYPE_CHECKING:
    from collections.abc import Sequence

    from proctools.process import ArgsInput, CommandOptions, InvocationWrapper
    from proctools.result import ProcessResult

AGE = "age"
AGE_KEYGEN = "age-keygen"

# ``input`` is the file to encrypt or decrypt; age stops parsing flags at the
# first positional, so it has to be the last token.
AGE_CONVERSION = ArgsConversionOptions(prepend=("input",))

default_registry().register(ExecutableLookup(exe=AGE))
default_registry().register(ExecutableLookup(exe=AGE_KEYGEN))


class AgeOptions(TypedDict, total=False):
    decrypt: bool
    encrypt: bool
    identity: str
    output: str
    recipient: list[str]
    recipientsFile: list[str]
    armor: bool
    passphrase: bool
    input: str


def age(
    cmd: AgeOptions | ArgsInput = None,
    *,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    """Run ``age`` with a field mapping, a command-line string or a token list."""
    args = ProcessArgs.convert(cmd, AGE_CONVERSION)  # type: ignore[arg-type]
    return call(default_registry().find_or_raise(AGE), args, wrappers=wrappers, **options)


async def age_async(
    cmd: AgeOptions | ArgsInput = None,
    *,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    args = ProcessArgs.convert(cmd, AGE_CONVERSION)  # type: ignore[arg-type]
    exe = await default_registry().find_or_raise_async(AGE)
    return await call_async(exe, args, wrappers=wrappers, **options)


def keygen(
    cmd: str | Sequence[str] | None = None,
    *,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    """Run ``age-keygen``."""
    return call(default_registry().find_or_raise(AGE_KEYGEN), cmd, wrappers=wrappers, **options)


async def keygen_async(
    cmd: str | Sequence[str] | None = None,
    *,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    exe = await default_registry().find_or_raise_async(AGE_KEYGEN)
    return await call_async(exe, cmd, wrappers=wrappers, **options)


__all__ = [
    "AGE",
    "AGE_CONVERSION",
    "AGE_KEYGEN",
    "AgeOptions",
    "age",
    "age_async",
    "keygen",
    "keygen_async",
]
