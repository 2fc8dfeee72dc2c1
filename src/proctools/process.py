"""Spawn processes and capture their results.

``call`` is the general entry point; ``run`` inherits the parent's
stdout/stderr and ``output`` captures both. Each has an asyncio twin.
Arguments may be a command-line string, a list of tokens, a mapping of
fields (converted with :func:`proctools.args.convert_to_args`) or an
explicit :class:`~proctools.args.ArgSource`.

Wrappers passed per call may rewrite the :class:`StartInfo` before the
spawn and observe the :class:`ProcessResult` afterwards.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import subprocess
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypedDict, Unpack

from proctools.args import ArgsConversionOptions, ProcessArgs
from proctools.instrumentation import increment_counter, timed_operation
from proctools.lex import join_args
from proctools.result import ProcessResult, StartInfo, StdioMode

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence
    from pathlib import Path

    from proctools.args import ArgSource

logger = logging.getLogger(__name__)

_STDIO: dict[str, int | None] = {
    "piped": subprocess.PIPE,
    "inherit": None,
    "null": subprocess.DEVNULL,
}


class CommandOptions(TypedDict, total=False):
    cwd: str | Path | None
    env: Mapping[str, str] | None
    clear_env: bool
    user: int | str | None
    group: int | str | None
    stdin: StdioMode
    stdout: StdioMode
    stderr: StdioMode
    timeout: float | None


@dataclass(frozen=True, slots=True)
class InvocationWrapper:
    """Request transform applied before a spawn and observer called after it."""

    before: Callable[[StartInfo], StartInfo] | None = None
    after: Callable[[StartInfo, ProcessResult], None] | None = None


type ArgsInput = ArgSource | ProcessArgs | str | Sequence[object] | Mapping[str, object] | None


def _child_env(si: StartInfo) -> dict[str, str] | None:
    if si.clear_env:
        return dict(si.env or {})
    if si.env is None:
        return None
    return {**os.environ, **si.env}


def _cwd(si: StartInfo) -> str | None:
    return None if si.cwd is None else os.fspath(si.cwd)


def start_info(
    file: str | os.PathLike[str],
    args: ArgsInput = None,
    convert: ArgsConversionOptions | None = None,
    **options: Unpack[CommandOptions],
) -> StartInfo:
    """Build the :class:`StartInfo` for *file* and *args*."""
    tokens = ProcessArgs.convert(args, convert)
    return StartInfo(file=os.fspath(file), args=tuple(tokens), **options)


def _before(si: StartInfo, wrappers: Sequence[InvocationWrapper]) -> StartInfo:
    for wrapper in wrappers:
        if wrapper.before is not None:
            si = wrapper.before(si)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug("Spawning %s", join_args(si.argv))
    increment_counter("process.calls")
    return si


def _after(si: StartInfo, result: ProcessResult, wrappers: Sequence[InvocationWrapper]) -> None:
    if result.code != 0:
        logger.debug("%s exited with code %s (signal %s)", si.file, result.code, result.signal)
    for wrapper in wrappers:
        if wrapper.after is not None:
            wrapper.after(si, result)


def spawn(si: StartInfo) -> ProcessResult:
    """Run *si* to completion with ``subprocess.run``.

    Raises:
        FileNotFoundError: The program does not exist.
        subprocess.TimeoutExpired: ``si.timeout`` elapsed; the child is killed.
    """
    with timed_operation("process.duration_ms"):
        completed = subprocess.run(
            si.argv,
            cwd=_cwd(si),
            env=_child_env(si),
            stdin=_STDIO[si.stdin],
            stdout=_STDIO[si.stdout],
            stderr=_STDIO[si.stderr],
            user=si.user,
            group=si.group,
            timeout=si.timeout,
            check=False,
        )
    return ProcessResult.from_returncode(
        si, completed.returncode, completed.stdout, completed.stderr
    )


async def _communicate(
    process: asyncio.subprocess.Process,
    timeout: float | None,
) -> tuple[bytes | None, bytes | None]:
    try:
        if timeout is None:
            return await process.communicate()
        return await asyncio.wait_for(process.communicate(), timeout=timeout)
    except (TimeoutError, asyncio.CancelledError):
        with contextlib.suppress(ProcessLookupError):
            process.kill()
        with contextlib.suppress(ProcessLookupError):
            await process.wait()
        raise


async def spawn_async(si: StartInfo) -> ProcessResult:
    """Asyncio variant of :func:`spawn`.

    Cancelling the awaiting task kills the child process.
    """
    with timed_operation("process.duration_ms"):
        process = await asyncio.create_subprocess_exec(
            si.file,
            *si.args,
            cwd=_cwd(si),
            env=_child_env(si),
            stdin=_STDIO[si.stdin],
            stdout=_STDIO[si.stdout],
            stderr=_STDIO[si.stderr],
            user=si.user,
            group=si.group,
        )
        stdout, stderr = await _communicate(process, si.timeout)
    returncode = process.returncode if process.returncode is not None else 1
    return ProcessResult.from_returncode(si, returncode, stdout, stderr)


def call(
    file: str | os.PathLike[str],
    args: ArgsInput = None,
    *,
    convert: ArgsConversionOptions | None = None,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    """Run *file* with *args* and return its result regardless of exit code."""
    si = _before(start_info(file, args, convert, **options), wrappers)
    result = spawn(si)
    _after(si, result, wrappers)
    return result


async def call_async(
    file: str | os.PathLike[str],
    args: ArgsInput = None,
    *,
    convert: ArgsConversionOptions | None = None,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    si = _before(start_info(file, args, convert, **options), wrappers)
    result = await spawn_async(si)
    _after(si, result, wrappers)
    return result


def run(
    file: str | os.PathLike[str],
    args: ArgsInput = None,
    *,
    convert: ArgsConversionOptions | None = None,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    """Like :func:`call` with stdout and stderr inherited from this process."""
    options.update(stdout="inherit", stderr="inherit")
    return call(file, args, convert=convert, wrappers=wrappers, **options)


async def run_async(
    file: str | os.PathLike[str],
    args: ArgsInput = None,
    *,
    convert: ArgsConversionOptions | None = None,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    options.update(stdout="inherit", stderr="inherit")
    return await call_async(file, args, convert=convert, wrappers=wrappers, **options)


def output(
    file: str | os.PathLike[str],
    args: ArgsInput = None,
    *,
    convert: ArgsConversionOptions | None = None,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    """Like :func:`call` with stdout and stderr captured."""
    options.update(stdout="piped", stderr="piped")
    return call(file, args, convert=convert, wrappers=wrappers, **options)


async def output_async(
    file: str | os.PathLike[str],
    args: ArgsInput = None,
    *,
    convert: ArgsConversionOptions | None = None,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    options.update(stdout="piped", stderr="piped")
    return await call_async(file, args, convert=convert, wrappers=wrappers, **options)


__all__ = [
    "ArgsInput",
    "CommandOptions",
    "InvocationWrapper",
    "call",
    "call_async",
    "output",
    "output_async",
    "run",
    "run_async",
    "spawn",
    "spawn_async",
    "start_info",
]
