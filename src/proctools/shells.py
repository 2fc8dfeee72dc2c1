"""Run inline scripts through a scripting interpreter.

The script is written to a temporary file with the interpreter's
extension, executed, and removed again.
"""

from __future__ import annotations

import asyncio
import logging
import os
import sys
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Unpack

from proctools import env
from proctools.errors import UnsupportedShellError
from proctools.process import call, call_async

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from proctools.process import CommandOptions, InvocationWrapper
    from proctools.result import ProcessResult

logger = logging.getLogger(__name__)

_POWERSHELL_TEMPLATE = """\
$ErrorActionPreference = 'Stop';

{script}

if ((Test-Path -LiteralPath variable:\\LASTEXITCODE))
{{
    exit $LASTEXITCODE
}}
"""


def _powershell_args(file_name: str) -> list[str]:
    return [
        "-NoLogo",
        "-NoProfile",
        "-NonInteractive",
        "-ExecutionPolicy",
        "Bypass",
        "-Command",
        f". '{file_name}'",
    ]


@dataclass(frozen=True, slots=True)
class ShellSpec:
    """How to run a script file with one interpreter."""

    shell: str
    ext: str
    args: Callable[[str], list[str]] | None = None
    format: Callable[[str], str] | None = None

    def render(self, script: str) -> str:
        return self.format(script) if self.format else script

    def argv(self, file_name: str) -> list[str]:
        return self.args(file_name) if self.args else [file_name]


SHELLS: dict[str, ShellSpec] = {
    "cmd": ShellSpec(
        shell="cmd",
        ext=".cmd",
        args=lambda f: ["/c", f],
        format=lambda s: f"@echo off\n{s}",
    ),
    "powershell": ShellSpec(
        shell="powershell",
        ext=".ps1",
        args=_powershell_args,
        format=lambda s: _POWERSHELL_TEMPLATE.format(script=s),
    ),
    "pwsh": ShellSpec(
        shell="pwsh",
        ext=".ps1",
        args=_powershell_args,
        format=lambda s: _POWERSHELL_TEMPLATE.format(script=s),
    ),
    "bash": ShellSpec(
        shell="bash",
        ext=".sh",
        args=lambda f: ["--noprofile", "--norc", "-e", "-o", "pipefail", f],
    ),
    "zsh": ShellSpec(
        shell="zsh",
        ext=".sh",
        args=lambda f: ["-f", "-e", "-o", "pipefail", f],
    ),
    "sh": ShellSpec(shell="sh", ext=".sh", args=lambda f: ["-e", f]),
    "python": ShellSpec(shell=sys.executable or "python", ext=".py"),
    "ruby": ShellSpec(shell="ruby", ext=".rb"),
    "deno-ts": ShellSpec(shell="deno", ext=".ts", args=lambda f: ["run", "--allow-all", f]),
    "deno": ShellSpec(shell="deno", ext=".js", args=lambda f: ["run", "--allow-all", f]),
}


def default_shell() -> str:
    return "powershell" if env.is_windows() else "bash"


def get_shell(name: str | None) -> ShellSpec:
    """Return the interpreter registered as *name* (platform default for None).

    Raises:
        UnsupportedShellError: *name* is not registered.
    """
    key = name or default_shell()
    spec = SHELLS.get(key)
    if spec is None:
        raise UnsupportedShellError(key)
    return spec


def _write_script(spec: ShellSpec, script: str) -> str:
    fd, file_name = tempfile.mkstemp(prefix="exec_", suffix=spec.ext)
    with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as handle:
        handle.write(spec.render(script))
    logger.debug("Wrote %s script to %s", spec.shell, file_name)
    return file_name


def exec_script(
    script: str,
    shell: str | None = None,
    *,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    """Write *script* to a temporary file and run it with *shell*."""
    spec = get_shell(shell)
    file_name = _write_script(spec, script)
    try:
        return call(spec.shell, spec.argv(file_name), wrappers=wrappers, **options)
    finally:
        Path(file_name).unlink(missing_ok=True)


async def exec_script_async(
    script: str,
    shell: str | None = None,
    *,
    wrappers: Sequence[InvocationWrapper] = (),
    **options: Unpack[CommandOptions],
) -> ProcessResult:
    spec = get_shell(shell)
    file_name = await asyncio.to_thread(_write_script, spec, script)
    try:
        return await call_async(spec.shell, spec.argv(file_name), wrappers=wrappers, **options)
    finally:
        await asyncio.to_thread(Path(file_name).unlink, missing_ok=True)


__all__ = [
    "SHELLS",
    "ShellSpec",
    "default_shell",
    "exec_script",
    "exec_script_async",
    "get_shell",
]
