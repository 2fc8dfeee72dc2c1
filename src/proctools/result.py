"""Start information and results of a single process invocation."""

from __future__ import annotations

import signal as _signal
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Literal

from proctools.errors import ProcessFailureError

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from pathlib import Path

type StdioMode = Literal["piped", "inherit", "null"]


@dataclass(frozen=True, slots=True)
class StartInfo:
    """Everything needed to spawn one process."""

    file: str
    args: tuple[str, ...] = ()
    cwd: str | Path | None = None
    env: Mapping[str, str] | None = None
    clear_env: bool = False
    user: int | str | None = None
    group: int | str | None = None
    stdin: StdioMode = "null"
    stdout: StdioMode = "piped"
    stderr: StdioMode = "piped"
    timeout: float | None = None

    @property
    def argv(self) -> list[str]:
        return [self.file, *self.args]


def exit_status(returncode: int) -> tuple[int, str | None]:
    """Split a ``subprocess`` return code into ``(code, signal name)``.

    A process killed by a signal reports ``128 + signum`` as its code.
    """
    if returncode >= 0:
        return returncode, None
    signum = -returncode
    try:
        name = _signal.Signals(signum).name
    except ValueError:
        name = str(signum)
    return 128 + signum, name


@dataclass(frozen=True)
class ProcessResult:
    """Snapshot of a completed process.

    Byte, text and line views of a stream are empty unless that stream was
    ``piped``. Text views decode UTF-8 with replacement and are cached on
    first access.
    """

    start_info: StartInfo
    code: int
    signal: str | None = None
    raw_stdout: bytes = field(default=b"", repr=False)
    raw_stderr: bytes = field(default=b"", repr=False)

    @classmethod
    def from_returncode(
        cls,
        start_info: StartInfo,
        returncode: int,
        stdout: bytes | None,
        stderr: bytes | None,
    ) -> ProcessResult:
        code, signal = exit_status(returncode)
        return cls(start_info, code, signal, stdout or b"", stderr or b"")

    @property
    def file(self) -> str:
        return self.start_info.file

    @property
    def args(self) -> tuple[str, ...]:
        return self.start_info.args

    @property
    def stdout(self) -> bytes:
        return self.raw_stdout if self.start_info.stdout == "piped" else b""

    @property
    def stderr(self) -> bytes:
        return self.raw_stderr if self.start_info.stderr == "piped" else b""

    @cached_property
    def stdout_text(self) -> str:
        return self.stdout.decode("utf-8", errors="replace")

    @cached_property
    def stderr_text(self) -> str:
        return self.stderr.decode("utf-8", errors="replace")

    @cached_property
    def stdout_lines(self) -> list[str]:
        return self.stdout_text.splitlines()

    @cached_property
    def stderr_lines(self) -> list[str]:
        return self.stderr_text.splitlines()

    def success(self, predicate: Callable[[int], bool] | None = None) -> bool:
        """Return whether the exit code is 0, or whether *predicate* accepts it."""
        if predicate is None:
            return self.code == 0
        return predicate(self.code)

    def throw_or_continue(self, predicate: Callable[[int], bool] | None = None) -> ProcessResult:
        """Return ``self`` when :meth:`success` holds.

        Raises:
            ProcessFailureError: The process did not succeed.
        """
        if not self.success(predicate):
            raise ProcessFailureError(self.code, self.signal, self.file)
        return self


__all__ = ["ProcessResult", "StartInfo", "StdioMode", "exit_status"]
