"""Exception types raised by proctools."""

from __future__ import annotations


class ProcToolsError(Exception):
    """Base class for all proctools errors."""


class ArgumentError(ProcToolsError, ValueError):
    """Raised when a required argument is missing or empty."""


class TypeConversionError(ProcToolsError, TypeError):
    """Raised when a value cannot be converted into process arguments."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Cannot convert {value!r} to ProcessArgs")


class EnvExpansionError(ProcToolsError):
    """Raised by ``${VAR?message}`` when ``VAR`` is unset or empty."""


class ExecutableNotFoundError(ProcToolsError):
    """Raised when an executable could not be located."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Executable not found: {name}")


class ProcessFailureError(ProcToolsError):
    """Raised by ``ProcessResult.throw_or_continue`` for a failed process."""

    def __init__(self, code: int, signal: str | None = None, file: str | None = None) -> None:
        self.code = code
        self.signal = signal
        self.file = file
        target = f"{file} " if file else ""
        super().__init__(f"Process {target}failed with code {code} and signal {signal}")


class UnsupportedShellError(ProcToolsError):
    """Raised when a script is run with an unregistered interpreter."""

    def __init__(self, shell: str) -> None:
        self.shell = shell
        super().__init__(f"Shell {shell} not supported")


__all__ = [
    "ArgumentError",
    "EnvExpansionError",
    "ExecutableNotFoundError",
    "ProcToolsError",
    "ProcessFailureError",
    "TypeConversionError",
    "UnsupportedShellError",
]
