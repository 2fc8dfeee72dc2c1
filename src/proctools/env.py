"""Environment variable access, reference expansion and search-path helpers."""

from __future__ import annotations

import os
import platform
import re
from typing import TYPE_CHECKING, Literal

from proctools.errors import EnvExpansionError

if TYPE_CHECKING:
    from collections.abc import Callable

type PlatformName = Literal["windows", "linux", "darwin"]

_PLATFORM_MAP: dict[str, PlatformName] = {
    "Windows": "windows",
    "Linux": "linux",
    "Darwin": "darwin",
}

_WINDOWS_REF = re.compile(r"%([^%]+)%")
_POSIX_REF = re.compile(r"\$\{([^}]*)\}|\$([A-Za-z_][A-Za-z0-9_]*)")


def current_platform() -> PlatformName:
    """Return the platform family used for executable fallbacks."""
    return _PLATFORM_MAP.get(platform.system(), "linux")


def is_windows() -> bool:
    """Return True when running on Windows."""
    return platform.system() == "Windows"


def path_separator() -> str:
    """Return the separator used by the search-path variable."""
    return ";" if is_windows() else ":"


def get(key: str) -> str | None:
    return os.environ.get(key)


def set(key: str, value: str) -> None:  # noqa: A001
    os.environ[key] = value


def unset(key: str) -> None:
    os.environ.pop(key, None)


def has(key: str) -> bool:
    return key in os.environ


def expand(
    value: str,
    windows: bool | None = None,
    get_value: Callable[[str], str | None] | None = None,
) -> str:
    """Expand environment references in *value*.

    Supports ``${VAR}``, ``${VAR:-default}``, ``${VAR-default}``,
    ``${VAR?message}`` and bare ``$VAR``. When *windows* is true (the
    default on Windows) ``%VAR%`` references are expanded first.
    Unset variables expand to an empty string.

    Raises:
        EnvExpansionError: ``${VAR?message}`` was used and VAR is unset or empty.
    """
    lookup = get_value or get
    if windows is None:
        windows = is_windows()

    if windows:
        value = _WINDOWS_REF.sub(lambda m: lookup(m.group(1)) or "", value)

    def _replace(match: re.Match[str]) -> str:
        bare = match.group(2)
        if bare is not None:
            return lookup(bare) or ""
        return _expand_braced(match.group(1), lookup)

    return _POSIX_REF.sub(_replace, value)


def _expand_braced(expression: str, lookup: Callable[[str], str | None]) -> str:
    if not expression:
        return ""

    if ":-" in expression:
        name, default = expression.split(":-", 1)
        return lookup(name) or default

    if "?" in expression:
        name, message = expression.split("?", 1)
        found = lookup(name)
        if not found:
            raise EnvExpansionError(message or f"{name} is not set")
        return found

    if "-" in expression:
        name, default = expression.split("-", 1)
        found = lookup(name)
        return default if found is None else found

    return lookup(expression) or ""


def get_path() -> str:
    """Return the raw search-path variable."""
    return os.environ.get("PATH", "")


def set_path(value: str) -> None:
    os.environ["PATH"] = value


def split_path() -> list[str]:
    """Return the non-blank entries of the search-path variable."""
    return [segment for segment in get_path().split(path_separator()) if segment.strip()]


def _contains(path: str, paths: list[str]) -> bool:
    if is_windows():
        lowered = path.lower()
        return any(entry.lower() == lowered for entry in paths)
    return path in paths


def has_path(path: str) -> bool:
    """Return whether *path* is already on the search path."""
    return _contains(path, split_path())


def add_path(path: str, prepend: bool = False) -> None:
    """Add *path* to the search path unless it is already present."""
    if has_path(path):
        return

    current = get_path()
    sep = path_separator()
    if not current:
        set_path(path)
    elif prepend:
        set_path(f"{path}{sep}{current}")
    else:
        set_path(f"{current}{sep}{path}")


def remove_path(path: str) -> None:
    """Remove every occurrence of *path* from the search path."""
    paths = split_path()
    if not _contains(path, paths):
        return

    if is_windows():
        lowered = path.lower()
        remaining = [entry for entry in paths if entry.lower() != lowered]
    else:
        remaining = [entry for entry in paths if entry != path]
    set_path(path_separator().join(remaining))


__all__ = [
    "PlatformName",
    "add_path",
    "current_platform",
    "expand",
    "get",
    "get_path",
    "has",
    "has_path",
    "is_windows",
    "path_separator",
    "remove_path",
    "set",
    "set_path",
    "split_path",
    "unset",
]
