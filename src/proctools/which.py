"""Locate executables on the search path.

``which`` returns the absolute path of a program found in the optional
prepended directories or in ``PATH``. Successful lookups are cached in a
``ResolverContext`` keyed by the program's root name (basename without
extension) and by the literal name that was requested. Failed lookups are
never cached, so a later lookup rescans.
"""

from __future__ import annotations

import asyncio
import logging
import ntpath
import os
import posixpath
import threading
from typing import TYPE_CHECKING

from proctools import env
from proctools.errors import ArgumentError, ExecutableNotFoundError
from proctools.instrumentation import increment_counter, timed_operation

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger(__name__)

DEFAULT_PATHEXT = ".com;.exe;.bat;.cmd;.vbs;.vbe;.js;.jse;.wsf;.wsh"


class ResolverContext:
    """Owns the resolved-path cache used by :func:`which`."""

    def __init__(self) -> None:
        self._cache: dict[str, str] = {}
        self._lock = threading.Lock()
        self.scan_count = 0

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._cache.get(key)

    def store(self, location: str, *keys: str) -> None:
        with self._lock:
            for key in keys:
                self._cache[key] = location

    def record_scan(self) -> None:
        with self._lock:
            self.scan_count += 1

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()
            self.scan_count = 0

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)


_default_context = ResolverContext()


def default_context() -> ResolverContext:
    """Return the process-wide resolver context."""
    return _default_context


def _pathmod():
    return ntpath if env.is_windows() else posixpath


def basename(file_name: str) -> str:
    return _pathmod().basename(file_name)


def root_name(file_name: str) -> str:
    """Return the basename of *file_name* without its extension."""
    return _pathmod().splitext(basename(file_name))[0]


def executable_extensions() -> list[str]:
    """Return the lowercased ``PATHEXT`` entries (Windows only)."""
    raw = env.get("PATHEXT") or ""
    if not raw.strip():
        raw = DEFAULT_PATHEXT
    return [segment for segment in raw.lower().split(";") if segment.strip()]


def _search_directories(prepend_paths: Iterable[str] | None) -> list[str]:
    directories = [os.path.abspath(path) for path in prepend_paths or ()]
    directories.extend(env.expand(segment) for segment in env.split_path())
    return directories


def _has_executable_extension(file_name: str) -> bool:
    lowered = file_name.lower()
    return any(lowered.endswith(ext) for ext in executable_extensions())


def _match_in_directory(directory: str, wanted: str) -> str | None:
    """Return the entry of *directory* whose name equals *wanted*, ignoring case."""
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if entry.name.lower() == wanted and entry.is_file():
                    return os.path.join(directory, entry.name)
    except OSError as exc:
        logger.debug("Skipping unreadable search directory %s: %s", directory, exc)
    return None


def _scan(
    context: ResolverContext,
    file_name: str,
    prepend_paths: Iterable[str] | None,
) -> str | None:
    context.record_scan()
    increment_counter("which.scans")
    wanted = basename(file_name).lower()
    if env.is_windows() and not _has_executable_extension(wanted):
        logger.debug("%s has no executable extension; matching the exact name only", file_name)

    with timed_operation("which.scan_ms"):
        for directory in _search_directories(prepend_paths):
            if not directory.strip() or not os.path.isdir(directory):
                continue
            location = _match_in_directory(directory, wanted)
            if location is not None:
                return location
    return None


def which(
    file_name: str,
    prepend_paths: Iterable[str] | None = None,
    use_cache: bool = True,
    *,
    context: ResolverContext | None = None,
) -> str | None:
    """Return the full path of *file_name*, or ``None`` when it cannot be found.

    Args:
        file_name: Program name, file name or absolute path.
        prepend_paths: Directories searched before ``PATH``; relative entries
            are resolved against the current directory.
        use_cache: Consult and populate the context cache.
        context: Cache owner; defaults to the process-wide context.

    Raises:
        ArgumentError: *file_name* is empty.
    """
    if not file_name:
        raise ArgumentError("file_name is required")

    ctx = context or _default_context
    root = root_name(file_name)

    if use_cache:
        cached = ctx.get(root)
        if cached is not None:
            increment_counter("which.cache_hits")
            return cached

    if os.path.isabs(file_name) and os.path.isfile(file_name):
        if use_cache:
            ctx.store(file_name, root, file_name)
        return file_name

    location = _scan(ctx, file_name, prepend_paths)
    if location is None:
        logger.debug("Executable %s not found", file_name)
        return None

    ctx.store(location, root, file_name)
    return location


async def which_async(
    file_name: str,
    prepend_paths: Iterable[str] | None = None,
    use_cache: bool = True,
    *,
    context: ResolverContext | None = None,
) -> str | None:
    """Asyncio variant of :func:`which`; the scan runs in a worker thread."""
    if not file_name:
        raise ArgumentError("file_name is required")
    prepend = list(prepend_paths) if prepend_paths is not None else None
    return await asyncio.to_thread(which, file_name, prepend, use_cache, context=context)


def which_or_raise(
    file_name: str,
    prepend_paths: Iterable[str] | None = None,
    use_cache: bool = True,
    *,
    context: ResolverContext | None = None,
) -> str:
    location = which(file_name, prepend_paths, use_cache, context=context)
    if location is None:
        raise ExecutableNotFoundError(file_name)
    return location


__all__ = [
    "DEFAULT_PATHEXT",
    "ResolverContext",
    "basename",
    "default_context",
    "executable_extensions",
    "root_name",
    "which",
    "which_async",
    "which_or_raise",
]
