"""Registry of named executables with per-platform fallback locations.

Tool wrappers register the programs they need; ``find`` resolves a name
through the search path first and then through the registered fallback
install locations for the current platform.
"""

from __future__ import annotations

import asyncio
import logging
import os
import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from proctools import env
from proctools.errors import ExecutableNotFoundError
from proctools.which import ResolverContext, which

if TYPE_CHECKING:
    from proctools.env import PlatformName

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ExecutableLookup:
    """A named executable and where to look for it."""

    exe: str
    path: str | None = None
    windows: list[str] = field(default_factory=list)
    linux: list[str] = field(default_factory=list)
    darwin: list[str] = field(default_factory=list)

    def fallbacks(self, platform: PlatformName) -> list[str]:
        """Return fallback templates to try on *platform*, in order.

        macOS also tries the Linux locations after its own.
        """
        match platform:
            case "windows":
                return list(self.windows)
            case "darwin":
                return [*self.darwin, *self.linux]
            case _:
                return list(self.linux)


class ExecutableRegistry:
    """Lowercased executable name -> :class:`ExecutableLookup`."""

    def __init__(self, context: ResolverContext | None = None) -> None:
        self._entries: dict[str, ExecutableLookup] = {}
        self._lock = threading.Lock()
        self.context = context

    def register(self, entry: ExecutableLookup) -> None:
        with self._lock:
            self._entries[entry.exe.lower()] = entry

    def get(self, name: str) -> ExecutableLookup | None:
        with self._lock:
            return self._entries.get(name.lower())

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _from_fallbacks(self, entry: ExecutableLookup) -> str | None:
        for template in entry.fallbacks(env.current_platform()):
            location = env.expand(template)
            if os.path.exists(location):
                entry.path = location
                return location
        return None

    def find(self, name: str) -> str | None:
        """Return the resolved path of *name*, or ``None``.

        Unknown names are registered on first lookup together with whatever
        the search path yielded.
        """
        entry = self.get(name)
        if entry is None:
            location = which(name, context=self.context)
            self.register(ExecutableLookup(exe=name, path=location))
            return location

        if entry.path:
            return entry.path

        location = which(entry.exe, context=self.context)
        if location:
            entry.path = location
            return location

        location = self._from_fallbacks(entry)
        if location is None:
            logger.debug("No fallback location exists for %s", entry.exe)
        return location

    async def find_async(self, name: str) -> str | None:
        return await asyncio.to_thread(self.find, name)

    def find_or_raise(self, name: str) -> str:
        location = self.find(name)
        if not location:
            raise ExecutableNotFoundError(name)
        return location

    async def find_or_raise_async(self, name: str) -> str:
        location = await self.find_async(name)
        if not location:
            raise ExecutableNotFoundError(name)
        return location


_default_registry = ExecutableRegistry()


def default_registry() -> ExecutableRegistry:
    """Return the process-wide executable registry."""
    return _default_registry


def register(entry: ExecutableLookup) -> None:
    _default_registry.register(entry)


def find(name: str) -> str | None:
    return _default_registry.find(name)


async def find_async(name: str) -> str | None:
    return await _default_registry.find_async(name)


def find_or_raise(name: str) -> str:
    return _default_registry.find_or_raise(name)


async def find_or_raise_async(name: str) -> str:
    return await _default_registry.find_or_raise_async(name)


__all__ = [
    "ExecutableLookup",
    "ExecutableRegistry",
    "default_registry",
    "find",
    "find_async",
    "find_or_raise",
    "find_or_raise_async",
    "register",
]
