"""Opt-in counters and timings for resolver scans and process calls.

Enabled with ``PROCTOOLS_INSTRUMENTATION=1`` or ``configure(enabled=True)``.
"""

from __future__ import annotations

import logging
import os
import threading
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)

_INSTRUMENTATION_ENV = "PROCTOOLS_INSTRUMENTATION"


def _env_enabled() -> bool:
    return os.environ.get(_INSTRUMENTATION_ENV, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(slots=True)
class _Timing:
    count: int = 0
    total_ms: float = 0.0
    max_ms: float = 0.0

    def add(self, duration_ms: float) -> None:
        self.count += 1
        self.total_ms += duration_ms
        self.max_ms = max(self.max_ms, duration_ms)

    def to_dict(self) -> dict[str, float | int]:
        return {
            "count": self.count,
            "total_ms": self.total_ms,
            "avg_ms": self.total_ms / self.count if self.count else 0.0,
            "max_ms": self.max_ms,
        }


_lock = threading.Lock()
_enabled = _env_enabled()
_counters: dict[str, int] = {}
_timings: dict[str, _Timing] = {}


def configure(*, enabled: bool) -> None:
    global _enabled
    _enabled = enabled


def is_enabled() -> bool:
    return _enabled


def reset() -> None:
    with _lock:
        _counters.clear()
        _timings.clear()


def snapshot() -> dict[str, Any]:
    """Return a copy of the current counters and timings."""
    with _lock:
        return {
            "enabled": _enabled,
            "counters": dict(_counters),
            "timings": {name: timing.to_dict() for name, timing in _timings.items()},
        }


def increment_counter(name: str, amount: int = 1) -> None:
    if not _enabled:
        return
    with _lock:
        _counters[name] = _counters.get(name, 0) + amount
    logger.debug("counter %s += %d", name, amount)


def record_timing(name: str, duration_ms: float) -> None:
    """Record an elapsed duration in milliseconds."""
    if not _enabled:
        return
    with _lock:
        _timings.setdefault(name, _Timing()).add(duration_ms)


@contextmanager
def timed_operation(name: str) -> Iterator[None]:
    """Record the wall time of the wrapped block under *name*."""
    if not _enabled:
        yield
        return
    started = time.perf_counter()
    try:
        yield
    finally:
        record_timing(name, (time.perf_counter() - started) * 1000.0)


__all__ = [
    "configure",
    "increment_counter",
    "is_enabled",
    "record_timing",
    "reset",
    "snapshot",
    "timed_operation",
]
