"""Package version helpers."""

from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, version


@lru_cache(maxsize=1)
def get_version() -> str:
    """Return the installed proctools version, or 'dev' without package metadata."""
    try:
        return version("proctools")
    except PackageNotFoundError:
        return "dev"
