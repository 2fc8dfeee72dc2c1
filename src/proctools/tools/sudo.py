"""Run processes elevated through ``sudo``."""

from __future__ import annotations

from dataclasses import replace

from proctools import env
from proctools.process import InvocationWrapper
from proctools.result import StartInfo


def elevate(si: StartInfo) -> StartInfo:
    """Rewrite *si* so the original program runs as an argument of ``sudo``.

    Windows has no ``sudo``; the request is returned unchanged there.
    """
    if env.is_windows():
        return si
    return replace(si, file="sudo", args=(si.file, *si.args))


SUDO = InvocationWrapper(before=elevate)
"""Pass in ``wrappers=`` to elevate a single call."""


__all__ = ["SUDO", "elevate"]
