"""Pytest fixtures for proctools tests."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from hypothesis import Phase, Verbosity, settings

from proctools.finder import ExecutableRegistry
from proctools.which import ResolverContext

_TEST_BASE_DIR = Path(tempfile.mkdtemp(prefix="proctools-tests-"))
os.environ["PROCTOOLS_CONFIG_DIR"] = str(_TEST_BASE_DIR / "config")
os.environ.pop("PROCTOOLS_INSTRUMENTATION", None)

if TYPE_CHECKING:
    from collections.abc import Callable


settings.register_profile(
    "ci",
    max_examples=100,
    deadline=None,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
)
settings.register_profile(
    "dev",
    max_examples=30,
    deadline=500,
)
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    deadline=None,
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


@pytest.fixture(autouse=True)
def _mock_platform_system(monkeypatch: pytest.MonkeyPatch, request: pytest.FixtureRequest) -> None:
    """Handle @pytest.mark.mock_platform_system("Windows") marker."""
    marker = request.node.get_closest_marker("mock_platform_system")
    if marker:
        target_platform = marker.args[0]
        monkeypatch.setattr("platform.system", lambda: target_platform)


@pytest.fixture
def resolver_context() -> ResolverContext:
    """A fresh, empty resolver cache."""
    return ResolverContext()


@pytest.fixture
def registry(resolver_context: ResolverContext) -> ExecutableRegistry:
    return ExecutableRegistry(resolver_context)


@pytest.fixture
def make_executable() -> Callable[[Path, str], Path]:
    """Create an executable file named *name* inside *directory*."""

    def _make(directory: Path, name: str) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def search_path(monkeypatch: pytest.MonkeyPatch) -> Callable[..., None]:
    """Replace ``PATH`` with the given directories."""

    def _set(*directories: Path | str, separator: str = os.pathsep) -> None:
        monkeypatch.setenv("PATH", separator.join(str(d) for d in directories))

    return _set
