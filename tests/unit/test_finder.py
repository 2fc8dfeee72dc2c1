"""Tests for the executable registry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from proctools.errors import ExecutableNotFoundError
from proctools.finder import ExecutableLookup, ExecutableRegistry, default_registry

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from proctools.which import ResolverContext

pytestmark = pytest.mark.unit


def test_register_is_case_insensitive(registry: ExecutableRegistry) -> None:
    entry = ExecutableLookup(exe="MyTool", path="/opt/mytool")
    registry.register(entry)

    assert registry.get("mytool") is entry
    assert "MYTOOL" in registry
    assert len(registry) == 1


def test_register_overwrites(registry: ExecutableRegistry) -> None:
    registry.register(ExecutableLookup(exe="tool", path="/a"))
    registry.register(ExecutableLookup(exe="TOOL", path="/b"))
    assert registry.find("tool") == "/b"
    assert len(registry) == 1


def test_unregistered_name_is_resolved_and_registered(
    tmp_path: Path,
    make_executable: Callable[[Path, str], Path],
    search_path: Callable[..., None],
    registry: ExecutableRegistry,
) -> None:
    expected = make_executable(tmp_path / "bin", "mytool")
    search_path(tmp_path / "bin")

    assert registry.find("mytool") == str(expected)
    entry = registry.get("mytool")
    assert entry is not None
    assert entry.path == str(expected)


def test_unregistered_miss_is_registered_without_path(
    tmp_path: Path,
    search_path: Callable[..., None],
    registry: ExecutableRegistry,
) -> None:
    search_path(tmp_path)
    assert registry.find("ghost") is None
    entry = registry.get("ghost")
    assert entry is not None
    assert entry.path is None


def test_registered_path_wins_without_searching(
    registry: ExecutableRegistry,
    resolver_context: ResolverContext,
) -> None:
    registry.register(ExecutableLookup(exe="tool", path="/explicit/tool"))
    assert registry.find("tool") == "/explicit/tool"
    assert resolver_context.scan_count == 0


def test_search_path_hit_is_persisted(
    tmp_path: Path,
    make_executable: Callable[[Path, str], Path],
    search_path: Callable[..., None],
    registry: ExecutableRegistry,
) -> None:
    expected = make_executable(tmp_path / "bin", "tool")
    search_path(tmp_path / "bin")
    registry.register(ExecutableLookup(exe="tool", linux=["/never/used"]))

    assert registry.find("tool") == str(expected)
    assert registry.get("tool").path == str(expected)  # type: ignore[union-attr]


@pytest.mark.mock_platform_system("Darwin")
def test_darwin_fallback_after_search_path_fails(
    tmp_path: Path,
    make_executable: Callable[[Path, str], Path],
    search_path: Callable[..., None],
    monkeypatch: pytest.MonkeyPatch,
    registry: ExecutableRegistry,
) -> None:
    installed = make_executable(tmp_path / "Applications" / "Tool.app", "tool")
    monkeypatch.setenv("PROCTOOLS_TEST_APPS", str(tmp_path / "Applications"))
    search_path(tmp_path / "empty")
    registry.register(
        ExecutableLookup(
            exe="tool",
            darwin=["/nonexistent/tool", "${PROCTOOLS_TEST_APPS}/Tool.app/tool"],
        )
    )

    assert registry.find("tool") == str(installed)
    assert registry.get("tool").path == str(installed)  # type: ignore[union-attr]


@pytest.mark.mock_platform_system("Darwin")
def test_darwin_also_tries_linux_fallbacks(
    tmp_path: Path,
    make_executable: Callable[[Path, str], Path],
    search_path: Callable[..., None],
    registry: ExecutableRegistry,
) -> None:
    installed = make_executable(tmp_path / "usr" / "bin", "tool")
    search_path(tmp_path / "empty")
    registry.register(
        ExecutableLookup(exe="tool", darwin=["/nonexistent/tool"], linux=[str(installed)])
    )

    assert registry.find("tool") == str(installed)


@pytest.mark.mock_platform_system("Linux")
def test_linux_ignores_other_platform_fallbacks(
    tmp_path: Path,
    make_executable: Callable[[Path, str], Path],
    search_path: Callable[..., None],
    registry: ExecutableRegistry,
) -> None:
    installed = make_executable(tmp_path / "other", "tool")
    search_path(tmp_path / "empty")
    registry.register(
        ExecutableLookup(exe="tool", darwin=[str(installed)], windows=[str(installed)])
    )

    assert registry.find("tool") is None


def test_find_or_raise(
    tmp_path: Path, search_path: Callable[..., None], registry: ExecutableRegistry
) -> None:
    search_path(tmp_path)
    with pytest.raises(ExecutableNotFoundError) as exc_info:
        registry.find_or_raise("ghost")
    assert exc_info.value.name == "ghost"


async def test_find_async(
    tmp_path: Path,
    make_executable: Callable[[Path, str], Path],
    search_path: Callable[..., None],
    registry: ExecutableRegistry,
) -> None:
    expected = make_executable(tmp_path / "bin", "mytool")
    search_path(tmp_path / "bin")

    assert await registry.find_async("mytool") == str(expected)
    assert await registry.find_or_raise_async("mytool") == str(expected)


async def test_find_or_raise_async(
    tmp_path: Path,
    search_path: Callable[..., None],
    registry: ExecutableRegistry,
) -> None:
    search_path(tmp_path)
    with pytest.raises(ExecutableNotFoundError):
        await registry.find_or_raise_async("ghost")


@pytest.mark.parametrize(
    ("platform", "expected"),
    [
        ("windows", ["w"]),
        ("linux", ["l"]),
        ("darwin", ["d", "l"]),
    ],
)
def test_fallback_order(platform: str, expected: list[str]) -> None:
    entry = ExecutableLookup(exe="x", windows=["w"], linux=["l"], darwin=["d"])
    assert entry.fallbacks(platform) == expected  # type: ignore[arg-type]


def test_default_registry_is_shared() -> None:
    assert default_registry() is default_registry()
