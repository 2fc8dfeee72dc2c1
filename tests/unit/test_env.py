"""Tests for environment expansion and search-path helpers."""

from __future__ import annotations

import pytest

from proctools import env
from proctools.errors import EnvExpansionError

pytestmark = pytest.mark.unit

VALUES = {"HOME": "/home/me", "EMPTY": "", "TOOL_DIR": "/opt/tool"}


def _expand(value: str, windows: bool = False) -> str:
    return env.expand(value, windows=windows, get_value=VALUES.get)


class TestExpand:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("${HOME}/bin", "/home/me/bin"),
            ("$HOME/bin", "/home/me/bin"),
            ("$TOOL_DIR/bin", "/opt/tool/bin"),
            ("${MISSING}/bin", "/bin"),
            ("$MISSING", ""),
            ("${MISSING:-/usr}/bin", "/usr/bin"),
            ("${EMPTY:-fallback}", "fallback"),
            ("${EMPTY-fallback}", ""),
            ("${MISSING-fallback}", "fallback"),
            ("no references", "no references"),
            ("%HOME%", "%HOME%"),
        ],
    )
    def test_posix_forms(self, value: str, expected: str) -> None:
        assert _expand(value) == expected

    def test_windows_percent_form(self) -> None:
        assert _expand("%HOME%\\bin;%MISSING%", windows=True) == "/home/me\\bin;"

    def test_required_variable_raises_with_message(self) -> None:
        with pytest.raises(EnvExpansionError, match="set MISSING first"):
            _expand("${MISSING?set MISSING first}")

    def test_required_variable_present(self) -> None:
        assert _expand("${HOME?unused}") == "/home/me"

    def test_expanded_values_are_not_expanded_again(self) -> None:
        assert env.expand("$A", windows=False, get_value={"A": "$B", "B": "x"}.get) == "$B"

    def test_reads_process_environment_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROCTOOLS_TEST_VALUE", "42")
        assert env.expand("v=${PROCTOOLS_TEST_VALUE}", windows=False) == "v=42"


class TestPlatform:
    @pytest.mark.mock_platform_system("Darwin")
    def test_darwin(self) -> None:
        assert env.current_platform() == "darwin"
        assert not env.is_windows()

    @pytest.mark.mock_platform_system("Windows")
    def test_windows(self) -> None:
        assert env.current_platform() == "windows"
        assert env.path_separator() == ";"

    @pytest.mark.mock_platform_system("FreeBSD")
    def test_unknown_platform_uses_linux_fallbacks(self) -> None:
        assert env.current_platform() == "linux"


@pytest.mark.mock_platform_system("Linux")
class TestSearchPath:
    def test_split_skips_blank_entries(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH", "/a::/b: :")
        assert env.split_path() == ["/a", "/b"]

    def test_add_path_appends_and_prepends_once(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH", "/a")
        env.add_path("/b")
        env.add_path("/c", prepend=True)
        env.add_path("/b")
        assert env.get_path() == "/c:/a:/b"

    def test_add_path_to_empty(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH", "")
        env.add_path("/only")
        assert env.get_path() == "/only"

    def test_remove_path(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH", "/a:/b:/a")
        env.remove_path("/a")
        assert env.get_path() == "/b"
        env.remove_path("/missing")
        assert env.get_path() == "/b"

    def test_has_path_is_case_sensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH", "/Tools")
        assert env.has_path("/Tools")
        assert not env.has_path("/tools")


@pytest.mark.mock_platform_system("Windows")
def test_windows_search_path_is_case_insensitive(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", "C:\\Tools;C:\\Other")
    assert env.has_path("c:\\tools")
    env.remove_path("c:\\TOOLS")
    assert env.get_path() == "C:\\Other"


def test_set_get_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PROCTOOLS_TEST_VAR", raising=False)
    assert not env.has("PROCTOOLS_TEST_VAR")
    env.set("PROCTOOLS_TEST_VAR", "1")
    try:
        assert env.get("PROCTOOLS_TEST_VAR") == "1"
    finally:
        env.unset("PROCTOOLS_TEST_VAR")
    assert env.get("PROCTOOLS_TEST_VAR") is None
