"""Tests for ProcessResult views and success handling."""

from __future__ import annotations

import signal

import pytest

from proctools.errors import ProcessFailureError
from proctools.result import ProcessResult, StartInfo, exit_status

pytestmark = pytest.mark.unit


def _result(
    *,
    code: int = 0,
    stdout: bytes = b"one\ntwo\n",
    stderr: bytes = b"warn\n",
    stdout_mode: str = "piped",
    stderr_mode: str = "piped",
    sig: str | None = None,
) -> ProcessResult:
    si = StartInfo(
        file="tool",
        args=("a",),
        stdout=stdout_mode,  # type: ignore[arg-type]
        stderr=stderr_mode,  # type: ignore[arg-type]
    )
    return ProcessResult(si, code, sig, stdout, stderr)


def test_piped_views() -> None:
    result = _result()
    assert result.stdout == b"one\ntwo\n"
    assert result.stdout_text == "one\ntwo\n"
    assert result.stdout_lines == ["one", "two"]
    assert result.stderr_text == "warn\n"
    assert result.stderr_lines == ["warn"]
    assert result.file == "tool"
    assert result.args == ("a",)


@pytest.mark.parametrize("mode", ["null", "inherit"])
def test_uncaptured_streams_are_empty(mode: str) -> None:
    result = _result(stdout_mode=mode, stderr_mode=mode)
    assert result.stdout == b""
    assert result.stdout_text == ""
    assert result.stdout_lines == []
    assert result.stderr == b""
    assert result.stderr_text == ""
    assert result.stderr_lines == []


def test_text_views_are_cached() -> None:
    result = _result()
    assert result.stdout_text is result.stdout_text
    assert result.stdout_lines is result.stdout_lines


def test_invalid_utf8_is_replaced() -> None:
    result = _result(stdout=b"caf\xe9")
    assert result.stdout_text == "caf�"


def test_result_is_immutable() -> None:
    result = _result()
    with pytest.raises(AttributeError):
        result.code = 1  # type: ignore[misc]


class TestSuccess:
    def test_zero_is_success(self) -> None:
        assert _result(code=0).success()

    def test_nonzero_is_failure(self) -> None:
        assert not _result(code=3).success()

    def test_predicate_overrides(self) -> None:
        assert _result(code=3).success(lambda code: code in (0, 3))
        assert not _result(code=0).success(lambda code: code == 1)

    def test_throw_or_continue_returns_self(self) -> None:
        result = _result()
        assert result.throw_or_continue() is result

    def test_throw_or_continue_raises_with_code_and_signal(self) -> None:
        result = _result(code=143, sig="SIGTERM")
        with pytest.raises(ProcessFailureError) as exc_info:
            result.throw_or_continue()
        assert exc_info.value.code == 143
        assert exc_info.value.signal == "SIGTERM"
        assert "143" in str(exc_info.value)

    def test_throw_or_continue_with_predicate(self) -> None:
        result = _result(code=1)
        assert result.throw_or_continue(lambda code: code == 1) is result


class TestExitStatus:
    def test_normal_exit(self) -> None:
        assert exit_status(2) == (2, None)

    def test_signal_exit(self) -> None:
        assert exit_status(-signal.SIGTERM) == (128 + signal.SIGTERM, "SIGTERM")

    def test_unknown_signal_number(self) -> None:
        assert exit_status(-200) == (328, "200")

    def test_from_returncode_handles_missing_buffers(self) -> None:
        result = ProcessResult.from_returncode(StartInfo(file="x"), 0, None, None)
        assert result.stdout == b""
        assert result.stderr == b""
