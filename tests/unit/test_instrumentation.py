from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from proctools import instrumentation

if TYPE_CHECKING:
    from collections.abc import Iterator

pytestmark = pytest.mark.unit


@pytest.fixture
def enabled() -> Iterator[None]:
    previous = instrumentation.is_enabled()
    instrumentation.configure(enabled=True)
    instrumentation.reset()
    try:
        yield
    finally:
        instrumentation.configure(enabled=previous)
        instrumentation.reset()


def test_disabled_records_nothing() -> None:
    previous = instrumentation.is_enabled()
    instrumentation.configure(enabled=False)
    try:
        instrumentation.increment_counter("x")
        instrumentation.record_timing("t", 5.0)
        with instrumentation.timed_operation("block"):
            pass
        state = instrumentation.snapshot()
    finally:
        instrumentation.configure(enabled=previous)

    assert state["enabled"] is False
    assert state["counters"] == {}
    assert state["timings"] == {}


@pytest.mark.usefixtures("enabled")
def test_counters_accumulate() -> None:
    instrumentation.increment_counter("which.scans")
    instrumentation.increment_counter("which.scans", 2)

    assert instrumentation.snapshot()["counters"] == {"which.scans": 3}


@pytest.mark.usefixtures("enabled")
def test_timings_aggregate() -> None:
    instrumentation.record_timing("op", 10.0)
    instrumentation.record_timing("op", 30.0)

    timing = instrumentation.snapshot()["timings"]["op"]
    assert timing == {"count": 2, "total_ms": 40.0, "avg_ms": 20.0, "max_ms": 30.0}


@pytest.mark.usefixtures("enabled")
def test_timed_operation_records_on_error() -> None:
    with pytest.raises(RuntimeError), instrumentation.timed_operation("failing"):
        raise RuntimeError("boom")

    assert instrumentation.snapshot()["timings"]["failing"]["count"] == 1


@pytest.mark.usefixtures("enabled")
def test_reset_clears_state() -> None:
    instrumentation.increment_counter("c")
    instrumentation.reset()
    assert instrumentation.snapshot()["counters"] == {}
