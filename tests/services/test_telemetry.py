"""Tests for telemetry spans and the @traced decorator."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from assetctl.services.result import TaskResult
from assetctl.services.telemetry import (
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
    traced,
)


@pytest.fixture
def telemetry() -> Iterator[None]:
    enable_telemetry()
    try:
        yield
    finally:
        disable_telemetry()


class Service:
    @traced
    def outer(self) -> TaskResult:
        with trace_span("src/sass/main.scss"):
            pass
        self.inner()
        return TaskResult(ok=True, op="outer")

    @traced
    def inner(self) -> TaskResult:
        return TaskResult(ok=True, op="inner")


class TestTraced:
    def test_disabled_is_noop(self) -> None:
        result = Service().outer()
        assert result.meta is None
        assert get_current_span() is None

    @pytest.mark.usefixtures("telemetry")
    def test_span_tree_injected_at_top_level(self) -> None:
        result = Service().outer()
        assert result.meta is not None
        tree = result.meta["telemetry"]
        assert tree["name"] == "Service.outer"
        assert [c["name"] for c in tree["children"]] == ["src/sass/main.scss", "Service.inner"]
        assert tree["duration_ms"] >= 0

    @pytest.mark.usefixtures("telemetry")
    def test_direct_call_is_top_level(self) -> None:
        result = Service().inner()
        assert result.meta is not None
        assert result.meta["telemetry"]["name"] == "Service.inner"

    @pytest.mark.usefixtures("telemetry")
    def test_exception_propagates(self) -> None:
        @traced
        def broken() -> TaskResult:
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            broken()
        assert get_current_span() is None

    def test_trace_span_without_parent(self) -> None:
        with trace_span("x") as span:
            assert span is None
