"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import time
from collections.abc import Generator

import pytest
from structlog.testing import capture_logs

from rollctl.services.result import ServiceResult
from rollctl.services.telemetry import (
    Span,
    _current_span,
    disable_telemetry,
    enable_telemetry,
    telemetry_enabled,
    trace_span,
    traced,
)


@pytest.fixture(autouse=True)
def _reset_telemetry_state() -> Generator[None]:
    """Ensure clean telemetry state for every test."""
    yield
    disable_telemetry()
    _current_span.set(None)


# ── Span unit tests ──────────────────────────────────────────────────


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="test").duration_ms == 0.0

    def test_duration_after_end(self) -> None:
        span = Span(name="test")
        time.sleep(0.002)
        span.end()
        assert span.duration_ms > 0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert set(d) == {"name", "duration_ms"}

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="child")
        child.annotate("candidates", 3)
        child.end()
        root.children.append(child)
        root.end()
        d = root.to_dict()
        assert d["children"][0]["name"] == "child"
        assert d["children"][0]["annotations"] == {"candidates": 3}


# ── trace_span ───────────────────────────────────────────────────────


class TestTraceSpan:
    def test_yields_none_when_disabled(self) -> None:
        with trace_span("x") as span:
            assert span is None

    def test_yields_none_without_parent(self) -> None:
        enable_telemetry()
        with trace_span("x") as span:
            assert span is None

    def test_attaches_to_parent(self) -> None:
        enable_telemetry()
        parent = Span(name="parent")
        token = _current_span.set(parent)
        try:
            with trace_span("child") as span:
                assert span is not None
            assert parent.children == [span]
            assert span.end_time is not None
        finally:
            _current_span.reset(token)


# ── @traced ──────────────────────────────────────────────────────────


@traced
def _ok_op() -> ServiceResult:
    with trace_span("stage"):
        pass
    return ServiceResult(ok=True, op="probe", meta={"count": 1})


@traced
def _plain() -> int:
    return 7


class TestTraced:
    def test_disabled_passthrough(self) -> None:
        result = _ok_op()
        assert result.meta == {"count": 1}

    def test_enabled_merges_meta(self) -> None:
        enable_telemetry()
        result = _ok_op()
        assert result.meta is not None
        assert result.meta["count"] == 1
        assert result.meta["telemetry"]["children"][0]["name"] == "stage"

    def test_non_result_return(self) -> None:
        enable_telemetry()
        assert _plain() == 7

    def test_logs_span_completion(self) -> None:
        enable_telemetry()
        with capture_logs() as logs:
            _ok_op()
        events = [e for e in logs if e["event"] == "span.complete"]
        assert len(events) == 1
        assert events[0]["ok"] is True
        assert events[0]["children"] == 1

    def test_span_reset_after_call(self) -> None:
        enable_telemetry()
        _ok_op()
        assert _current_span.get() is None


class TestToggle:
    def test_enable_disable(self) -> None:
        assert not telemetry_enabled()
        enable_telemetry()
        assert telemetry_enabled()
        disable_telemetry()
        assert not telemetry_enabled()
