"""Unit test fixtures: a collecting structlog logger and a controllable clock."""

from datetime import timedelta
from typing import Any

import pytest
import structlog
from structlog.testing import LogCapture

from structlog_timings.domain.value_objects import LogLevel
from structlog_timings.infrastructure.log_context import ContextVarsAmbientContext
from structlog_timings.infrastructure.structlog_logger import StructlogTimingLogger


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: int = 1_000_000_000):
        self.value = start

    def now(self) -> int:
        return self.value

    def advance(self, delta: timedelta) -> None:
        self.value += int(delta.total_seconds() * 1_000_000_000)


class CollectingLogger:
    """structlog logger whose events are captured instead of rendered."""

    def __init__(self, level: LogLevel = LogLevel.DEBUG):
        self.capture = LogCapture()
        self.logger = structlog.wrap_logger(
            structlog.ReturnLogger(),
            processors=[structlog.contextvars.merge_contextvars, self.capture],
            wrapper_class=structlog.make_filtering_bound_logger(int(level)),
            context_class=dict,
        )
        self.timing_logger = StructlogTimingLogger(self.logger)

    @property
    def events(self) -> list[dict[str, Any]]:
        return self.capture.entries

    def single_event(self) -> dict[str, Any]:
        assert len(self.events) == 1, f"expected one event, got {self.events}"
        return self.events[0]


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock advanced explicitly by the test."""
    return FakeClock()


@pytest.fixture
def collecting_logger() -> CollectingLogger:
    """Provide a logger that captures every event at DEBUG and above."""
    return CollectingLogger()


@pytest.fixture
def info_logger() -> CollectingLogger:
    """Provide a logger that filters out DEBUG events."""
    return CollectingLogger(level=LogLevel.INFO)


@pytest.fixture
def ambient_context():
    """Provide the contextvars-backed ambient context, cleared afterwards."""
    structlog.contextvars.clear_contextvars()
    yield ContextVarsAmbientContext()
    structlog.contextvars.clear_contextvars()
