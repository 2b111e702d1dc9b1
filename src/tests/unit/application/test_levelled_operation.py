"""Unit tests for LevelledOperation and operation_at."""

from datetime import timedelta
from unittest.mock import MagicMock

import pytest

from structlog_timings.application.levelled_operation import (
    LevelledOperation,
    operation_at,
)
from structlog_timings.domain.exceptions import OperationConfigurationError
from structlog_timings.domain.value_objects import CompletionBehaviour, LogLevel


class TestOperationAt:
    """Tests for the level policy deciding between real and no-op factories."""

    def test_custom_completion_levels_are_applied(self, collecting_logger, fake_clock):
        """time at ERROR completes at ERROR."""
        op = operation_at(
            collecting_logger.timing_logger, LogLevel.ERROR, clock=fake_clock
        ).time("Test")
        op.dispose()
        assert collecting_logger.single_event()["log_level"] == "error"

    def test_abandonment_defaults_to_completion_level(self, collecting_logger, fake_clock):
        """Without an abandonment level, abandonment uses the completion level."""
        op = operation_at(
            collecting_logger.timing_logger, LogLevel.ERROR, clock=fake_clock
        ).begin("Test")
        op.dispose()
        assert collecting_logger.single_event()["log_level"] == "error"

    def test_custom_abandonment_levels_are_applied(self, collecting_logger, fake_clock):
        """An explicit abandonment level is used on disposal."""
        op = operation_at(
            collecting_logger.timing_logger,
            LogLevel.ERROR,
            LogLevel.CRITICAL,
            clock=fake_clock,
        ).begin("Test")
        op.dispose()
        assert collecting_logger.single_event()["log_level"] == "critical"

    def test_level_names_are_accepted(self, collecting_logger, fake_clock):
        """Levels may be given by name."""
        op = operation_at(
            collecting_logger.timing_logger, "debug", "fatal", clock=fake_clock
        ).begin("Test")
        op.complete()
        assert collecting_logger.single_event()["log_level"] == "debug"

    def test_if_neither_level_is_enabled_a_cached_result_is_returned(
        self, info_logger, fake_clock
    ):
        """Disabled levels yield the same shared operation every time."""
        op = operation_at(info_logger.timing_logger, LogLevel.DEBUG, clock=fake_clock).time(
            "Test"
        )
        op2 = operation_at(info_logger.timing_logger, LogLevel.DEBUG, clock=fake_clock).time(
            "Test"
        )
        assert op is op2
        assert operation_at(
            info_logger.timing_logger, LogLevel.DEBUG, clock=fake_clock
        ) is LevelledOperation.NONE

    def test_enabled_levels_return_distinct_operations(self, info_logger, fake_clock):
        """Enabled levels yield a fresh operation per call."""
        first = operation_at(info_logger.timing_logger, LogLevel.INFO, clock=fake_clock)
        second = operation_at(info_logger.timing_logger, LogLevel.INFO, clock=fake_clock)
        assert first is not second
        assert first.begin("Test") is not first.begin("Test")

    def test_enabled_abandonment_level_returns_real_factory(self, info_logger, fake_clock):
        """An enabled abandonment level is enough for a real factory."""
        levelled = operation_at(
            info_logger.timing_logger, LogLevel.DEBUG, LogLevel.WARNING, clock=fake_clock
        )
        assert levelled is not LevelledOperation.NONE

        levelled.begin("Test").dispose()
        assert info_logger.single_event()["log_level"] == "warning"

    def test_computed_level_always_returns_real_factory(self, info_logger, fake_clock):
        """A computed level cannot be checked up front, so timing happens."""
        levelled = operation_at(
            info_logger.timing_logger, lambda elapsed: LogLevel.ERROR, clock=fake_clock
        )
        assert levelled is not LevelledOperation.NONE

        levelled.time("Test").dispose()
        assert info_logger.single_event()["log_level"] == "error"

    def test_warning_threshold_is_propagated(self, collecting_logger, fake_clock):
        """The factory's warning threshold applies to every operation it creates."""
        op = operation_at(
            collecting_logger.timing_logger,
            LogLevel.DEBUG,
            warning_threshold=timedelta(milliseconds=250),
            clock=fake_clock,
        ).time("Test")
        fake_clock.advance(timedelta(milliseconds=500))
        op.dispose()
        assert collecting_logger.single_event()["log_level"] == "warning"

    def test_context_is_propagated(self, collecting_logger, fake_clock):
        """Operations from the factory push onto the configured context."""
        context = MagicMock()
        op = operation_at(
            collecting_logger.timing_logger, LogLevel.INFO, clock=fake_clock, context=context
        ).begin("Test")
        context.push.assert_called_once_with("OperationId", op.operation_id)

    def test_missing_target_raises(self, fake_clock):
        """A None target is a configuration error."""
        with pytest.raises(OperationConfigurationError):
            operation_at(None, LogLevel.INFO, clock=fake_clock)

    def test_missing_clock_raises_on_begin(self, collecting_logger, fake_clock):
        """A factory that lost its clock raises instead of building an operation."""
        levelled = operation_at(collecting_logger.timing_logger, LogLevel.INFO, clock=fake_clock)
        levelled._clock = None

        with pytest.raises(OperationConfigurationError) as exc_info:
            levelled.begin("Test")
        assert exc_info.value.argument == "clock"

    def test_begin_and_time_set_completion_behaviour(self, collecting_logger, fake_clock):
        """begin abandons on disposal; time completes on disposal."""
        levelled = operation_at(collecting_logger.timing_logger, LogLevel.INFO, clock=fake_clock)
        assert levelled.begin("Test").completion_behaviour is CompletionBehaviour.ABANDON
        assert levelled.time("Test").completion_behaviour is CompletionBehaviour.COMPLETE


class TestNoneOperation:
    """Tests for the shared silent operation."""

    def test_none_operation_never_writes(self):
        """Every finalizing call on the shared operation is a no-op."""
        op = LevelledOperation.NONE.begin("Test {Value}", 1)
        assert op.completion_behaviour is CompletionBehaviour.SILENT
        op.enrich_with("Value", 1).with_warning_threshold(timedelta(0))
        op.complete()
        op.abandon()
        op.dispose()
        assert LevelledOperation.NONE.is_noop

    def test_none_operation_elapsed_is_frozen_at_zero(self):
        """The shared operation does not time anything."""
        assert LevelledOperation.NONE.time("Test").elapsed == timedelta(0)

    def test_begin_and_time_share_the_instance(self):
        """begin and time hand out the same pre-built operation."""
        assert LevelledOperation.NONE.begin("A") is LevelledOperation.NONE.time("B")
