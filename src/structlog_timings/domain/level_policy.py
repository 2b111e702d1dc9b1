"""Level selection rules applied when an operation is finalized."""

from __future__ import annotations

from datetime import timedelta
from typing import Callable

from structlog_timings.domain.value_objects import (
    ComputedLevel,
    FixedLevel,
    LevelSpec,
    LogLevel,
)


def resolve_level(spec: LevelSpec, elapsed: timedelta) -> LogLevel:
    """Evaluate a level specification against the elapsed time."""
    if isinstance(spec, FixedLevel):
        return spec.level
    return LogLevel.parse(spec.selector(elapsed))


def escalate(
    level: LogLevel,
    elapsed: timedelta,
    warning_threshold: timedelta | None,
) -> LogLevel:
    """Raise a level to WARNING when the operation ran past its threshold.

    Levels already at or above WARNING are returned unchanged, so an
    explicitly configured ERROR or CRITICAL is never lowered.
    """
    if warning_threshold is None:
        return level
    if elapsed > warning_threshold and level < LogLevel.WARNING:
        return LogLevel.WARNING
    return level


def select_level(
    spec: LevelSpec,
    elapsed: timedelta,
    warning_threshold: timedelta | None = None,
) -> LogLevel:
    """Resolve a level specification, then apply threshold escalation."""
    return escalate(resolve_level(spec, elapsed), elapsed, warning_threshold)


def is_observable(spec: LevelSpec, is_enabled: Callable[[LogLevel], bool]) -> bool:
    """Whether an event at this level could be seen by the backend.

    A computed level is only known at finalization, so it always counts
    as observable.
    """
    if isinstance(spec, ComputedLevel):
        return True
    return is_enabled(spec.level)
