"""Timed operations for structlog.

Measure a unit of work and write exactly one structured event describing
its outcome, with the elapsed time and caller context as event fields.

Example:
    import structlog
    from structlog_timings import begin_operation, configure_logging

    configure_logging()
    log = structlog.get_logger()

    with begin_operation(log, "Adding {Count} successive integers", count) as op:
        total = sum(range(count))
        op.complete("Sum", total)
"""

from structlog_timings.application import LevelledOperation, Operation
from structlog_timings.domain import (
    CompletionBehaviour,
    ComputedLevel,
    EventProperty,
    FixedLevel,
    LogLevel,
    OperationConfigurationError,
    Outcome,
    TimingsError,
)
from structlog_timings.entrypoints import (
    at,
    begin,
    begin_operation,
    operation_at,
    time,
    time_operation,
)
from structlog_timings.infrastructure import (
    StructlogTimingLogger,
    TimingsSettings,
    configure_logging,
    get_settings,
)

__all__ = [
    "CompletionBehaviour",
    "ComputedLevel",
    "EventProperty",
    "FixedLevel",
    "LevelledOperation",
    "LogLevel",
    "Operation",
    "OperationConfigurationError",
    "Outcome",
    "StructlogTimingLogger",
    "TimingsError",
    "TimingsSettings",
    "at",
    "begin",
    "begin_operation",
    "configure_logging",
    "get_settings",
    "operation_at",
    "time",
    "time_operation",
]
