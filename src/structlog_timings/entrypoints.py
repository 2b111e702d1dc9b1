"""Entry points for timed operations.

``begin``, ``time`` and ``at`` write to the default structlog logger;
``begin_operation``, ``time_operation`` and ``operation_at`` take the
logger explicitly. All of them are stateless and safe to call from
concurrent threads; each call produces its own Operation.

Example:
    with time_operation(logger, "Indexing {Path}", path):
        index(path)

    with begin_operation(logger, "Adding {Count} integers", count) as op:
        total = sum(range(count))
        op.complete("Sum", total)
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

from structlog_timings.application.levelled_operation import (
    LevelArgument,
    LevelledOperation,
)
from structlog_timings.application.levelled_operation import (
    operation_at as _operation_at,
)
from structlog_timings.application.operation import Operation
from structlog_timings.dependencies import (
    as_timing_logger,
    get_ambient_context,
    get_clock,
    get_default_logger,
)
from structlog_timings.domain.value_objects import CompletionBehaviour
from structlog_timings.infrastructure.settings import get_settings


def _create(
    logger: Any,
    behaviour: CompletionBehaviour,
    message_template: str,
    args: tuple[Any, ...],
) -> Operation:
    settings = get_settings()
    return Operation(
        as_timing_logger(logger),
        message_template,
        args,
        behaviour,
        settings.completion_level,
        settings.abandonment_level,
        clock=get_clock(),
        context=get_ambient_context(),
        warning_threshold=settings.warning_threshold,
    )


def begin_operation(logger: Any, message_template: str, *args: Any) -> Operation:
    """Begin a timed operation on ``logger``.

    The result must be completed with ``Operation.complete()``, or disposed
    of to record abandonment.

    Args:
        logger: A structlog logger, or any TimingLogger.
        message_template: Message describing the operation, in message
            template format.
        *args: Values for the template's holes. They are captured only when
            the operation ends, so avoid passing values that are mutated
            meanwhile.
    """
    return _create(logger, CompletionBehaviour.ABANDON, message_template, args)


def time_operation(logger: Any, message_template: str, *args: Any) -> Operation:
    """Begin a timed operation on ``logger`` that completes when disposed of."""
    return _create(logger, CompletionBehaviour.COMPLETE, message_template, args)


def operation_at(
    logger: Any,
    completion: LevelArgument,
    abandonment: LevelArgument | None = None,
    warning_threshold: timedelta | None = None,
) -> LevelledOperation:
    """Configure the levels used for completion and abandonment events.

    If neither level is enabled on ``logger`` at the time of the call, a
    shared no-op result is returned.
    """
    if warning_threshold is None:
        warning_threshold = get_settings().warning_threshold
    return _operation_at(
        as_timing_logger(logger),
        completion,
        abandonment,
        warning_threshold,
        clock=get_clock(),
        context=get_ambient_context(),
    )


def begin(message_template: str, *args: Any) -> Operation:
    """Begin a timed operation on the default logger; see ``begin_operation``."""
    return begin_operation(get_default_logger(), message_template, *args)


def time(message_template: str, *args: Any) -> Operation:
    """Begin a timed operation on the default logger that completes when disposed of."""
    return time_operation(get_default_logger(), message_template, *args)


def at(
    completion: LevelArgument,
    abandonment: LevelArgument | None = None,
    warning_threshold: timedelta | None = None,
) -> LevelledOperation:
    """Configure completion and abandonment levels on the default logger."""
    return operation_at(get_default_logger(), completion, abandonment, warning_threshold)
