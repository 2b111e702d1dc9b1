"""Dependency wiring for timed operations.

Composes infrastructure adapters (structlog logger, context variables,
monotonic clock, settings) into the collaborators the application layer
expects.
"""

from functools import lru_cache
from typing import Any

import structlog

from structlog_timings.domain.exceptions import OperationConfigurationError
from structlog_timings.infrastructure.clock import MonotonicClock
from structlog_timings.infrastructure.log_context import ContextVarsAmbientContext
from structlog_timings.infrastructure.settings import get_settings
from structlog_timings.infrastructure.structlog_logger import StructlogTimingLogger
from structlog_timings.ports.backend import TimingLogger
from structlog_timings.ports.clock import Clock
from structlog_timings.ports.context import AmbientContext

DEFAULT_LOGGER_NAME = "structlog_timings"


def get_default_logger() -> TimingLogger:
    """Get a timing logger over ``structlog.get_logger()``.

    A lazy proxy is used, so structlog configuration done after import
    still applies.
    """
    return StructlogTimingLogger(structlog.get_logger(DEFAULT_LOGGER_NAME))


def as_timing_logger(logger: Any) -> TimingLogger:
    """Adapt a structlog logger; TimingLogger implementations pass through.

    Raises:
        OperationConfigurationError: If logger is None.
    """
    if logger is None:
        raise OperationConfigurationError("logger must not be None", "logger")
    if all(hasattr(logger, name) for name in ("is_enabled", "for_context", "write")):
        return logger
    return StructlogTimingLogger(logger)


@lru_cache
def get_clock() -> Clock:
    """Get the process-wide monotonic clock."""
    return MonotonicClock()


@lru_cache
def _contextvars_ambient_context() -> ContextVarsAmbientContext:
    return ContextVarsAmbientContext()


def get_ambient_context() -> AmbientContext | None:
    """Get the ambient context operations push their OperationId onto.

    Returns None when TIMINGS_PROPAGATE_OPERATION_ID is disabled.
    """
    if not get_settings().propagate_operation_id:
        return None
    return _contextvars_ambient_context()
