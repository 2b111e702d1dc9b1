"""Infrastructure adapters: structlog, context variables, clock and settings."""

from structlog_timings.infrastructure.clock import MonotonicClock
from structlog_timings.infrastructure.log_context import (
    ContextVarsAmbientContext,
    ContextVarsHandle,
)
from structlog_timings.infrastructure.logging import configure_logging
from structlog_timings.infrastructure.settings import TimingsSettings, get_settings
from structlog_timings.infrastructure.structlog_logger import StructlogTimingLogger

__all__ = [
    "ContextVarsAmbientContext",
    "ContextVarsHandle",
    "MonotonicClock",
    "StructlogTimingLogger",
    "TimingsSettings",
    "configure_logging",
    "get_settings",
]
