"""Structlog configuration for applications recording timings.

Configures structlog with colored console output for development
and JSON output for production. Context variables are merged into every
event, so events written during an operation carry its OperationId.
"""

import os
import sys

import structlog

from structlog_timings.infrastructure.settings import TimingsSettings, get_settings


def _use_colors(settings: TimingsSettings) -> bool:
    if settings.log_format != "auto":
        return settings.log_format == "console"
    # FORCE_COLOR=1 enables colors even in non-TTY environments (like Docker)
    force_color = os.environ.get("FORCE_COLOR", "").lower() in ("1", "true", "yes")
    return force_color or sys.stdout.isatty()


def build_processors(settings: TimingsSettings) -> list[structlog.types.Processor]:
    """Build the processor chain for the configured log format."""
    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if _use_colors(settings):
        return [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]
    return [
        *shared_processors,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def configure_logging(settings: TimingsSettings | None = None) -> None:
    """Configure structlog with appropriate processors.

    Uses colored console output for development (when FORCE_COLOR is set,
    running in a TTY, or TIMINGS_LOG_FORMAT=console), otherwise JSON output.
    Events below ``settings.log_level`` are filtered out, which also lets
    ``operation_at`` skip operations at disabled levels.
    """
    settings = settings or get_settings()

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.make_filtering_bound_logger(int(settings.log_level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
