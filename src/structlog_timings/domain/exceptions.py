"""Exceptions for timed operations."""


class TimingsError(Exception):
    """Base class for errors raised by structlog_timings."""


class OperationConfigurationError(TimingsError, ValueError):
    """Raised when an operation is constructed or enriched with missing arguments."""

    def __init__(self, message: str, argument: str | None = None):
        super().__init__(message)
        self.argument = argument
