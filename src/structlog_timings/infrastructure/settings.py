"""Timing settings using pydantic-settings.

Settings are loaded from environment variables with defaults suited to
most applications: completions at INFO, abandonments at WARNING.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from structlog_timings.domain.value_objects import LogLevel


class TimingsSettings(BaseSettings):
    """Settings for timed operations and logging bootstrap.

    Environment variables:
        TIMINGS_COMPLETION_LEVEL: Level of completion events (default: info)
        TIMINGS_ABANDONMENT_LEVEL: Level of abandonment events (default: warning)
        TIMINGS_WARNING_THRESHOLD_MS: Default warning threshold in
            milliseconds (default: unset)
        TIMINGS_PROPAGATE_OPERATION_ID: Push OperationId onto the structlog
            context variables while an operation runs (default: true)
        TIMINGS_LOG_LEVEL: Minimum level emitted by configure_logging (default: info)
        TIMINGS_LOG_FORMAT: auto, console or json (default: auto)
    """

    model_config = SettingsConfigDict(
        env_prefix="TIMINGS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    completion_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Level of completion events",
    )
    abandonment_level: LogLevel = Field(
        default=LogLevel.WARNING,
        description="Level of abandonment events",
    )
    warning_threshold_ms: float | None = Field(
        default=None,
        description="Duration after which events are escalated to warning",
        gt=0,
    )
    propagate_operation_id: bool = Field(
        default=True,
        description="Bind OperationId into structlog context variables",
    )
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Minimum level emitted by configure_logging",
    )
    log_format: Literal["auto", "console", "json"] = Field(
        default="auto",
        description="Renderer used by configure_logging",
    )

    @field_validator("completion_level", "abandonment_level", "log_level", mode="before")
    @classmethod
    def parse_level(cls, value: object) -> LogLevel:
        """Accept level names as well as numeric levels."""
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value)
        return LogLevel.parse(value)  # type: ignore[arg-type]

    @property
    def warning_threshold(self) -> timedelta | None:
        """Default warning threshold as a timedelta."""
        if self.warning_threshold_ms is None:
            return None
        return timedelta(milliseconds=self.warning_threshold_ms)


@lru_cache
def get_settings() -> TimingsSettings:
    """Get cached timing settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return TimingsSettings()
