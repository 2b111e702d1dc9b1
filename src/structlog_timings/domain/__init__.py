"""Domain layer: levels, outcomes, level policy and message templates."""

from structlog_timings.domain.exceptions import (
    OperationConfigurationError,
    TimingsError,
)
from structlog_timings.domain.level_policy import (
    escalate,
    is_observable,
    resolve_level,
    select_level,
)
from structlog_timings.domain.message_template import MessageTemplate, capture_value
from structlog_timings.domain.value_objects import (
    CompletionBehaviour,
    ComputedLevel,
    EventProperty,
    FixedLevel,
    LevelSelector,
    LevelSpec,
    LogLevel,
    Outcome,
    as_level_spec,
)

__all__ = [
    "CompletionBehaviour",
    "ComputedLevel",
    "EventProperty",
    "FixedLevel",
    "LevelSelector",
    "LevelSpec",
    "LogLevel",
    "MessageTemplate",
    "OperationConfigurationError",
    "Outcome",
    "TimingsError",
    "as_level_spec",
    "capture_value",
    "escalate",
    "is_observable",
    "resolve_level",
    "select_level",
]
