"""Domain value objects for timed operations.

These are immutable data structures describing levels, outcomes and the
lifecycle of an operation. They carry no dependency on the logging backend.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum, IntEnum
from typing import Callable, TypeAlias, Union


class LogLevel(IntEnum):
    """Event levels, numerically identical to the stdlib/structlog levels."""

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40
    CRITICAL = 50

    @classmethod
    def parse(cls, value: LogLevel | int | str) -> LogLevel:
        """Coerce a level, a numeric level or a level name into a LogLevel.

        Args:
            value: A LogLevel, one of the numeric stdlib levels, or a
                case-insensitive name such as "info", "warn" or "fatal".

        Returns:
            The matching LogLevel.

        Raises:
            ValueError: If the value does not name a known level.
        """
        if isinstance(value, LogLevel):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid log level: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Invalid log level: {value!r}") from None
        if isinstance(value, str):
            name = value.strip().lower()
            if name in _LEVEL_ALIASES:
                return _LEVEL_ALIASES[name]
        raise ValueError(f"Invalid log level: {value!r}")

    @property
    def method_name(self) -> str:
        """Name of the logger method emitting at this level."""
        return self.name.lower()


_LEVEL_ALIASES: dict[str, LogLevel] = {
    "trace": LogLevel.DEBUG,
    "verbose": LogLevel.DEBUG,
    "debug": LogLevel.DEBUG,
    "info": LogLevel.INFO,
    "information": LogLevel.INFO,
    "warn": LogLevel.WARNING,
    "warning": LogLevel.WARNING,
    "error": LogLevel.ERROR,
    "critical": LogLevel.CRITICAL,
    "fatal": LogLevel.CRITICAL,
}


class CompletionBehaviour(Enum):
    """What disposal does with an operation that was not finalized explicitly."""

    COMPLETE = "complete"
    ABANDON = "abandon"
    SILENT = "silent"


class Outcome(str, Enum):
    """Outcome recorded on the terminal event."""

    COMPLETED = "completed"
    ABANDONED = "abandoned"


class EventProperty(str, Enum):
    """Property names attached to events by operations."""

    ELAPSED = "Elapsed"
    OUTCOME = "Outcome"
    OPERATION_ID = "OperationId"


LevelSelector: TypeAlias = Callable[[timedelta], Union[LogLevel, int, str]]


@dataclass(frozen=True)
class FixedLevel:
    """A level known up front."""

    level: LogLevel


@dataclass(frozen=True)
class ComputedLevel:
    """A level chosen from the elapsed time when the operation finishes.

    Attributes:
        selector: Called once, at finalization, with the frozen elapsed time.
    """

    selector: LevelSelector


LevelSpec: TypeAlias = FixedLevel | ComputedLevel


def as_level_spec(value: LevelSpec | LogLevel | int | str | LevelSelector) -> LevelSpec:
    """Normalize a level, level name, selector or spec into a LevelSpec.

    Raises:
        ValueError: If the value is neither callable nor a known level.
    """
    if isinstance(value, (FixedLevel, ComputedLevel)):
        return value
    if isinstance(value, (int, str)):
        return FixedLevel(LogLevel.parse(value))
    if callable(value):
        return ComputedLevel(value)
    raise ValueError(f"Invalid level specification: {value!r}")
