"""Structured logging backend protocol.

The application layer writes timing events through this protocol so that
operations stay independent of the concrete logging library.
"""

from __future__ import annotations

from typing import Any, Iterable, MutableMapping, Protocol, Sequence, TypeAlias

from structlog_timings.domain.value_objects import LogLevel

EventDict: TypeAlias = MutableMapping[str, Any]


class Enricher(Protocol):
    """Adds properties to an event before it is written.

    Enrichers have the shape of a structlog processor and are only invoked
    when an event is actually written.
    """

    def __call__(
        self, logger: Any, method_name: str, event_dict: EventDict
    ) -> EventDict: ...


class TimingLogger(Protocol):
    """Protocol for the logger that timing events are written to."""

    def is_enabled(self, level: LogLevel) -> bool:
        """Whether an event at this level would currently be observed."""
        ...

    def for_context(
        self,
        property_name: str,
        value: Any,
        destructure_objects: bool = False,
    ) -> TimingLogger:
        """Derive a logger that adds one property to every event.

        The receiver is left unchanged.
        """
        ...

    def with_enrichers(self, enrichers: Iterable[Enricher]) -> TimingLogger:
        """Derive a logger that runs additional enrichers on every event."""
        ...

    def write(
        self,
        level: LogLevel,
        message_template: str,
        args: Sequence[Any],
        exception: BaseException | None = None,
    ) -> None:
        """Write one event."""
        ...
