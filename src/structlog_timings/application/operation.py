"""Timed operations.

An Operation measures one logical unit of work and writes exactly one
structured event when it finishes: "completed" when the caller says so,
"abandoned" when it is disposed of without completion, and nothing at all
once cancelled.

Example:
    with begin_operation(logger, "Adding {Count} successive integers", count) as op:
        total = sum(range(count))
        op.complete("Sum", total)

Instances are meant for a single owner on a single thread; no locking is
done here.
"""

from __future__ import annotations

import uuid
from datetime import timedelta
from types import TracebackType
from typing import Any, Iterable

from structlog_timings.domain.exceptions import OperationConfigurationError
from structlog_timings.domain.level_policy import select_level
from structlog_timings.domain.value_objects import (
    CompletionBehaviour,
    EventProperty,
    LevelSpec,
    LogLevel,
    Outcome,
    as_level_spec,
)
from structlog_timings.ports.backend import Enricher, TimingLogger
from structlog_timings.ports.clock import Clock
from structlog_timings.ports.context import AmbientContext, ContextHandle

_NANOSECONDS_PER_MICROSECOND = 1_000


class Operation:
    """Records the timing of one operation to a structured log."""

    def __init__(
        self,
        target: TimingLogger,
        message_template: str,
        args: tuple[Any, ...],
        completion_behaviour: CompletionBehaviour,
        completion_level: LevelSpec | LogLevel | str,
        abandonment_level: LevelSpec | LogLevel | str,
        *,
        clock: Clock,
        context: AmbientContext | None = None,
        warning_threshold: timedelta | None = None,
        operation_id: str | None = None,
    ):
        if target is None:
            raise OperationConfigurationError("target must not be None", "target")
        if message_template is None:
            raise OperationConfigurationError(
                "message_template must not be None", "message_template"
            )
        if args is None:
            raise OperationConfigurationError("args must not be None", "args")

        self._target = target
        self._message_template = message_template
        self._args = tuple(args)
        self._completion_behaviour = completion_behaviour
        self._completion_level = as_level_spec(completion_level)
        self._abandonment_level = as_level_spec(abandonment_level)
        self._warning_threshold = warning_threshold
        self._exception: BaseException | None = None
        self._clock = clock
        self._operation_id = operation_id or str(uuid.uuid4())

        self._pop_context: ContextHandle | None = None
        if context is not None:
            self._pop_context = context.push(
                EventProperty.OPERATION_ID.value, self._operation_id
            )

        self._start = clock.now()
        self._stop: int | None = None

    def __enter__(self) -> Operation:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.dispose()

    @property
    def operation_id(self) -> str:
        """Correlation identifier pushed onto the ambient context."""
        return self._operation_id

    @property
    def completion_behaviour(self) -> CompletionBehaviour:
        return self._completion_behaviour

    @property
    def elapsed(self) -> timedelta:
        """Time since the operation began, frozen once it is finalized."""
        stop = self._stop if self._stop is not None else self._clock.now()
        elapsed_ns = stop - self._start
        if elapsed_ns < 0:
            return timedelta(0)
        return timedelta(microseconds=elapsed_ns / _NANOSECONDS_PER_MICROSECOND)

    def complete(
        self,
        result_property_name: str | None = None,
        result: Any = None,
        destructure_objects: bool = False,
    ) -> None:
        """Complete the operation, writing the event and elapsed time.

        Args:
            result_property_name: Optional name of a result property to
                attach to the event.
            result: The result value.
            destructure_objects: Record the result as structured data
                rather than as a scalar.
        """
        if self._completion_behaviour is CompletionBehaviour.SILENT:
            return

        target = self._target
        if result_property_name is not None:
            target = target.for_context(result_property_name, result, destructure_objects)
        self._write(target, self._completion_level, Outcome.COMPLETED)

    def abandon(
        self,
        result_property_name: str | None = None,
        result: Any = None,
        destructure_objects: bool = False,
    ) -> None:
        """Abandon the operation, writing the event and elapsed time."""
        if self._completion_behaviour is CompletionBehaviour.SILENT:
            return

        target = self._target
        if result_property_name is not None:
            target = target.for_context(result_property_name, result, destructure_objects)
        self._write(target, self._abandonment_level, Outcome.ABANDONED)

    def abandon_with_exception(self, exception: BaseException) -> None:
        """Abandon the operation, attaching the exception to the event."""
        self.set_exception(exception).abandon()

    def cancel(self) -> None:
        """Cancel the operation.

        No event is written afterwards, whether through completion,
        abandonment or disposal.
        """
        self._stop_timing()
        self._completion_behaviour = CompletionBehaviour.SILENT
        self._release_context()

    def dispose(self) -> None:
        """Finish the operation at the end of its scope.

        Operations started with ``time`` are completed; operations started
        with ``begin`` that were not completed are recorded as abandoned.
        """
        try:
            if self._completion_behaviour is CompletionBehaviour.ABANDON:
                self._write(self._target, self._abandonment_level, Outcome.ABANDONED)
            elif self._completion_behaviour is CompletionBehaviour.COMPLETE:
                self._write(self._target, self._completion_level, Outcome.COMPLETED)
        finally:
            self._release_context()

    def set_exception(self, exception: BaseException) -> Operation:
        """Attach an exception to the event written when the operation ends."""
        if self._completion_behaviour is not CompletionBehaviour.SILENT:
            self._exception = exception
        return self

    def enrich_with(
        self,
        enrichment: str | Enricher | Iterable[Enricher],
        value: Any = None,
        destructure_objects: bool = False,
    ) -> Operation:
        """Add a property or enrichers to the event written when the operation ends.

        Args:
            enrichment: A property name (with ``value``), a single enricher,
                or an iterable of enrichers.
            value: The property value when ``enrichment`` is a name.
            destructure_objects: Record the value as structured data rather
                than as a scalar.

        Returns:
            The same operation, for chaining.
        """
        if self._completion_behaviour is CompletionBehaviour.SILENT:
            return self

        if isinstance(enrichment, str):
            self._target = self._target.for_context(enrichment, value, destructure_objects)
        elif callable(enrichment):
            self._target = self._target.with_enrichers([enrichment])
        else:
            self._target = self._target.with_enrichers(list(enrichment))
        return self

    def with_warning_threshold(self, warning_threshold: timedelta) -> Operation:
        """Write the event at WARNING or above if the operation takes longer than this."""
        if self._completion_behaviour is not CompletionBehaviour.SILENT:
            self._warning_threshold = warning_threshold
        return self

    def _stop_timing(self) -> None:
        if self._stop is None:
            self._stop = self._clock.now()

    def _release_context(self) -> None:
        if self._pop_context is not None:
            pop_context, self._pop_context = self._pop_context, None
            pop_context.release()

    def _write(self, target: TimingLogger, level_spec: LevelSpec, outcome: Outcome) -> None:
        self._stop_timing()
        self._completion_behaviour = CompletionBehaviour.SILENT

        elapsed = self.elapsed
        level = select_level(level_spec, elapsed, self._warning_threshold)
        elapsed_ms = round(elapsed / timedelta(milliseconds=1), 1)

        try:
            target.write(
                level,
                f"{self._message_template} {{{EventProperty.OUTCOME.value}}} "
                f"in {{{EventProperty.ELAPSED.value}:0.1f}} ms",
                (*self._args, outcome.value, elapsed_ms),
                self._exception,
            )
        finally:
            self._release_context()

    def __repr__(self) -> str:
        return (
            f"Operation(template={self._message_template!r}, "
            f"behaviour={self._completion_behaviour.value}, "
            f"elapsed={self.elapsed})"
        )
