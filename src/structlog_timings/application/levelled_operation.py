"""Operations with non-default completion and abandonment levels."""

from __future__ import annotations

from datetime import timedelta
from typing import Any, ClassVar, Iterable, Sequence

from structlog_timings.application.operation import Operation
from structlog_timings.domain.exceptions import OperationConfigurationError
from structlog_timings.domain.level_policy import is_observable
from structlog_timings.domain.value_objects import (
    CompletionBehaviour,
    LevelSelector,
    LevelSpec,
    LogLevel,
    as_level_spec,
)
from structlog_timings.ports.backend import Enricher, TimingLogger
from structlog_timings.ports.clock import Clock
from structlog_timings.ports.context import AmbientContext

LevelArgument = LevelSpec | LogLevel | int | str | LevelSelector


class _DiscardingLogger:
    """Logger behind the shared no-op operation; it is never written to."""

    def is_enabled(self, level: LogLevel) -> bool:
        return False

    def for_context(
        self, property_name: str, value: Any, destructure_objects: bool = False
    ) -> _DiscardingLogger:
        return self

    def with_enrichers(self, enrichers: Iterable[Enricher]) -> _DiscardingLogger:
        return self

    def write(
        self,
        level: LogLevel,
        message_template: str,
        args: Sequence[Any],
        exception: BaseException | None = None,
    ) -> None:
        return None


class _StoppedClock:
    def now(self) -> int:
        return 0


def _silent_operation() -> Operation:
    operation = Operation(
        _DiscardingLogger(),
        "",
        (),
        CompletionBehaviour.SILENT,
        LogLevel.CRITICAL,
        LogLevel.CRITICAL,
        clock=_StoppedClock(),
    )
    operation.cancel()
    return operation


class LevelledOperation:
    """Launches operations with configured completion and abandonment levels.

    When neither level would be observed by the logger, ``operation_at``
    returns ``LevelledOperation.NONE``, which hands the same silent
    operation to every caller instead of timing anything.
    """

    NONE: ClassVar[LevelledOperation]

    def __init__(
        self,
        target: TimingLogger | None,
        completion: LevelArgument,
        abandonment: LevelArgument | None = None,
        warning_threshold: timedelta | None = None,
        *,
        clock: Clock | None = None,
        context: AmbientContext | None = None,
        cached_result: Operation | None = None,
    ):
        if cached_result is None and target is None:
            raise OperationConfigurationError("target must not be None", "target")
        if cached_result is None and clock is None:
            raise OperationConfigurationError("clock must not be None", "clock")

        self._target = target
        self._completion = as_level_spec(completion)
        self._abandonment = (
            as_level_spec(abandonment) if abandonment is not None else self._completion
        )
        self._warning_threshold = warning_threshold
        self._clock = clock
        self._context = context
        self._cached_result = cached_result

    @property
    def is_noop(self) -> bool:
        return self._cached_result is not None

    def begin(self, message_template: str, *args: Any) -> Operation:
        """Begin a timed operation.

        The result must be completed with ``Operation.complete()``, or
        disposed of to record abandonment.

        Args:
            message_template: Message describing the operation, in message
                template format.
            *args: Values for the template's holes. They are captured only
                when the operation ends, so avoid passing values that are
                mutated meanwhile.
        """
        return self._create(CompletionBehaviour.ABANDON, message_template, args)

    def time(self, message_template: str, *args: Any) -> Operation:
        """Begin a timed operation that is completed when disposed of."""
        return self._create(CompletionBehaviour.COMPLETE, message_template, args)

    def _create(
        self,
        behaviour: CompletionBehaviour,
        message_template: str,
        args: tuple[Any, ...],
    ) -> Operation:
        if self._cached_result is not None:
            return self._cached_result
        if self._target is None:
            raise OperationConfigurationError("target must not be None", "target")
        if self._clock is None:
            raise OperationConfigurationError("clock must not be None", "clock")
        return Operation(
            self._target,
            message_template,
            args,
            behaviour,
            self._completion,
            self._abandonment,
            clock=self._clock,
            context=self._context,
            warning_threshold=self._warning_threshold,
        )


LevelledOperation.NONE = LevelledOperation(
    None,
    LogLevel.CRITICAL,
    cached_result=_silent_operation(),
)


def operation_at(
    target: TimingLogger,
    completion: LevelArgument,
    abandonment: LevelArgument | None = None,
    warning_threshold: timedelta | None = None,
    *,
    clock: Clock,
    context: AmbientContext | None = None,
) -> LevelledOperation:
    """Configure the levels used for completion and abandonment events.

    Args:
        target: Logger the timings are written to.
        completion: Level of the completion event, a level name, or a
            function of the elapsed time returning a level.
        abandonment: Level of the abandonment event; defaults to
            ``completion``.
        warning_threshold: Duration beyond which events are written at
            WARNING or above.

    Returns:
        A factory for operations at the configured levels, or
        ``LevelledOperation.NONE`` when neither level is enabled on the
        target at the time of the call.
    """
    if target is None:
        raise OperationConfigurationError("target must not be None", "target")

    completion_spec = as_level_spec(completion)
    abandonment_spec = (
        as_level_spec(abandonment) if abandonment is not None else completion_spec
    )
    if not is_observable(completion_spec, target.is_enabled) and (
        abandonment_spec == completion_spec
        or not is_observable(abandonment_spec, target.is_enabled)
    ):
        return LevelledOperation.NONE

    return LevelledOperation(
        target,
        completion_spec,
        abandonment_spec,
        warning_threshold,
        clock=clock,
        context=context,
    )
