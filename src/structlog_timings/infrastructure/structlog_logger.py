"""structlog implementation of the TimingLogger protocol."""

from __future__ import annotations

from typing import Any, Iterable, Sequence

import structlog

from structlog_timings.domain.exceptions import OperationConfigurationError
from structlog_timings.domain.message_template import MessageTemplate, capture_value
from structlog_timings.domain.value_objects import LogLevel
from structlog_timings.ports.backend import Enricher, EventDict

MESSAGE_TEMPLATE_KEY = "message_template"

# Names taken by ``log()``'s own parameters or by keys this adapter and
# structlog's processors write. Properties with these names get a "_" prefix.
RESERVED_KEYS = frozenset({"event", "level", "exc_info", MESSAGE_TEMPLATE_KEY})


def _escape_reserved(properties: EventDict, taken: Iterable[str] = ()) -> EventDict:
    used = set(taken)
    escaped: EventDict = {}
    for name, value in properties.items():
        while name in RESERVED_KEYS or name in escaped or name in used:
            name = f"_{name}"
        escaped[name] = value
    return escaped


class StructlogTimingLogger:
    """Writes timing events through a structlog bound logger.

    The event text is the rendered message template; the template itself
    and each of its properties are added as event keys, so events stay
    queryable by template and by property.

    Supports any structlog logger: filtering bound loggers, stdlib-backed
    bound loggers, and lazy proxies returned by ``structlog.get_logger()``.
    """

    def __init__(
        self,
        logger: Any | None = None,
        enrichers: Sequence[Enricher] = (),
    ):
        self._logger = logger if logger is not None else structlog.get_logger()
        self._enrichers = tuple(enrichers)

    @property
    def logger(self) -> Any:
        return self._logger

    def is_enabled(self, level: LogLevel) -> bool:
        """Whether the wrapped logger would emit an event at this level.

        Loggers that cannot report their level are assumed to emit
        everything.
        """
        check = getattr(self._logger, "is_enabled_for", None)
        if check is None:
            check = getattr(self._logger, "isEnabledFor", None)
        if check is None:
            return True
        return bool(check(int(level)))

    def for_context(
        self,
        property_name: str,
        value: Any,
        destructure_objects: bool = False,
    ) -> StructlogTimingLogger:
        if not property_name:
            raise OperationConfigurationError(
                "property_name must not be empty", "property_name"
            )
        bound = self._logger.bind(
            **{property_name: capture_value(value, destructure_objects)}
        )
        return StructlogTimingLogger(bound, self._enrichers)

    def with_enrichers(self, enrichers: Iterable[Enricher]) -> StructlogTimingLogger:
        return StructlogTimingLogger(self._logger, (*self._enrichers, *enrichers))

    def write(
        self,
        level: LogLevel,
        message_template: str,
        args: Sequence[Any],
        exception: BaseException | None = None,
    ) -> None:
        template = MessageTemplate.parse(message_template)
        properties = template.bind(args)
        event = template.render(properties)

        event_dict: EventDict = {
            MESSAGE_TEMPLATE_KEY: message_template,
            **_escape_reserved(properties),
        }
        for enricher in self._enrichers:
            event_dict = enricher(self._logger, level.method_name, event_dict)
        # Enrichers may still add keys that collide with log()'s parameters.
        clashing = {
            name: event_dict.pop(name) for name in ("event", "level") if name in event_dict
        }
        event_dict.update(_escape_reserved(clashing, event_dict))
        if exception is not None:
            event_dict["exc_info"] = exception

        self._logger.log(int(level), event, **event_dict)
