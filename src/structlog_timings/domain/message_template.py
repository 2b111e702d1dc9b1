"""Message templates with named holes.

A message template describes an event in text while naming the values it
carries, e.g. ``"Adding {Count} successive integers"``. The same template
produces both the rendered event text and the structured properties, so
events of one kind stay queryable by template regardless of their values.

Hole syntax:
    {Name}          property bound to the next positional argument
    {@Name}         the value is destructured into plain data
    {$Name}         the value is stringified
    {Name:spec}     rendered with a Python format spec
    {0}             property bound to the argument at that index
    {{ and }}       literal braces
"""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from functools import lru_cache
from typing import Any, Sequence
from uuid import UUID

from pydantic import BaseModel

_HOLE = re.compile(
    r"\{\{|\}\}|\{(?P<hint>[@$]?)(?P<name>[A-Za-z_][A-Za-z0-9_]*|\d+)"
    r"(?::(?P<format>[^{}]*))?\}"
)

_SCALARS = (
    str,
    bytes,
    bool,
    int,
    float,
    complex,
    Decimal,
    datetime,
    date,
    time,
    timedelta,
    UUID,
    Enum,
)


@dataclass(frozen=True)
class TextToken:
    """Literal text between holes."""

    text: str


@dataclass(frozen=True)
class PropertyToken:
    """A hole naming a property.

    Attributes:
        name: Property name, or the argument index for positional holes.
        raw: The hole exactly as written, used when the property is unbound.
        hint: "@" to destructure, "$" to stringify, "" for default capture.
        format_spec: Python format spec applied when rendering.
    """

    name: str
    raw: str
    hint: str = ""
    format_spec: str | None = None

    @property
    def position(self) -> int | None:
        return int(self.name) if self.name.isdigit() else None


@dataclass(frozen=True)
class MessageTemplate:
    """A parsed message template."""

    text: str
    tokens: tuple[TextToken | PropertyToken, ...]

    @classmethod
    def parse(cls, text: str) -> MessageTemplate:
        """Parse template text; results are cached per text."""
        return _parse(text)

    @property
    def property_tokens(self) -> tuple[PropertyToken, ...]:
        return tuple(t for t in self.tokens if isinstance(t, PropertyToken))

    @property
    def property_names(self) -> tuple[str, ...]:
        """Property names in order of first appearance."""
        seen: dict[str, None] = {}
        for token in self.property_tokens:
            seen.setdefault(token.name, None)
        return tuple(seen)

    def bind(self, args: Sequence[Any]) -> dict[str, Any]:
        """Pair holes with positional arguments and capture their values.

        When every hole is positional, each takes the argument at its
        index. Otherwise all holes take arguments in order of first
        appearance. Holes without an argument stay unbound and surplus
        arguments are dropped.
        """
        tokens = self.property_tokens
        positional = bool(tokens) and all(t.position is not None for t in tokens)
        properties: dict[str, Any] = {}
        next_arg = 0
        for token in tokens:
            if token.name in properties:
                continue
            if positional:
                position = token.position
            else:
                position = next_arg
                next_arg += 1
            if position >= len(args):
                continue
            properties[token.name] = capture_hinted(args[position], token.hint)
        return properties

    def render(self, properties: Mapping[str, Any]) -> str:
        """Render the event text from captured properties."""
        parts: list[str] = []
        for token in self.tokens:
            if isinstance(token, TextToken):
                parts.append(token.text)
            elif token.name not in properties:
                parts.append(token.raw)
            else:
                parts.append(_render_value(properties[token.name], token.format_spec))
        return "".join(parts)


@lru_cache(maxsize=1000)
def _parse(text: str) -> MessageTemplate:
    tokens: list[TextToken | PropertyToken] = []
    buffer: list[str] = []
    last = 0
    for match in _HOLE.finditer(text):
        buffer.append(text[last : match.start()])
        last = match.end()
        literal = match.group(0)
        if literal in ("{{", "}}"):
            buffer.append(literal[0])
            continue
        pending = "".join(buffer)
        if pending:
            tokens.append(TextToken(pending))
        buffer = []
        tokens.append(
            PropertyToken(
                name=match.group("name"),
                raw=literal,
                hint=match.group("hint"),
                format_spec=match.group("format"),
            )
        )
    buffer.append(text[last:])
    remainder = "".join(buffer)
    if remainder:
        tokens.append(TextToken(remainder))
    return MessageTemplate(text=text, tokens=tuple(tokens))


def _render_value(value: Any, format_spec: str | None) -> str:
    if format_spec is None:
        return str(value)
    try:
        return format(value, format_spec)
    except (TypeError, ValueError):
        return str(value)


def capture_hinted(value: Any, hint: str) -> Any:
    """Capture a template argument according to its hole hint."""
    if hint == "$":
        return str(value)
    return capture_value(value, destructure=hint == "@")


def capture_value(value: Any, destructure: bool = False) -> Any:
    """Capture a value for an event property.

    Scalars are kept as-is. Without destructuring, collections of
    capturable values are copied and anything else is stringified, so the
    event never holds a reference to a mutable domain object. With
    destructuring, pydantic models, dataclasses and mappings are turned
    into plain data.
    """
    if value is None or isinstance(value, _SCALARS):
        return value
    if destructure:
        if isinstance(value, BaseModel):
            return value.model_dump()
        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return dataclasses.asdict(value)
    if isinstance(value, Mapping):
        if not destructure and not all(
            k is None or isinstance(k, _SCALARS) for k in value
        ):
            return str(value)
        return {k: capture_value(v, destructure) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [capture_value(item, destructure) for item in value]
    if destructure and hasattr(value, "__dict__"):
        return {
            k: capture_value(v, destructure)
            for k, v in vars(value).items()
            if not k.startswith("_")
        }
    return str(value)
