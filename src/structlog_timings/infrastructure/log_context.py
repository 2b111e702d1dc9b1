"""Ambient correlation context backed by structlog's context variables.

Values pushed here are merged into every event by the
``structlog.contextvars.merge_contextvars`` processor. Context variables
are local to the current thread and asyncio task, so pushes from
independent call stacks never interfere.
"""

from __future__ import annotations

from contextvars import Token
from typing import Any, Mapping

import structlog


class ContextVarsHandle:
    """Restores the previous context-variable values on release."""

    def __init__(self, tokens: Mapping[str, Token[Any]]):
        self._tokens: Mapping[str, Token[Any]] | None = tokens

    @property
    def released(self) -> bool:
        return self._tokens is None

    def release(self) -> None:
        if self._tokens is None:
            return
        tokens, self._tokens = self._tokens, None
        for name, token in tokens.items():
            try:
                structlog.contextvars.reset_contextvars(**{name: token})
            except ValueError:
                # The token belongs to another Context (the operation was
                # finished in a different task or thread); restore by value.
                if token.old_value is Token.MISSING:
                    structlog.contextvars.unbind_contextvars(name)
                else:
                    structlog.contextvars.bind_contextvars(**{name: token.old_value})


class ContextVarsAmbientContext:
    """Pushes values with ``bind_contextvars`` and pops them with ``reset_contextvars``."""

    def push(self, name: str, value: Any) -> ContextVarsHandle:
        tokens = structlog.contextvars.bind_contextvars(**{name: value})
        return ContextVarsHandle(tokens)
