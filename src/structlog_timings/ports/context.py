"""Ambient logging context protocols."""

from __future__ import annotations

from typing import Any, Protocol


class ContextHandle(Protocol):
    """Handle to a value pushed onto the ambient context."""

    def release(self) -> None:
        """Pop the value. Calling more than once has no effect."""
        ...


class AmbientContext(Protocol):
    """Scope-stacked key/value context attached to every event in scope."""

    def push(self, name: str, value: Any) -> ContextHandle:
        """Push a value; it stays visible until the handle is released."""
        ...
