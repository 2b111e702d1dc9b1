"""Ports: protocols the application layer depends on."""

from structlog_timings.ports.backend import Enricher, EventDict, TimingLogger
from structlog_timings.ports.clock import Clock
from structlog_timings.ports.context import AmbientContext, ContextHandle

__all__ = [
    "AmbientContext",
    "Clock",
    "ContextHandle",
    "Enricher",
    "EventDict",
    "TimingLogger",
]
