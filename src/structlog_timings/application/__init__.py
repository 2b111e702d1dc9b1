"""Application layer: the operation state machine and levelled factories."""

from structlog_timings.application.levelled_operation import (
    LevelledOperation,
    operation_at,
)
from structlog_timings.application.operation import Operation

__all__ = [
    "LevelledOperation",
    "Operation",
    "operation_at",
]
