"""Clock protocol."""

from typing import Protocol


class Clock(Protocol):
    """Source of monotonic timestamps."""

    def now(self) -> int:
        """Return a monotonic timestamp in nanoseconds."""
        ...
