"""Monotonic clock."""

import time


class MonotonicClock:
    """Clock reading ``time.monotonic_ns``; unaffected by wall-clock changes."""

    def now(self) -> int:
        return time.monotonic_ns()
