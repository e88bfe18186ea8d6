"""Clock sources for request timing.

Monotonic instants are opaque integers (nanoseconds) and only meaningful when
compared with other instants from the same clock. Wall-clock timestamps are
milliseconds since the Unix epoch and are only used for display headers.
"""

import time
from typing import Final, Protocol

NANOS_PER_MILLI: Final[int] = 1_000_000


class Clock(Protocol):
    """Protocol for timing clock sources."""

    def now(self) -> int:
        """Return a monotonic instant in nanoseconds."""
        ...

    def timestamp_ms(self) -> int:
        """Return wall-clock milliseconds since the epoch."""
        ...


class SystemClock:
    """Default clock backed by the high-resolution performance counter."""

    def now(self) -> int:
        return time.perf_counter_ns()

    def timestamp_ms(self) -> int:
        return time.time_ns() // NANOS_PER_MILLI


def elapsed_ms(start: int, end: int) -> float:
    """Return the duration between two instants in milliseconds.

    Args:
        start: Earlier monotonic instant
        end: Later monotonic instant

    Returns:
        Non-negative duration; an inverted pair yields 0.0
    """
    if end < start:
        return 0.0
    return (end - start) / NANOS_PER_MILLI
