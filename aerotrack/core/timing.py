"""Per-request timing state and interval calculation."""

from dataclasses import dataclass
from typing import Final, Literal

from aerotrack.core.clock import elapsed_ms

UNKNOWN_SIZE: Final = "unknown"

ResponseSize = int | Literal["unknown"]


@dataclass(slots=True)
class RequestTimingContext:
    """Monotonic instants captured over one request's lifetime.

    Instants are set at most once each, in the order arrival, processing
    start, first write (optional) and completion.
    """

    arrival: int
    received_at_ms: int
    processing_start: int | None = None
    first_write: int | None = None
    completion: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.completion is not None


@dataclass(frozen=True, slots=True)
class TimingReport:
    """Read-only summary of a finished request."""

    total_ms: float
    processing_ms: float
    transmission_ms: float
    method: str
    path: str
    status_code: int
    response_size: ResponseSize


def compute_intervals(ctx: RequestTimingContext) -> tuple[float, float, float]:
    """Derive total, processing and transmission durations.

    When no body byte was written before the response finished, processing
    absorbs the whole total and transmission is zero.

    Args:
        ctx: Completed request timing context

    Returns:
        Tuple of (total_ms, processing_ms, transmission_ms)

    Raises:
        ValueError: If the request has not completed yet
    """
    if ctx.completion is None:
        raise ValueError("Request timing context is not complete")

    total_ms = elapsed_ms(ctx.arrival, ctx.completion)

    if ctx.first_write is not None and ctx.processing_start is not None:
        processing_ms = elapsed_ms(ctx.processing_start, ctx.first_write)
        transmission_ms = elapsed_ms(ctx.first_write, ctx.completion)
    else:
        processing_ms = total_ms
        transmission_ms = 0.0

    return total_ms, processing_ms, transmission_ms


def build_report(
    ctx: RequestTimingContext,
    *,
    method: str,
    path: str,
    status_code: int,
    response_size: ResponseSize = UNKNOWN_SIZE,
) -> TimingReport:
    """Build the timing report for a completed request."""
    total_ms, processing_ms, transmission_ms = compute_intervals(ctx)
    return TimingReport(
        total_ms=total_ms,
        processing_ms=processing_ms,
        transmission_ms=transmission_ms,
        method=method,
        path=path,
        status_code=status_code,
        response_size=response_size,
    )
