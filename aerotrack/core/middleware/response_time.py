"""Response time middleware attaching timing headers to each response."""

import logging
from typing import Final

from starlette.types import ASGIApp, Receive, Scope, Send

from aerotrack.core.clock import Clock, SystemClock, elapsed_ms
from aerotrack.core.middleware.sink import ResponseSink
from aerotrack.core.timing import RequestTimingContext

logger = logging.getLogger(__name__)

RECEIVED_AT_HEADER: Final[str] = "X-Request-Received-At"
RESPONSE_TIME_HEADER: Final[str] = "X-Response-Time"
SERVER_TIMESTAMP_HEADER: Final[str] = "X-Server-Timestamp"

TIMING_HEADERS: Final[tuple[str, ...]] = (
    RECEIVED_AT_HEADER,
    RESPONSE_TIME_HEADER,
    SERVER_TIMESTAMP_HEADER,
)


def format_duration(duration_ms: float) -> str:
    """Format a duration as a two-decimal millisecond value."""
    return f"{duration_ms:.2f}ms"


def attach_timing_headers(sink: ResponseSink) -> bool:
    """Set timing headers on a response that has not started sending.

    Args:
        sink: Response sink of the current request

    Returns:
        True if headers were attached, False if it was too late to do so
    """
    if sink.headers_sent or sink.headers is None:
        logger.debug("Response headers already sent, skipping timing headers")
        return False

    total_ms = elapsed_ms(sink.context.arrival, sink.clock.now())

    sink.headers[RECEIVED_AT_HEADER] = str(sink.context.received_at_ms)
    sink.headers[RESPONSE_TIME_HEADER] = format_duration(total_ms)
    sink.headers[SERVER_TIMESTAMP_HEADER] = str(sink.clock.timestamp_ms())
    return True


class TimingHeadersMiddleware:
    """Middleware for reporting request timing in response headers."""

    def __init__(self, app: ASGIApp, clock: Clock | None = None) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            clock: Clock source, defaults to the system clock
        """
        self.app = app
        self.clock = clock or SystemClock()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Time the request and attach headers when the response starts.

        If the application fails before starting a response, a plain 500 is
        sent through the sink so the error response is timed as well.

        Args:
            scope: ASGI connection scope
            receive: ASGI receive callable
            send: ASGI send callable
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        context = RequestTimingContext(
            arrival=self.clock.now(),
            received_at_ms=self.clock.timestamp_ms(),
        )
        sink = ResponseSink(send, context, self.clock, on_start=attach_timing_headers)

        context.processing_start = self.clock.now()
        try:
            await self.app(scope, receive, sink)
        except Exception:
            await sink.send_server_error(scope, receive)
            raise
