"""Request timing middleware logging one summary line per finished request."""

import logging

from starlette.types import ASGIApp, Receive, Scope, Send

from aerotrack.core.clock import Clock, SystemClock, elapsed_ms
from aerotrack.core.colors import (
    colorize,
    duration_color,
    method_color,
    status_color,
)
from aerotrack.core.middleware.response_time import format_duration
from aerotrack.core.middleware.sink import ResponseSink
from aerotrack.core.timing import RequestTimingContext, TimingReport, build_report
from aerotrack.utils.request import get_request_target

logger = logging.getLogger(__name__)


def format_report_line(report: TimingReport, use_colors: bool = True) -> str:
    """Render a timing report as a human-readable log line.

    Args:
        report: Timing report of a finished request
        use_colors: Whether to include ANSI colour markers

    Returns:
        Single log line
    """
    method = colorize(f"[{report.method}]", method_color(report.method), use_colors)
    status = colorize(str(report.status_code), status_color(report.status_code), use_colors)
    total = colorize(
        format_duration(report.total_ms), duration_color(report.total_ms), use_colors
    )
    processing = colorize(
        format_duration(report.processing_ms),
        duration_color(report.processing_ms),
        use_colors,
    )
    transmission = colorize(
        format_duration(report.transmission_ms),
        duration_color(report.transmission_ms),
        use_colors,
    )

    return (
        f"{method} {report.path} - {status} - "
        f"Total: {total} | "
        f"Processing: {processing} | "
        f"Transmission: {transmission} | "
        f"{report.response_size} bytes"
    )


class RequestTimingMiddleware:
    """Middleware for measuring and logging request lifecycle timing."""

    def __init__(
        self,
        app: ASGIApp,
        clock: Clock | None = None,
        use_colors: bool = True,
    ) -> None:
        """Initialize middleware.

        Args:
            app: ASGI application
            clock: Clock source, defaults to the system clock
            use_colors: Whether log lines carry ANSI colour markers
        """
        self.app = app
        self.clock = clock or SystemClock()
        self.use_colors = use_colors

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Time the request and log a summary once the response is done.

        If the application fails before starting a response, a plain 500 is
        sent through the sink so the failure is reported like any other
        response before the exception propagates.

        Args:
            scope: ASGI connection scope
            receive: ASGI receive callable
            send: ASGI send callable
        """
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method: str = scope["method"]
        path = get_request_target(scope)

        def report(sink: ResponseSink) -> None:
            timing_report = build_report(
                sink.context,
                method=method,
                path=path,
                status_code=sink.status_code or 0,
                response_size=sink.response_size,
            )
            logger.info(
                "%s",
                format_report_line(timing_report, self.use_colors),
                extra={"timing_report": timing_report},
            )

        context = RequestTimingContext(
            arrival=self.clock.now(),
            received_at_ms=self.clock.timestamp_ms(),
        )
        sink = ResponseSink(send, context, self.clock, on_complete=report)

        context.processing_start = self.clock.now()
        try:
            await self.app(scope, receive, sink)
        except Exception as e:
            logger.error(
                "Request failed in %.2fms: %s %s - %s",
                elapsed_ms(context.arrival, self.clock.now()),
                method,
                path,
                str(e),
            )
            await sink.send_server_error(scope, receive)
            raise
