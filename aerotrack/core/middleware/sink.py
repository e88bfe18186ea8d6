"""Response sink adapter observing the ASGI response lifecycle."""

import logging
from collections.abc import Callable
from typing import Final

from starlette.datastructures import MutableHeaders
from starlette.responses import PlainTextResponse
from starlette.types import Message, Receive, Scope, Send

from aerotrack.core.clock import Clock
from aerotrack.core.timing import UNKNOWN_SIZE, RequestTimingContext, ResponseSize

logger = logging.getLogger(__name__)

BODY: Final[str] = "http.response.body"
PATHSEND: Final[str] = "http.response.pathsend"
ZEROCOPYSEND: Final[str] = "http.response.zerocopysend"
BODY_MESSAGE_TYPES: Final[frozenset[str]] = frozenset({BODY, PATHSEND, ZEROCOPYSEND})

SERVER_ERROR_STATUS: Final[int] = 500
SERVER_ERROR_BODY: Final[str] = "Internal Server Error"

SinkHook = Callable[["ResponseSink"], object]


def writes_body(message: Message) -> bool:
    """Return whether a body message carries response content."""
    if message["type"] == BODY:
        return bool(message.get("body"))
    return True


class ResponseSink:
    """Wrap an ASGI ``send`` callable and record response timing.

    The sink forwards every message unchanged. It records the first body
    write and the completion of the response on the request's timing
    context, and calls optional hooks when the response starts and when it
    completes. Hook failures are logged and never reach the response.
    """

    def __init__(
        self,
        send: Send,
        context: RequestTimingContext,
        clock: Clock,
        *,
        on_start: SinkHook | None = None,
        on_complete: SinkHook | None = None,
    ) -> None:
        """Initialize sink.

        Args:
            send: Downstream ASGI send callable
            context: Timing context of the current request
            clock: Clock used for timestamps
            on_start: Called with the sink before the response start is sent
            on_complete: Called once with the sink after the response is done
        """
        self._send = send
        self._on_start = on_start
        self._on_complete = on_complete
        self._completed = False
        self.context = context
        self.clock = clock
        self.status_code: int | None = None
        self.headers: MutableHeaders | None = None
        self.headers_sent = False

    @property
    def response_size(self) -> ResponseSize:
        """Response size from the Content-Length header, if known."""
        if self.headers is None:
            return UNKNOWN_SIZE
        content_length = self.headers.get("content-length")
        if content_length is None:
            return UNKNOWN_SIZE
        try:
            size = int(content_length)
        except ValueError:
            return UNKNOWN_SIZE
        return size if size >= 0 else UNKNOWN_SIZE

    async def __call__(self, message: Message) -> None:
        message_type = message["type"]

        if message_type == "http.response.start":
            self.status_code = message["status"]
            message.setdefault("headers", [])
            self.headers = MutableHeaders(scope=message)
            self._run_hook(self._on_start)
            result = await self._send(message)
            self.headers_sent = True
            return result

        if message_type in BODY_MESSAGE_TYPES:
            if self.context.first_write is None and writes_body(message):
                self.context.first_write = self.clock.now()

            result = await self._send(message)

            if message_type == PATHSEND or not message.get("more_body", False):
                self.mark_complete()
            return result

        return await self._send(message)

    async def send_server_error(self, scope: Scope, receive: Receive) -> bool:
        """Send a plain 500 response if the application never started one.

        Args:
            scope: ASGI connection scope
            receive: ASGI receive callable

        Returns:
            True if the error response was sent through the sink
        """
        if self.status_code is not None:
            return False
        response = PlainTextResponse(SERVER_ERROR_BODY, status_code=SERVER_ERROR_STATUS)
        await response(scope, receive, self)
        return True

    def mark_complete(self) -> None:
        """Record completion and run the completion hook at most once."""
        if self._completed:
            logger.debug("Response completion already recorded, ignoring")
            return
        self._completed = True
        self.context.completion = self.clock.now()
        self._run_hook(self._on_complete)

    def _run_hook(self, hook: SinkHook | None) -> None:
        if hook is None:
            return
        try:
            hook(self)
        except Exception:
            logger.exception("Request timing hook failed")
