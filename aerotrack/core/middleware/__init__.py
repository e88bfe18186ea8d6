"""Middleware package for FastAPI application."""

from aerotrack.core.middleware.cors import setup_cors
from aerotrack.core.middleware.request_timing import RequestTimingMiddleware
from aerotrack.core.middleware.response_time import TimingHeadersMiddleware
from aerotrack.core.middleware.sink import ResponseSink

__all__ = [
    "RequestTimingMiddleware",
    "ResponseSink",
    "TimingHeadersMiddleware",
    "setup_cors",
]
