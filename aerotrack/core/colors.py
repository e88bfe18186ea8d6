"""ANSI colour lookups for the request timing log line.

Colours are display-only; nothing branches on them.
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Final

RESET: Final[str] = "\033[0m"

RED: Final[str] = "\033[31m"
GREEN: Final[str] = "\033[32m"
YELLOW: Final[str] = "\033[33m"
BLUE: Final[str] = "\033[34m"
MAGENTA: Final[str] = "\033[35m"
CYAN: Final[str] = "\033[36m"
WHITE: Final[str] = "\033[37m"

METHOD_COLORS: Final[Mapping[str, str]] = MappingProxyType({
    "GET": BLUE,
    "POST": GREEN,
    "PUT": YELLOW,
    "DELETE": RED,
    "PATCH": MAGENTA,
})

FAST_REQUEST_MS: Final[float] = 100.0
NORMAL_REQUEST_MS: Final[float] = 500.0
SLOW_REQUEST_MS: Final[float] = 1000.0


def status_color(status_code: int) -> str:
    """Return the colour for an HTTP status code band."""
    if 200 <= status_code < 300:
        return GREEN
    if 300 <= status_code < 400:
        return CYAN
    if 400 <= status_code < 500:
        return YELLOW
    if status_code >= 500:
        return RED
    return WHITE


def method_color(method: str) -> str:
    """Return the colour for an HTTP method."""
    return METHOD_COLORS.get(method, WHITE)


def duration_color(duration_ms: float) -> str:
    """Return the colour for a duration band."""
    if duration_ms < FAST_REQUEST_MS:
        return GREEN
    if duration_ms < NORMAL_REQUEST_MS:
        return YELLOW
    if duration_ms < SLOW_REQUEST_MS:
        return MAGENTA
    return RED


def colorize(text: str, color: str, enabled: bool = True) -> str:
    """Wrap text in a colour marker and reset sequence."""
    if not enabled:
        return text
    return f"{color}{text}{RESET}"
