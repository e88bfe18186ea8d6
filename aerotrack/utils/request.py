"""Request utilities for describing ASGI requests."""

from typing import Final

from starlette.types import Scope

MAX_TARGET_LENGTH: Final[int] = 255


def get_request_target(scope: Scope, max_length: int = MAX_TARGET_LENGTH) -> str:
    """Return the request path with its query string, as sent by the client.

    Args:
        scope: ASGI HTTP scope
        max_length: Maximum length before the target is truncated

    Returns:
        Path including the query string, truncated with "..." if too long
    """
    path: str = scope.get("path", "")
    query_string: bytes = scope.get("query_string", b"")
    target = f"{path}?{query_string.decode('latin-1')}" if query_string else path

    if len(target) <= max_length:
        return target
    return target[:max_length - 3] + "..."
