"""HTTP error handling following RFC 7807 Problem Details."""

from http import HTTPStatus
from typing import Any, Final

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.exceptions import HTTPException as StarletteHTTPException

DEFAULT_ERROR_TYPE: Final[str] = "about:blank"
VALIDATION_ERROR_TYPE: Final[str] = "urn:ietf:params:rfc:7807:validation"
RESOURCE_ERROR_TYPE: Final[str] = "urn:ietf:params:rfc:7231:status:404"
METHOD_ERROR_TYPE: Final[str] = "urn:ietf:params:rfc:7231:status:405"
SERVER_ERROR_TYPE: Final[str] = "urn:ietf:params:rfc:7231:status:500"

MAX_INSTANCE_LENGTH: Final[int] = 255

HTTP_422_UNPROCESSABLE: Final[int] = HTTPStatus.UNPROCESSABLE_ENTITY.value

ERROR_CODES: Final[dict[int, str]] = {
    status.HTTP_404_NOT_FOUND: "RESOURCE001",
    status.HTTP_405_METHOD_NOT_ALLOWED: "RESOURCE002",
    status.HTTP_400_BAD_REQUEST: "VALIDATION001",
    HTTP_422_UNPROCESSABLE: "VALIDATION002",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "SERVER001",
    status.HTTP_503_SERVICE_UNAVAILABLE: "SERVER002",
}

ERROR_TYPES: Final[dict[int, str]] = {
    status.HTTP_404_NOT_FOUND: RESOURCE_ERROR_TYPE,
    status.HTTP_405_METHOD_NOT_ALLOWED: METHOD_ERROR_TYPE,
    status.HTTP_400_BAD_REQUEST: VALIDATION_ERROR_TYPE,
    HTTP_422_UNPROCESSABLE: VALIDATION_ERROR_TYPE,
    status.HTTP_500_INTERNAL_SERVER_ERROR: SERVER_ERROR_TYPE,
    status.HTTP_503_SERVICE_UNAVAILABLE: SERVER_ERROR_TYPE,
}

JSON_CONTENT_TYPE: Final[str] = "application/problem+json"

CACHE_CONTROL: Final[str] = "no-store, no-cache, must-revalidate"


class ProblemDetail(BaseModel):
    """RFC 7807 Problem Details for HTTP APIs."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "type": RESOURCE_ERROR_TYPE,
                    "title": "Not Found",
                    "status": 404,
                    "detail": "Not Found",
                    "instance": "http://localhost:8000/api/aircraft/42",
                    "code": "RESOURCE001",
                }
            ]
        }
    )

    type: str = Field(default=DEFAULT_ERROR_TYPE)
    title: str
    status: int
    detail: str
    instance: str = Field(max_length=MAX_INSTANCE_LENGTH)
    code: str | None = None
    errors: list[dict[str, Any]] | None = None


def truncate_url(url: str, max_length: int = MAX_INSTANCE_LENGTH) -> str:
    """Truncate URL to max length while preserving the path.

    Args:
        url: URL to truncate
        max_length: Maximum length allowed

    Returns:
        Truncated URL with path preserved
    """
    if len(url) <= max_length:
        return url

    path = url.split("?")[0]
    if len(path) > max_length:
        return path[:max_length-3] + "..."
    return path


async def http_error_handler(
    request: Request,
    exc: StarletteHTTPException,
) -> JSONResponse:
    """Handle HTTP exceptions by converting to RFC 7807 problem details."""
    problem = ProblemDetail(
        type=ERROR_TYPES.get(exc.status_code, DEFAULT_ERROR_TYPE),
        title=HTTPStatus(exc.status_code).phrase,
        status=exc.status_code,
        detail=str(exc.detail),
        instance=truncate_url(str(request.url)),
        code=ERROR_CODES.get(exc.status_code),
    )

    headers = {
        "Content-Type": JSON_CONTENT_TYPE,
        "Cache-Control": CACHE_CONTROL,
    }
    if exc.headers:
        headers.update(exc.headers)

    return JSONResponse(
        status_code=exc.status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


async def validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle validation errors by converting to RFC 7807 problem details."""
    problem = ProblemDetail(
        type=VALIDATION_ERROR_TYPE,
        title="Validation Error",
        status=HTTP_422_UNPROCESSABLE,
        detail="Request validation failed",
        instance=truncate_url(str(request.url)),
        code=ERROR_CODES[HTTP_422_UNPROCESSABLE],
        errors=[
            {
                "loc": err["loc"],
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in exc.errors()
        ],
    )

    return JSONResponse(
        status_code=HTTP_422_UNPROCESSABLE,
        content=problem.model_dump(exclude_none=True),
        headers={
            "Content-Type": JSON_CONTENT_TYPE,
            "Cache-Control": CACHE_CONTROL,
        },
    )
