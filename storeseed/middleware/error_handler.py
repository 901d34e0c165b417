"""Exception handlers that render every failure in the ``ErrorResponse`` envelope.

Registered on the app with ``app.add_exception_handler``.  Pipeline errors
from :mod:`storeseed.errors` map to 422 when the seed data is at fault and
to 502 when the document store rejected a read or commit.
"""

import logging
import traceback

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from storeseed.errors import (
    InvalidValueError,
    MalformedInputError,
    MissingRequiredFieldError,
    StoreCommitError,
    StoreSeedError,
    UnknownReferenceError,
)
from storeseed.schemas.common import ErrorCode, ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

_STATUS_TO_CODE: dict[int, str] = {
    400: "BAD_REQUEST",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
    422: "UNPROCESSABLE_ENTITY",
    500: "INTERNAL_ERROR",
    502: "BAD_GATEWAY",
    503: "SERVICE_UNAVAILABLE",
}

# Checked in order; subclasses resolve through their base.
_PIPELINE_ERRORS: tuple[tuple[type[StoreSeedError], int, str], ...] = (
    (MalformedInputError, status.HTTP_422_UNPROCESSABLE_ENTITY, "MALFORMED_INPUT"),
    (MissingRequiredFieldError, status.HTTP_422_UNPROCESSABLE_ENTITY, "MISSING_REQUIRED_FIELD"),
    (UnknownReferenceError, status.HTTP_422_UNPROCESSABLE_ENTITY, "UNKNOWN_REFERENCE"),
    (InvalidValueError, status.HTTP_422_UNPROCESSABLE_ENTITY, "INVALID_VALUE"),
    (StoreCommitError, status.HTTP_502_BAD_GATEWAY, "STORE_COMMIT_FAILED"),
)


def _code_for_status(status_code: int) -> str:
    return _STATUS_TO_CODE.get(status_code, f"HTTP_{status_code}")


def pipeline_error_status(exc: StoreSeedError) -> tuple[int, str]:
    """Return ``(http_status, error_code)`` for a pipeline error."""
    for error_type, status_code, code in _PIPELINE_ERRORS:
        if isinstance(exc, error_type):
            return status_code, code
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR"


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Render ``HTTPException`` with ``detail`` as the message and forward its headers."""
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    body = ErrorResponse(error=ErrorCode(code=_code_for_status(exc.status_code), message=detail))
    headers = dict(exc.headers) if exc.headers else None
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(), headers=headers)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details: list[ErrorDetail] = []
    for error in exc.errors():
        # Drop the "body" / "query" / "path" prefix so callers see field paths.
        loc = error["loc"]
        field_parts = [str(part) for part in loc if part not in ("body", "query", "path")]
        field = ".".join(field_parts) if field_parts else str(loc[-1]) if loc else "unknown"
        details.append(ErrorDetail(field=field, message=error["msg"]))

    body = ErrorResponse(
        error=ErrorCode(
            code="UNPROCESSABLE_ENTITY",
            message="Request validation failed",
            details=details,
        )
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=body.model_dump(),
    )


async def storeseed_error_handler(request: Request, exc: StoreSeedError) -> JSONResponse:
    """Render a seed/flush pipeline failure.

    The message names the offending entity, key or collection.  Writes
    committed before the failure are not rolled back, so the client should
    fix the data and re-run.
    """
    status_code, code = pipeline_error_status(exc)
    if status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    else:
        logger.warning("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
    body = ErrorResponse(error=ErrorCode(code=code, message=str(exc)))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the traceback and return a generic ``INTERNAL_ERROR`` without internals."""
    logger.error(
        "Unhandled %s on %s %s\n%s",
        type(exc).__name__,
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    body = ErrorResponse(
        error=ErrorCode(
            code="INTERNAL_ERROR",
            message="An internal server error occurred",
        )
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=body.model_dump(),
    )
