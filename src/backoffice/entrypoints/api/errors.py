"""Translation of domain error kinds into HTTP responses."""

from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from backoffice.core.exceptions import (
    BackofficeError,
    ConflictError,
    ForbiddenError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
)

logger = structlog.get_logger()

STATUS_CODES: dict[type[BackofficeError], int] = {
    NotFoundError: 404,
    UnauthorizedError: 401,
    ForbiddenError: 403,
    InvalidArgumentError: 400,
    ConflictError: 409,
    InternalError: 500,
}


def status_code_for(error: BackofficeError) -> int:
    """HTTP status for an error kind, walking the class hierarchy."""
    for cls in type(error).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return 500


async def backoffice_error_handler(request: Request, exc: BackofficeError) -> JSONResponse:
    """Render a BackofficeError as ``{success: false, message}``."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("request_failed", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": exc.message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Install the domain error handler on an app."""
    app.add_exception_handler(BackofficeError, backoffice_error_handler)  # type: ignore[arg-type]
