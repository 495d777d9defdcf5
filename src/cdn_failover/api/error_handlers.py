"""Error handling and response standardization for the API."""

from datetime import UTC, datetime
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
import structlog

from cdn_failover.domain.exceptions import (
    CDNFailoverException,
    InvalidResourceError,
    UnknownResourceError,
)

logger = structlog.get_logger()


class ErrorResponse(BaseModel):
    """Standardized error response format."""

    error: bool = True
    code: str
    message: str
    details: dict[str, Any] | None = None
    timestamp: str
    path: str


def create_error_response(
    request: Request,
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    """Create standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            code=code,
            message=message,
            details=details,
            timestamp=datetime.now(UTC).isoformat(),
            path=str(request.url.path),
        ).model_dump(),
    )


async def unknown_resource_exception_handler(
    request: Request, exc: UnknownResourceError
) -> JSONResponse:
    """Handle lookups of unregistered resources."""
    return create_error_response(
        request=request,
        code=exc.error_code.value,
        message=str(exc),
        status_code=status.HTTP_404_NOT_FOUND,
        details=exc.details,
    )


async def invalid_resource_exception_handler(
    request: Request, exc: InvalidResourceError
) -> JSONResponse:
    """Handle malformed resource definitions."""
    return create_error_response(
        request=request,
        code=exc.error_code.value,
        message=str(exc),
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details=exc.details,
    )


async def general_exception_handler(
    request: Request, exc: CDNFailoverException
) -> JSONResponse:
    """Handle any other resolver exception."""
    logger.error("Resolver error", error=str(exc), path=str(request.url.path))
    return create_error_response(
        request=request,
        code=exc.error_code.value,
        message=str(exc),
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details=exc.details,
    )


async def unexpected_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.error(
        "Unexpected error",
        error=str(exc),
        error_type=type(exc).__name__,
        path=str(request.url.path),
        exc_info=True,
    )
    return create_error_response(
        request=request,
        code="internal_error",
        message="An unexpected error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
