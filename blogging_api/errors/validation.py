"""Validation and bad-request error handling."""

from typing import cast

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_400_BAD_REQUEST

from blogging_api.errors.base import BaseAppError, create_exception_handler
from blogging_api.monitoring import get_logger
from blogging_api.utils.helpers import host
from blogging_api.utils.validation import format_errors

logger = get_logger(__name__)


class BadRequestError(BaseAppError):
    """Raised when a request is well-formed but asks for something not allowed."""

    def __init__(self, detail: str = "Bad Request") -> None:
        super().__init__(detail, HTTP_400_BAD_REQUEST)


class ValidationError(BaseAppError):
    """Raised when input fails validation; carries every message, not just the first."""

    def __init__(
        self,
        detail: str = "Validation failed",
        errors: list[str] | None = None,
    ) -> None:
        super().__init__(detail=detail, status_code=HTTP_400_BAD_REQUEST)
        self.errors = errors or []


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle FastAPI request validation errors with the standard envelope.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with the collected validation messages.
    """
    exec_error = cast(RequestValidationError, exc)
    errors = format_errors(exec_error.errors())

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={
            "status": "fail",
            "message": "Validation failed",
            "errors": errors,
        },
    )


bad_request_exception_handler = create_exception_handler(logger)
