from collections.abc import Awaitable, Callable
from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR
from structlog.stdlib import BoundLogger

from blogging_api.configs.settings import DEFAULT_ERROR_MESSAGE
from blogging_api.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def envelope_status(status_code: int) -> str:
    """JSend-style status word: ``fail`` for client errors, ``error`` for server errors."""
    return "error" if status_code >= HTTP_500_INTERNAL_SERVER_ERROR else "fail"


def create_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = getattr(exc, "status_code", HTTP_500_INTERNAL_SERVER_ERROR)
        detail = getattr(exc, "detail", "Internal Server Error")

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        content: dict[str, object] = {"status": envelope_status(status_code), "message": detail}
        if errors := getattr(exc, "errors", None):
            content["errors"] = errors

        headers = getattr(exc, "headers", None)
        return ORJSONResponse(content=content, status_code=status_code, headers=headers)

    return handler


def create_http_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a handler that renders framework HTTP errors (unknown routes, wrong methods) as envelopes.

    Args:
        logger: Logger instance to use for logging.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        http_exc = cast(StarletteHTTPException, exc)
        if http_exc.status_code == HTTP_404_NOT_FOUND:
            detail = f"Route {request.url.path} not found"
        else:
            detail = str(http_exc.detail)

        logger.warning(f"{detail} for ip: {host(request)}")
        return ORJSONResponse(
            content={"status": envelope_status(http_exc.status_code), "message": detail},
            status_code=http_exc.status_code,
            headers=getattr(http_exc, "headers", None),
        )

    return handler


def create_unhandled_exception_handler(
    logger: BoundLogger,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """Create the last-resort handler: log the traceback, hide the details from the client."""

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        logger.error(
            f"Unhandled error for ip: {host(request)} for endpoint {request.url.path}",
            exc_info=exc,
        )
        return ORJSONResponse(
            content={"status": "error", "message": DEFAULT_ERROR_MESSAGE},
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return handler
