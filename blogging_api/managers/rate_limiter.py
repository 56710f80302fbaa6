"""Per-client rate limiting using slowapi."""

from typing import cast

from fastapi import Request
from fastapi.responses import ORJSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.status import HTTP_429_TOO_MANY_REQUESTS

from blogging_api.configs import LimiterConfig, settings
from blogging_api.monitoring import get_logger
from blogging_api.utils.helpers import host

logger = get_logger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[settings.RATE_LIMIT],
    enabled=settings.RATE_LIMIT_ENABLED,
    **LimiterConfig().model_dump(),
)


async def rate_limit_exceeded_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Answer a rejected request with the standard error envelope.

    Args:
        request: FastAPI request object.
        exc: RateLimitExceeded exception.

    Returns:
        429 response.
    """
    http_exc = cast(RateLimitExceeded, exc)
    logger.warning(
        f"Rate limit {http_exc.detail} exceeded for ip: {host(request)} "
        f"for endpoint {request.url.path}",
    )
    return ORJSONResponse(
        status_code=HTTP_429_TOO_MANY_REQUESTS,
        content={"status": "fail", "message": RATE_LIMIT_MESSAGE},
    )
