"""Blogging API: users publish, search and read blog posts."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from blogging_api.configs import settings
from blogging_api.errors import (
    BadRequestError,
    DatabaseError,
    NotOwnerError,
    PasswordHashingError,
    UserAuthenticationError,
    ValidationError,
    auth_exception_handler,
    bad_request_exception_handler,
    create_http_exception_handler,
    create_unhandled_exception_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    validation_exception_handler,
)
from blogging_api.managers import limiter, rate_limit_exceeded_handler
from blogging_api.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blogging_api.monitoring import get_logger
from blogging_api.routes import auth_router, blog_router
from blogging_api.utils.helpers import today_str

logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    description="Blogging API: accounts, drafts, publishing and search",
    version="1.0.0",
    debug=settings.DEBUG,
    lifespan=lifespan,
    default_response_class=ORJSONResponse,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

app.state.limiter = limiter

configure_cors(app)

app.add_middleware(SlowAPIMiddleware)
app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

routes = [auth_router, blog_router]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (UserAuthenticationError, auth_exception_handler),
    (NotOwnerError, auth_exception_handler),
    (ValidationError, bad_request_exception_handler),
    (BadRequestError, bad_request_exception_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (DatabaseError, database_exception_handler),
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, create_http_exception_handler(logger)),
    (Exception, create_unhandled_exception_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "status": "success",
                        "message": "Blogging API is running",
                        "timestamp": "2025-01-01 00:00:00",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Liveness probe.

    Returns
    -------
    ORJSONResponse
        ``{status, message, timestamp}``; never rate limited.
    """
    return ORJSONResponse(
        {
            "status": "success",
            "message": f"{app.title} is running",
            "timestamp": today_str(),
        },
    )
