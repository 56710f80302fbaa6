from blogging_api.middleware.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)

__all__ = ["LoggingMiddleware", "SecurityHeadersMiddleware", "configure_cors", "lifespan"]
