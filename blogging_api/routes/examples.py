"""OpenAPI response examples shared by the routers."""

from blogging_api.schemas.common import ErrorResponse

USER_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "first_name": "John",
    "last_name": "Doe",
    "email": "john@example.com",
    "created_at": "2025-01-01T00:00:00Z",
}
AUTHOR_EXAMPLE = {k: v for k, v in USER_EXAMPLE.items() if k != "created_at"}
TOKEN_EXAMPLE = "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."

BLOG_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "Getting Started with FastAPI",
    "description": "A short tour",
    "body": "FastAPI is a modern, fast web framework for building APIs with Python.",
    "author": AUTHOR_EXAMPLE,
    "state": "published",
    "read_count": 42,
    "reading_time": 1,
    "tags": ["python", "fastapi"],
    "created_at": "2025-01-01T00:00:00Z",
    "updated_at": "2025-01-02T00:00:00Z",
}


def error_example(description: str, message: str, errors: list[str] | None = None) -> dict:
    """Build a ``responses`` entry for an error envelope."""
    example: dict[str, object] = {"status": "fail", "message": message}
    if errors:
        example["errors"] = errors
    return {
        "model": ErrorResponse,
        "description": description,
        "content": {"application/json": {"example": example}},
    }


UNAUTHORIZED = error_example("Unauthorized", "Access token is required")
RATE_LIMITED = error_example(
    "Rate limit exceeded",
    "Too many requests from this IP, please try again later.",
)
