"""Authentication and authorization errors."""

from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from blogging_api.errors.base import BaseAppError, create_exception_handler
from blogging_api.monitoring import get_logger

logger = get_logger(__name__)


class UserAuthenticationError(BaseAppError):
    """Base class for authentication errors."""

    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(
        self,
        detail: str = "Authentication failed",
        status_code: int = HTTP_401_UNAUTHORIZED,
    ) -> None:
        super().__init__(detail, status_code)


class InvalidCredentialsError(UserAuthenticationError):
    """Raised when email or password do not match a stored user."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class MissingTokenError(UserAuthenticationError):
    """Raised when a protected endpoint is called without a bearer token."""

    def __init__(self) -> None:
        super().__init__("Access token is required")


class InvalidTokenError(UserAuthenticationError):
    """Raised when a token is malformed or its signature does not verify."""

    def __init__(self) -> None:
        super().__init__("Invalid token")


class TokenExpiredError(UserAuthenticationError):
    """Raised when a token is past its expiry."""

    def __init__(self) -> None:
        super().__init__("Token has expired")


class UserNotFoundError(UserAuthenticationError):
    """Raised when a valid token references a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("Invalid token - user not found")


class NotOwnerError(BaseAppError):
    """Raised when an authenticated user touches a resource they do not own."""

    def __init__(self, detail: str = "You can only modify your own resources") -> None:
        super().__init__(detail, HTTP_403_FORBIDDEN)


auth_exception_handler = create_exception_handler(logger)
