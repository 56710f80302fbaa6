from blogging_api.errors.base import BaseAppError, create_exception_handler
from blogging_api.monitoring import get_logger

logger = get_logger(__name__)


class PasswordHashingError(BaseAppError):
    """Base error for password hasher module."""

    def __init__(self, detail: str = "Password hashing failed") -> None:
        super().__init__(detail)


class PasswordRehashError(PasswordHashingError):
    """Error for password rehashing."""

    def __init__(self, detail: str = "Password rehashing failed") -> None:
        super().__init__(detail)


password_hashing_exception_handler = create_exception_handler(logger)
