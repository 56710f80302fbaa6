from blogging_api.errors.auth import (
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    NotOwnerError,
    TokenExpiredError,
    UserAuthenticationError,
    UserNotFoundError,
    auth_exception_handler,
)
from blogging_api.errors.base import (
    BaseAppError,
    create_exception_handler,
    create_http_exception_handler,
    create_unhandled_exception_handler,
    envelope_status,
)
from blogging_api.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DatabaseInitializationError,
    DuplicateEntryError,
    RecordNotFoundError,
    database_exception_handler,
)
from blogging_api.errors.password_hasher import (
    PasswordHashingError,
    PasswordRehashError,
    password_hashing_exception_handler,
)
from blogging_api.errors.validation import (
    BadRequestError,
    ValidationError,
    bad_request_exception_handler,
    validation_exception_handler,
)

__all__ = [
    "BadRequestError",
    "BaseAppError",
    "DatabaseConnectionError",
    "DatabaseError",
    "DatabaseInitializationError",
    "DuplicateEntryError",
    "InvalidCredentialsError",
    "InvalidTokenError",
    "MissingTokenError",
    "NotOwnerError",
    "PasswordHashingError",
    "PasswordRehashError",
    "RecordNotFoundError",
    "TokenExpiredError",
    "UserAuthenticationError",
    "UserNotFoundError",
    "ValidationError",
    "auth_exception_handler",
    "bad_request_exception_handler",
    "create_exception_handler",
    "create_http_exception_handler",
    "create_unhandled_exception_handler",
    "database_exception_handler",
    "envelope_status",
    "password_hashing_exception_handler",
    "validation_exception_handler",
]
