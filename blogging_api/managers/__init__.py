from blogging_api.managers.password_manager import (
    PasswordHasher,
    get_password_hasher,
    hash_password,
    verify_and_update_password,
    verify_password,
)
from blogging_api.managers.rate_limiter import limiter, rate_limit_exceeded_handler
from blogging_api.managers.token_manager import create_access_token, decode_access_token

__all__ = [
    "PasswordHasher",
    "create_access_token",
    "decode_access_token",
    "get_password_hasher",
    "hash_password",
    "limiter",
    "rate_limit_exceeded_handler",
    "verify_and_update_password",
    "verify_password",
]
