"""Bearer token issuing and verification (HS256 JWT)."""

from datetime import UTC, datetime, timedelta
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from blogging_api.configs import settings
from blogging_api.errors import InvalidTokenError, TokenExpiredError
from blogging_api.schemas.auth import TokenData


def create_access_token(
    user_id: UUID,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token whose subject is the user's id.

    Args:
        user_id: User's UUID
        expires_delta: Optional lifetime; defaults to ``JWT_EXPIRES_MINUTES``

    Returns:
        str: Encoded JWT access token
    """
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=settings.JWT_EXPIRES_MINUTES))

    to_encode = {
        "sub": str(user_id),
        "iat": now,
        "exp": expire,
    }

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
    )


def decode_access_token(token: str) -> TokenData:
    """
    Verify a token's signature and expiry and extract its subject.

    Raises:
        TokenExpiredError: The token is well-formed but past ``exp``.
        InvalidTokenError: Anything else wrong with it.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET.get_secret_value(),
            algorithms=[settings.JWT_ALGORITHM],
        )
    except ExpiredSignatureError as e:
        raise TokenExpiredError from e
    except JWTError as e:
        raise InvalidTokenError from e

    subject = payload.get("sub")
    if not isinstance(subject, str):
        raise InvalidTokenError

    try:
        return TokenData(user_id=UUID(subject))
    except ValueError as e:
        raise InvalidTokenError from e
