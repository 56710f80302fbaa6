"""Tests for the JWT token manager."""

from datetime import timedelta
from uuid import uuid4

import pytest
from jose import jwt

from blogging_api.configs import settings
from blogging_api.errors import InvalidTokenError, TokenExpiredError
from blogging_api.managers.token_manager import create_access_token, decode_access_token


class TestCreateAccessToken:
    """Test cases for create_access_token function."""

    def test_creates_valid_token(self) -> None:
        token = create_access_token(user_id=uuid4())

        assert isinstance(token, str)
        assert token.count(".") == 2

    def test_payload_carries_only_subject_and_times(self) -> None:
        user_id = uuid4()

        token = create_access_token(user_id=user_id)
        claims = jwt.get_unverified_claims(token)

        assert claims["sub"] == str(user_id)
        assert set(claims) == {"sub", "iat", "exp"}

    def test_default_expiry_uses_settings(self) -> None:
        claims = jwt.get_unverified_claims(create_access_token(user_id=uuid4()))

        assert claims["exp"] - claims["iat"] == settings.JWT_EXPIRES_MINUTES * 60


class TestDecodeAccessToken:
    """Test cases for decode_access_token function."""

    def test_round_trip_returns_same_user(self) -> None:
        user_id = uuid4()

        token_data = decode_access_token(create_access_token(user_id=user_id))

        assert token_data.user_id == user_id

    def test_expired_token_rejected(self) -> None:
        token = create_access_token(user_id=uuid4(), expires_delta=timedelta(seconds=-5))

        with pytest.raises(TokenExpiredError) as exc_info:
            decode_access_token(token)
        assert exc_info.value.detail == "Token has expired"

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(user_id=uuid4())
        header, payload, signature = token.split(".")
        tampered = f"{header}.{payload}.{signature[::-1]}"

        with pytest.raises(InvalidTokenError):
            decode_access_token(tampered)

    def test_token_signed_with_other_secret_rejected(self) -> None:
        token = jwt.encode({"sub": str(uuid4())}, "another-secret", algorithm="HS256")

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_garbage_rejected(self) -> None:
        with pytest.raises(InvalidTokenError) as exc_info:
            decode_access_token("not-a-jwt")
        assert exc_info.value.detail == "Invalid token"

    @pytest.mark.parametrize("subject", [None, "not-a-uuid", 42])
    def test_bad_subject_rejected(self, subject: object) -> None:
        payload = {} if subject is None else {"sub": subject}
        token = jwt.encode(
            payload,
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )

        with pytest.raises(InvalidTokenError):
            decode_access_token(token)
