"""Tests for AuthService."""

from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from passlib.hash import pbkdf2_sha256
from pydantic import SecretStr

from blogging_api.errors import (
    DuplicateEntryError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UserNotFoundError,
)
from blogging_api.managers import get_password_hasher
from blogging_api.managers.token_manager import create_access_token, decode_access_token
from blogging_api.models import UserDB
from blogging_api.schemas.user import UserCreate
from blogging_api.services import AuthService


@pytest.fixture
def repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def service(repo: AsyncMock) -> AuthService:
    return AuthService(repo)


@pytest.fixture
def registration() -> UserCreate:
    return UserCreate(
        first_name="Grace",
        last_name="Hopper",
        email="Grace@Example.com",
        password=SecretStr("password123"),
    )


class TestRegister:
    @pytest.mark.asyncio
    async def test_returns_user_and_token_for_it(
        self,
        service: AuthService,
        repo: AsyncMock,
        author: UserDB,
        registration: UserCreate,
    ) -> None:
        repo.create.return_value = author

        user, token = await service.register(registration)

        assert user is author
        assert decode_access_token(token).user_id == author.id
        repo.create.assert_awaited_once_with(registration)

    @pytest.mark.asyncio
    async def test_duplicate_email_propagates(
        self,
        service: AuthService,
        repo: AsyncMock,
        registration: UserCreate,
    ) -> None:
        repo.create.side_effect = DuplicateEntryError("User with this email already exists")

        with pytest.raises(DuplicateEntryError):
            await service.register(registration)


class TestAuthenticateUser:
    @pytest.mark.asyncio
    async def test_valid_credentials(
        self,
        service: AuthService,
        repo: AsyncMock,
        author: UserDB,
    ) -> None:
        author.password_hash = get_password_hasher().hash("password123")
        repo.get_by_email.return_value = author

        user = await service.authenticate_user("ada@example.com", "password123")

        assert user is author
        repo.update_password_hash.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_wrong_password(
        self,
        service: AuthService,
        repo: AsyncMock,
        author: UserDB,
    ) -> None:
        author.password_hash = get_password_hasher().hash("password123")
        repo.get_by_email.return_value = author

        with pytest.raises(InvalidCredentialsError):
            await service.authenticate_user("ada@example.com", "wrong-password")

    @pytest.mark.asyncio
    async def test_unknown_email_gives_same_error(
        self,
        service: AuthService,
        repo: AsyncMock,
    ) -> None:
        repo.get_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await service.authenticate_user("nobody@example.com", "password123")
        assert exc_info.value.detail == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_legacy_hash_upgraded_on_login(
        self,
        service: AuthService,
        repo: AsyncMock,
        author: UserDB,
    ) -> None:
        author.password_hash = pbkdf2_sha256.hash("password123")
        repo.get_by_email.return_value = author

        await service.authenticate_user("ada@example.com", "password123")

        repo.update_password_hash.assert_awaited_once()
        _, new_hash = repo.update_password_hash.await_args.args
        assert new_hash.startswith("$argon2id$")


class TestResolveUser:
    @pytest.mark.asyncio
    async def test_returns_user(self, service: AuthService, repo: AsyncMock, author: UserDB) -> None:
        repo.get_by_id.return_value = author

        user = await service.resolve_user(create_access_token(author.id))

        assert user is author
        repo.get_by_id.assert_awaited_once_with(author.id)

    @pytest.mark.asyncio
    async def test_deleted_user(self, service: AuthService, repo: AsyncMock) -> None:
        repo.get_by_id.return_value = None

        with pytest.raises(UserNotFoundError) as exc_info:
            await service.resolve_user(create_access_token(uuid4()))
        assert exc_info.value.detail == "Invalid token - user not found"

    @pytest.mark.asyncio
    async def test_expired_token(self, service: AuthService, repo: AsyncMock) -> None:
        token = create_access_token(uuid4(), expires_delta=timedelta(seconds=-5))

        with pytest.raises(TokenExpiredError):
            await service.resolve_user(token)
        repo.get_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_token(self, service: AuthService, repo: AsyncMock) -> None:
        with pytest.raises(InvalidTokenError):
            await service.resolve_user("garbage")
