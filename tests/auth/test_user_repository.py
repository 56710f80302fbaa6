"""Tests for UserRepository against a mocked async session."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from blogging_api.errors import DuplicateEntryError
from blogging_api.models import UserDB
from blogging_api.repositories import UserRepository
from blogging_api.schemas.user import UserCreate, UserUpdate

NEW_USER = UserCreate(
    first_name="Grace",
    last_name="Hopper",
    email="Grace@Example.com",
    password="password123",
)


def exists_result(*, found: bool) -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = 1 if found else None
    return result


class TestCreate:
    @pytest.mark.asyncio
    async def test_existing_email_rejected_before_hashing(self, mock_session: AsyncMock) -> None:
        mock_session.execute.return_value = exists_result(found=True)

        with (
            patch("blogging_api.repositories.user.hash_password", new_callable=AsyncMock) as hasher,
            pytest.raises(DuplicateEntryError, match="User with this email already exists"),
        ):
            await UserRepository(mock_session).create(NEW_USER)

        hasher.assert_not_awaited()
        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_stores_hash_and_lower_cased_email(self, mock_session: AsyncMock) -> None:
        mock_session.execute.return_value = exists_result(found=False)

        with patch(
            "blogging_api.repositories.user.hash_password",
            new_callable=AsyncMock,
            return_value="$argon2id$hashed",
        ) as hasher:
            db_user = await UserRepository(mock_session).create(NEW_USER)

        hasher.assert_awaited_once_with("password123")
        assert db_user.email == "grace@example.com"
        assert db_user.password_hash == "$argon2id$hashed"
        mock_session.add.assert_called_once_with(db_user)
        mock_session.commit.assert_awaited_once()


class TestUpdate:
    @pytest.mark.asyncio
    async def test_email_check_excludes_the_user_itself(
        self,
        mock_session: AsyncMock,
        author: UserDB,
    ) -> None:
        repo = UserRepository(mock_session)
        repo.email_exists = AsyncMock(return_value=False)  # type: ignore[method-assign]

        updated = await repo.update(author, UserUpdate(email="ADA.NEW@example.com"))

        repo.email_exists.assert_awaited_once_with("ada.new@example.com", exclude_id=author.id)
        assert updated.email == "ada.new@example.com"

    @pytest.mark.asyncio
    async def test_email_in_use(self, mock_session: AsyncMock, author: UserDB) -> None:
        mock_session.execute.return_value = exists_result(found=True)

        with pytest.raises(DuplicateEntryError, match="Email already in use"):
            await UserRepository(mock_session).update(author, UserUpdate(email="alan@example.com"))

        assert author.email == "ada@example.com"
        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_password_and_nulls_never_applied(
        self,
        mock_session: AsyncMock,
        author: UserDB,
    ) -> None:
        original_hash = author.password_hash
        changes = UserUpdate.model_validate(
            {"first_name": "Augusta", "last_name": None, "password": "new-secret"},
        )

        updated = await UserRepository(mock_session).update(author, changes)

        assert updated.first_name == "Augusta"
        assert updated.last_name == "Lovelace"
        assert updated.password_hash == original_hash
        mock_session.execute.assert_not_awaited()
