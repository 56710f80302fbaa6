"""User repository for database operations."""

from datetime import UTC, datetime
from uuid import UUID

from sqlmodel import col, select

from blogging_api.errors.database import DuplicateEntryError
from blogging_api.managers import hash_password
from blogging_api.models.user import UserDB
from blogging_api.repositories.base import BaseRepository
from blogging_api.schemas.user import UserCreate, UserUpdate

EMAIL_TAKEN = "User with this email already exists"
EMAIL_IN_USE = "Email already in use"


class UserRepository(BaseRepository[UserDB]):
    """
    Repository for User database operations.

    Passwords are hashed here, on the way into the table, and nowhere else.
    """

    model = UserDB
    not_found_detail = "User not found"
    duplicate_detail = EMAIL_TAKEN

    async def create(self, user: UserCreate) -> UserDB:
        """
        Create a new user.

        Args:
            user: Registration data

        Returns:
            UserDB: Created user

        Raises:
            DuplicateEntryError: If the email is already registered
        """
        if await self.email_exists(user.email):
            raise DuplicateEntryError(detail=EMAIL_TAKEN)

        db_user = UserDB(
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            password_hash=await hash_password(user.password.get_secret_value()),
        )
        return await self._add_and_refresh(db_user)

    async def get_by_email(self, email: str) -> UserDB | None:
        """
        Get user by email.

        Args:
            email: Email to search for (compared lower-cased)

        Returns:
            UserDB | None: User if found, None otherwise
        """
        result = await self.session.execute(
            select(UserDB).where(col(UserDB.email) == email.lower()),
        )
        return result.scalar_one_or_none()

    async def email_exists(self, email: str, exclude_id: UUID | None = None) -> bool:
        return await self._check_exists_by_field("email", email.lower(), exclude_id)

    async def update(self, db_user: UserDB, changes: UserUpdate) -> UserDB:
        """
        Apply a profile update.

        Args:
            db_user: The user being updated
            changes: Validated update; ``password`` is never applied

        Raises:
            DuplicateEntryError: If the new email belongs to another user
        """
        data = changes.model_dump(exclude_unset=True, exclude_none=True, exclude={"password"})
        if "email" in data and await self.email_exists(data["email"], exclude_id=db_user.id):
            raise DuplicateEntryError(detail=EMAIL_IN_USE)

        for key, value in data.items():
            setattr(db_user, key, value)
        db_user.updated_at = datetime.now(tz=UTC)

        return await self._add_and_refresh(db_user, duplicate_detail=EMAIL_IN_USE)

    async def update_password_hash(self, db_user: UserDB, password_hash: str) -> None:
        """Store an upgraded hash after a successful login."""
        db_user.password_hash = password_hash
        await self._add_and_refresh(db_user)
