"""Base repository for database operations."""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from blogging_api.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)

type FilterValue = str | int | bool | UUID | None


class BaseRepository[ModelT: SQLModel]:
    """
    Common lookups and persistence for a single table model.

    Attributes:
        model: The SQLModel table model.
        not_found_detail: Message used by ``get_or_raise``.
        duplicate_detail: Message used when a unique constraint is violated.
    """

    model: type[ModelT]
    not_found_detail: str = "Record not found"
    duplicate_detail: str = "A record with this value already exists"

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        return await self.session.get(self.model, record_id)

    async def get_or_raise(self, record_id: UUID) -> ModelT:
        """
        Get a record by ID or raise if it does not exist.

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(detail=self.not_found_detail)
        return record

    async def delete(self, record: ModelT) -> None:
        """Delete an already-loaded record and commit."""
        await self.session.delete(record)
        await self.session.commit()

    async def _add_and_refresh(
        self,
        record: ModelT,
        duplicate_detail: str | None = None,
    ) -> ModelT:
        """
        Add a record, commit it and refresh it from the database.

        Writes are committed here rather than when the session dependency
        closes, so they are visible before the response reaches the client.

        Args:
            record: Record to add
            duplicate_detail: Message for a unique-constraint violation

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
            DatabaseConnectionError: For any other database failure
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.commit()
            await self.session.refresh(record)
        except IntegrityError as e:
            await self.session.rollback()
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=duplicate_detail or self.duplicate_detail,
                ) from e
            raise DatabaseError(detail="Database integrity error") from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseConnectionError(detail="Failed to save record") from e
        return record

    async def _check_exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            id_column = getattr(self.model, "id")
            statement = statement.where(id_column != exclude_id)

        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None
