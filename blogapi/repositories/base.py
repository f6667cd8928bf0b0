"""Base repository for database operations."""

from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import DBAPIError, IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from blogapi.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)

type FilterValue = str | int | float | bool | UUID | datetime | None


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common CRUD operations.

    Subclasses set ``model`` and add their entity specific queries. The
    repository never commits: the request scoped transaction owns the
    commit/rollback decision.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    @property
    def _id_column(self) -> Any:
        return getattr(self.model, self.id_field)

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        statement = select(self.model).where(self._id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_field(self, field_name: str, value: FilterValue) -> ModelT | None:
        """
        Get a record by a specific field value.

        Args:
            field_name: Name of the field to search
            value: Value to search for

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(self.model).where(field == value)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_or_raise(self, record_id: UUID, detail: str | None = None) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Args:
            record_id: Record UUID
            detail: Optional message for the raised error

        Returns:
            ModelT: Record if found

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(
                detail=detail or f"{self.model.__name__} with ID {record_id} not found",
            )
        return record

    async def exists(self, record_id: UUID) -> bool:
        """
        Check if a record exists without loading it.

        Args:
            record_id: Record UUID

        Returns:
            bool: True if record exists, False otherwise
        """
        statement = select(1).where(self._id_column == record_id).limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            int: Total number of records
        """
        statement = select(func.count()).select_from(self.model)
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def update_fields(self, record_id: UUID, changes: dict[str, Any]) -> ModelT | None:
        """
        Write only the given columns with a single ``UPDATE ... SET``.

        Args:
            record_id: Record UUID
            changes: Column name to new value

        Returns:
            ModelT | None: The refreshed record, or None if it does not exist
        """
        if changes:
            statement = (
                update(self.model)
                .where(self._id_column == record_id)
                .values(**changes)
                .execution_options(synchronize_session=False)
            )
            await self._execute(statement)
        record = await self.get_by_id(record_id)
        if record is not None:
            await self.session.refresh(record)
        return record

    async def delete(self, record_id: UUID) -> bool:
        """
        Delete a record by ID.

        Args:
            record_id: Record UUID

        Returns:
            bool: True if record was deleted, False if not found
        """
        statement = delete(self.model).where(self._id_column == record_id)
        result = await self._execute(statement)
        return bool(result.rowcount)

    async def _execute(self, statement: Any) -> Any:
        """
        Execute a write statement, translating driver errors.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseConnectionError: If the connection was lost
            DatabaseError: For other database errors
        """
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            raise self._database_error(e, "Database operation failed") from e

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record and refresh it from the database with error handling.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseConnectionError: If the connection was lost
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise self._database_error(e, "Failed to save record") from e

    @staticmethod
    def _database_error(e: SQLAlchemyError, action: str) -> DatabaseError:
        if isinstance(e, IntegrityError):
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                return DuplicateEntryError(detail=error_msg)
            return DatabaseError(detail=f"Database integrity error: {error_msg}")
        if isinstance(e, DBAPIError) and e.connection_invalidated:
            return DatabaseConnectionError()
        return DatabaseError(detail=f"{action}: {e}")

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
            statement = statement.where(self._id_column != exclude_id)

        statement = statement.limit(1)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none() is not None
