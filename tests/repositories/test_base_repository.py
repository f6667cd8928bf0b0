# tests/repositories/test_base_repository.py
"""Tests for driver error translation in the base repository."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from blogapi.errors import DatabaseConnectionError, DatabaseError, DuplicateEntryError
from blogapi.models.interaction import InteractionType
from blogapi.repositories.blog import BlogRepository
from blogapi.repositories.interaction import InteractionRepository


@pytest.fixture
def mock_session() -> MagicMock:
    session = MagicMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.rollback = AsyncMock()
    return session


def _unique_violation() -> IntegrityError:
    return IntegrityError(
        "INSERT INTO blog_interactions ...",
        {},
        Exception('duplicate key value violates unique constraint "uq_blog_interactions_reaction"'),
    )


@pytest.mark.asyncio
async def test_concurrent_duplicate_reaction_is_a_conflict(mock_session: MagicMock) -> None:
    mock_session.flush.side_effect = _unique_violation()
    repo = InteractionRepository(mock_session)

    with pytest.raises(DuplicateEntryError) as exc_info:
        await repo.add(uuid4(), "user-1", InteractionType.LIKE)

    assert exc_info.value.status_code == 409
    assert "uq_blog_interactions_reaction" in exc_info.value.detail
    mock_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_other_integrity_errors_are_server_errors(mock_session: MagicMock) -> None:
    mock_session.flush.side_effect = IntegrityError(
        "INSERT",
        {},
        Exception('insert or update violates foreign key constraint "blog_interactions_blog_id_fkey"'),
    )

    with pytest.raises(DatabaseError) as exc_info:
        await InteractionRepository(mock_session).add(uuid4(), "user-1", InteractionType.VIEW)

    assert not isinstance(exc_info.value, DuplicateEntryError)
    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_lost_connection_on_write(mock_session: MagicMock) -> None:
    mock_session.execute.side_effect = OperationalError(
        "UPDATE blogs ...",
        {},
        Exception("connection reset by peer"),
        connection_invalidated=True,
    )

    with pytest.raises(DatabaseConnectionError) as exc_info:
        await BlogRepository(mock_session).adjust_counters(uuid4(), likes=1)

    assert exc_info.value.detail == "Failed to connect to the database"


@pytest.mark.asyncio
async def test_generic_write_failure(mock_session: MagicMock) -> None:
    mock_session.execute.side_effect = SQLAlchemyError("boom")

    with pytest.raises(DatabaseError) as exc_info:
        await BlogRepository(mock_session).delete(uuid4())

    assert exc_info.value.detail == "Database operation failed: boom"
