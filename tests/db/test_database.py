# tests/db/test_database.py
"""Tests for the request scoped transaction."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pytest_mock.plugin import MockerFixture
from sqlalchemy.exc import OperationalError

from blogapi.db import database
from blogapi.errors import DuplicateEntryError, TransactionError


@pytest.fixture
def mock_session(mocker: MockerFixture) -> AsyncMock:
    session = AsyncMock()
    maker = MagicMock()
    maker.return_value.__aenter__.return_value = session
    maker.return_value.__aexit__.return_value = False
    mocker.patch.object(database, "async_session_maker", maker)
    return session


@pytest.mark.asyncio
async def test_commits_on_clean_exit(mock_session: AsyncMock) -> None:
    async with database.transaction() as session:
        assert session is mock_session

    mock_session.commit.assert_awaited_once()
    mock_session.rollback.assert_not_awaited()


@pytest.mark.asyncio
async def test_rolls_back_on_app_error(mock_session: AsyncMock) -> None:
    with pytest.raises(DuplicateEntryError):
        async with database.transaction():
            raise DuplicateEntryError

    mock_session.rollback.assert_awaited_once()
    mock_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_rolls_back_on_unexpected_error(mock_session: AsyncMock) -> None:
    with pytest.raises(RuntimeError):
        async with database.transaction():
            raise RuntimeError("handler crashed")

    mock_session.rollback.assert_awaited_once()
    mock_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_commit(mock_session: AsyncMock) -> None:
    mock_session.commit.side_effect = OperationalError("COMMIT", {}, Exception("gone"))

    with pytest.raises(TransactionError) as exc_info:
        async with database.transaction():
            pass

    assert exc_info.value.status_code == 500
    mock_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_session_yields_transactional_session(mock_session: AsyncMock) -> None:
    sessions = database.get_session()

    assert await anext(sessions) is mock_session
    with pytest.raises(StopAsyncIteration):
        await anext(sessions)

    mock_session.commit.assert_awaited_once()
