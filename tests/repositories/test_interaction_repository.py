# tests/repositories/test_interaction_repository.py
"""Tests for the SQL the interaction repository emits."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql

from blogapi.repositories.interaction import InteractionRepository

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def mock_session() -> MagicMock:
    result = MagicMock()
    result.scalar_one_or_none.return_value = None
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    return session


def _sql(session: MagicMock) -> tuple[str, dict]:
    compiled = session.execute.await_args.args[0].compile(dialect=postgresql.dialect())
    return " ".join(str(compiled).split()), compiled.params


@pytest.mark.asyncio
async def test_active_view_checks_expiry(mock_session: MagicMock) -> None:
    repo = InteractionRepository(mock_session)

    found = await repo.find_active_view(uuid4(), "anonymous", "10.0.0.1", "curl/8", NOW)

    assert found is None
    sql, params = _sql(mock_session)
    assert "blog_interactions.expires_at > %(expires_at_1)s" in sql
    assert params["expires_at_1"] == NOW
    assert "blog_interactions.ip_address = " in sql
    assert "blog_interactions.user_agent = " in sql
    assert {"anonymous", "10.0.0.1", "curl/8"} <= set(params.values())


@pytest.mark.asyncio
async def test_authenticated_view_ignores_client_fingerprint(mock_session: MagicMock) -> None:
    await InteractionRepository(mock_session).find_active_view(uuid4(), "user-1", None, None, NOW)

    sql, _ = _sql(mock_session)
    assert "blog_interactions.expires_at > " in sql
    assert "ip_address =" not in sql
    assert "user_agent =" not in sql
