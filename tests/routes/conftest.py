# tests/routes/conftest.py
"""Pytest fixtures for route tests."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from blogapi.dependencies import dependencies as deps
from blogapi.main import app
from blogapi.managers.rate_limiter import limiter
from blogapi.managers.token_manager import create_access_token
from blogapi.models import UserDB
from blogapi.schemas.ai import GeneratedText


def _bearer(user: UserDB) -> dict[str, str]:
    token, _ = create_access_token(user.id, user.username, user.role)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def auth_headers(sample_user: UserDB) -> dict[str, str]:
    """Create auth headers with a valid access token."""
    return _bearer(sample_user)


@pytest.fixture
def other_auth_headers(other_user: UserDB) -> dict[str, str]:
    return _bearer(other_user)


@pytest.fixture
def admin_auth_headers(admin_user: UserDB) -> dict[str, str]:
    """Create auth headers with an admin access token."""
    return _bearer(admin_user)


@pytest.fixture
def ai_client() -> MagicMock:
    mock = MagicMock()
    mock.configured = True
    mock.do_service = AsyncMock(return_value=GeneratedText(text="A Title. Intro\n\nBody."))
    return mock


@pytest.fixture
async def client(
    user_repo,
    blog_repo,
    comment_repo,
    interaction_repo,
    refresh_repo,
    reset_repo,
    mail_service,
    ai_client,
) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client wired to in-memory repositories."""
    limiter.enabled = False
    app.dependency_overrides.update(
        {
            deps.get_user_repository: lambda: user_repo,
            deps.get_blog_repository: lambda: blog_repo,
            deps.get_comment_repository: lambda: comment_repo,
            deps.get_interaction_repository: lambda: interaction_repo,
            deps.get_refresh_token_repository: lambda: refresh_repo,
            deps.get_reset_token_repository: lambda: reset_repo,
            deps.get_mail_service: lambda: mail_service,
            deps.get_ai_client_state: lambda: ai_client,
        },
    )
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides.clear()
    limiter.enabled = True
