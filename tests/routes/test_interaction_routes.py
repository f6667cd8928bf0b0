# tests/routes/test_interaction_routes.py
"""Tests for like, dislike and view endpoints."""

from unittest.mock import AsyncMock
from uuid import uuid4

from httpx import AsyncClient
from pytest import mark

from blogapi.errors import DuplicateEntryError
from blogapi.models.interaction import InteractionType

BLOGS = "/api/v1/blogs"


@mark.asyncio
async def test_like_toggle(client: AsyncClient, auth_headers, blog_repo, other_user) -> None:
    blog = blog_repo.add_blog(other_user.id)

    first = await client.post(f"{BLOGS}/{blog.id}/like", headers=auth_headers)
    assert first.status_code == 200
    assert first.json() == {"message": "Blog liked successfully"}
    assert blog.like_count == 1

    second = await client.post(f"{BLOGS}/{blog.id}/like", headers=auth_headers)
    assert second.status_code == 200
    assert blog.like_count == 0


@mark.asyncio
async def test_dislike_switches_like(
    client: AsyncClient,
    auth_headers,
    blog_repo,
    interaction_repo,
    other_user,
) -> None:
    blog = blog_repo.add_blog(other_user.id)
    await client.post(f"{BLOGS}/{blog.id}/like", headers=auth_headers)

    response = await client.post(f"{BLOGS}/{blog.id}/dislike", headers=auth_headers)

    assert response.json() == {"message": "Blog disliked successfully"}
    assert (blog.like_count, blog.dislike_count) == (0, 1)
    assert interaction_repo.of_type(InteractionType.LIKE) == []


@mark.asyncio
async def test_like_requires_auth(client: AsyncClient, blog_repo, other_user) -> None:
    blog = blog_repo.add_blog(other_user.id)

    response = await client.post(f"{BLOGS}/{blog.id}/like")

    assert response.status_code == 401
    assert response.json()["error"] == "User not authenticated"
    assert blog.like_count == 0


@mark.asyncio
async def test_like_invalid_id(client: AsyncClient, auth_headers) -> None:
    response = await client.post(f"{BLOGS}/123/like", headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid blog ID"


@mark.asyncio
async def test_like_unknown_blog(client: AsyncClient, auth_headers) -> None:
    response = await client.post(f"{BLOGS}/{uuid4()}/dislike", headers=auth_headers)

    assert response.status_code == 404
    assert response.json()["error"] == "Blog not found"


@mark.asyncio
async def test_anonymous_view_is_deduplicated(
    client: AsyncClient,
    blog_repo,
    interaction_repo,
    other_user,
) -> None:
    blog = blog_repo.add_blog(other_user.id)
    headers = {"User-Agent": "pytest-browser"}

    for _ in range(3):
        response = await client.post(f"{BLOGS}/{blog.id}/view", headers=headers)
        assert response.status_code == 200
        assert response.json() == {"message": "Blog view recorded"}

    assert blog.view_count == 1
    (row,) = interaction_repo.of_type(InteractionType.VIEW)
    assert row.user_id == "anonymous"
    assert row.user_agent == "pytest-browser"


@mark.asyncio
async def test_different_agents_count_separately(client: AsyncClient, blog_repo, other_user) -> None:
    blog = blog_repo.add_blog(other_user.id)

    await client.post(f"{BLOGS}/{blog.id}/view", headers={"User-Agent": "agent-a"})
    await client.post(f"{BLOGS}/{blog.id}/view", headers={"User-Agent": "agent-b"})

    assert blog.view_count == 2


@mark.asyncio
async def test_authenticated_view_uses_user_id(
    client: AsyncClient,
    auth_headers,
    blog_repo,
    interaction_repo,
    sample_user,
    other_user,
) -> None:
    blog = blog_repo.add_blog(other_user.id)

    await client.post(f"{BLOGS}/{blog.id}/view", headers=auth_headers)
    await client.post(
        f"{BLOGS}/{blog.id}/view",
        headers={**auth_headers, "User-Agent": "another-device"},
    )

    assert blog.view_count == 1
    (row,) = interaction_repo.of_type(InteractionType.VIEW)
    assert row.user_id == str(sample_user.id)


@mark.asyncio
async def test_view_unknown_blog(client: AsyncClient) -> None:
    response = await client.post(f"{BLOGS}/{uuid4()}/view")

    assert response.status_code == 404


@mark.asyncio
async def test_concurrent_duplicate_like_is_a_conflict(
    client: AsyncClient,
    auth_headers,
    blog_repo,
    interaction_repo,
    other_user,
) -> None:
    blog = blog_repo.add_blog(other_user.id)
    detail = 'duplicate key value violates unique constraint "uq_blog_interactions_reaction"'
    interaction_repo.add = AsyncMock(side_effect=DuplicateEntryError(detail))

    response = await client.post(f"{BLOGS}/{blog.id}/like", headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["error"] == detail
    assert blog.like_count == 0
