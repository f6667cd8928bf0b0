# tests/routes/test_ai_routes.py
"""Tests for the blog suggestion endpoint."""

from httpx import AsyncClient
from pytest import mark

from blogapi.errors import AiQuotaExceededError


@mark.asyncio
async def test_suggestion(client: AsyncClient, auth_headers, ai_client) -> None:
    response = await client.post(
        "/ai/suggestion",
        json={"prompt": "testing in python"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json() == {
        "blog": {
            "title": "A Title.",
            "paragraphs": ["Intro", "Body."],
            "paragraph_count": 2,
        },
    }
    ai_client.do_service.assert_awaited_once()


@mark.asyncio
async def test_suggestion_blank_prompt(client: AsyncClient, auth_headers, ai_client) -> None:
    response = await client.post("/ai/suggestion", json={"prompt": "  "}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "prompt cannot be empty"}
    ai_client.do_service.assert_not_awaited()


@mark.asyncio
async def test_suggestion_requires_auth(client: AsyncClient) -> None:
    response = await client.post("/ai/suggestion", json={"prompt": "anything"})

    assert response.status_code == 401


@mark.asyncio
async def test_suggestion_provider_failure(client: AsyncClient, auth_headers, ai_client) -> None:
    ai_client.do_service.side_effect = AiQuotaExceededError()

    response = await client.post("/ai/suggestion", json={"prompt": "python"}, headers=auth_headers)

    assert response.status_code == 500
    assert response.json()["error"] == "AI generation failed"
