# tests/middleware/test_timeout_middleware.py
"""Tests for the request deadline middleware."""

from asyncio import sleep

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from blogapi.middleware import TimeoutMiddleware


def _app(timeout: float) -> FastAPI:
    app = FastAPI()
    app.add_middleware(TimeoutMiddleware, timeout=timeout)

    @app.get("/slow")
    async def slow() -> dict[str, str]:
        await sleep(0.5)
        return {"status": "done"}

    @app.get("/fast")
    async def fast() -> dict[str, str]:
        return {"status": "done"}

    return app


@pytest.mark.asyncio
async def test_slow_request_times_out() -> None:
    async with AsyncClient(base_url="http://test", transport=ASGITransport(app=_app(0.05))) as ac:
        response = await ac.get("/slow")

    assert response.status_code == 504
    assert response.json() == {"error": "Request timed out"}


@pytest.mark.asyncio
async def test_fast_request_passes() -> None:
    async with AsyncClient(base_url="http://test", transport=ASGITransport(app=_app(1.0))) as ac:
        response = await ac.get("/fast")

    assert response.status_code == 200
    assert response.json() == {"status": "done"}
