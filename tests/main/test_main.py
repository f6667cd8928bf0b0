import uuid

from httpx import AsyncClient
from pytest import mark


@mark.asyncio
async def test_root_endpoint(client: AsyncClient) -> None:
    """Test root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["message"].startswith("Welcome to ")


@mark.asyncio
async def test_health_check(client: AsyncClient) -> None:
    """Test health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["version"] == "1.0.0"
    services = data["services"]
    # The test client does not run the lifespan, so no AI client exists
    assert services["ai_client"] == "not_initialized"
    assert services["mail"] == "disabled"
    assert services["ai_circuit_breaker"]["name"] == "gemini_ai"
    assert services["email_circuit_breaker"]["state"] in {"closed", "open", "half_open"}


@mark.asyncio
async def test_health_is_not_rate_limited(client: AsyncClient) -> None:
    headers = {"X-API-Key": str(uuid.uuid4())}
    for _ in range(10):
        response = await client.get("/health", headers=headers)
        assert response.status_code == 200


@mark.asyncio
async def test_security_headers(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
    assert response.headers["X-Request-ID"]


@mark.asyncio
async def test_request_id_is_echoed(client: AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@mark.asyncio
async def test_unknown_route_uses_error_body(client: AsyncClient) -> None:
    response = await client.get("/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@mark.asyncio
async def test_metrics_rate_limit(client: AsyncClient) -> None:
    unique_key = str(uuid.uuid4())
    headers = {"X-API-Key": unique_key}

    # Hit the endpoint 5 times (allowed)
    for _ in range(5):
        response = await client.get("/metrics", headers=headers)
        assert response.status_code == 200
        assert "api_metrics" in response.json()

    # The 6th request should be rate limited
    response = await client.get("/metrics", headers=headers)
    assert response.status_code == 429
    assert response.json()["error"] == "Rate limit exceeded"
