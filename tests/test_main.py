"""Tests for main application endpoints."""

from httpx import AsyncClient


async def test_root_endpoint(client: AsyncClient):
    """Test the root endpoint."""
    response = await client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Outage Journal API"
    assert data["version"] == "0.1.0"
    assert data["status"] == "healthy"


async def test_health_check(client: AsyncClient):
    """Test the health check endpoint."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_request_id_header(client: AsyncClient):
    """Every response carries the request id assigned by the logging middleware."""
    response = await client.get("/")
    assert response.headers["X-Request-ID"]
    assert "X-Process-Time" in response.headers


async def test_caller_request_id_is_kept(client: AsyncClient):
    """A request id sent by the caller is echoed back and used in error bodies."""
    headers = {"X-Request-ID": "journal-client-42"}
    response = await client.get("/api/v1/does-not-exist", headers=headers)
    assert response.headers["X-Request-ID"] == "journal-client-42"
    assert response.json()["requestId"] == "journal-client-42"


async def test_unknown_route_uses_error_body(client: AsyncClient):
    """HTTP errors are rendered with the common error body."""
    response = await client.get("/api/v1/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert body["type"] == "HTTPException"
    assert body["requestId"]
