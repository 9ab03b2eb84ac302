"""Tests for health endpoints."""

from httpx import AsyncClient


async def test_root_health_check(mock_client: AsyncClient):
    response = await mock_client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_api_health_check(mock_client: AsyncClient):
    response = await mock_client.get("/api/health")

    data = response.json()
    assert data["status"] == "healthy"
    assert "uptime_seconds" in data
    assert response.headers["X-Request-ID"]


async def test_request_id_is_echoed(mock_client: AsyncClient):
    response = await mock_client.get("/health", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"
    assert "X-Response-Time" in response.headers


async def test_db_health(api_client: AsyncClient):
    response = await api_client.get("/api/health/db")

    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"]["status"] == "available"
    assert data["database"]["details"]["migrations_applied"] >= 1
