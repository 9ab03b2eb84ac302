"""Fixtures for API tests."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from repairshop.api.dependencies import get_app_settings
from repairshop.api.main import app


@pytest.fixture
async def api_client(db, isolated_settings) -> AsyncGenerator[AsyncClient, None]:
    """Client over the real app, backed by the per-test database."""
    app.dependency_overrides[get_app_settings] = lambda: isolated_settings
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
async def mock_client() -> AsyncGenerator[AsyncClient, None]:
    """Client with no database; tests install their own overrides."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
