"""Tests for health and root endpoints."""

import pytest
from httpx import AsyncClient

from app.api.deps import get_llm_client
from app.main import app

pytestmark = pytest.mark.asyncio


async def test_health(client: AsyncClient) -> None:
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_detailed_health(client: AsyncClient) -> None:
    response = await client.get("/health/detailed")
    assert response.status_code == 200
    data = response.json()
    assert data["database"]["status"] == "connected"
    assert data["llm"]["configured"] is True
    assert data["smtp"]["configured"] is True


async def test_detailed_health_without_llm(client: AsyncClient) -> None:
    app.dependency_overrides[get_llm_client] = lambda: None

    response = await client.get("/health/detailed")
    assert response.json()["llm"]["configured"] is False


async def test_root(client: AsyncClient) -> None:
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json()["docs"] == "/docs"
