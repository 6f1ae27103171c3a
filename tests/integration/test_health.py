"""Integration tests for the health and infrastructure endpoints."""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


@pytest.mark.asyncio
async def test_live(client: AsyncClient):
    response = await client.get("/live")

    assert response.json()["status"] == "alive"


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client: AsyncClient):
    response = await client.get("/health", headers={"X-Correlation-ID": "cid_test"})

    assert response.headers["X-Correlation-ID"] == "cid_test"


@pytest.mark.asyncio
async def test_correlation_id_is_generated(client: AsyncClient):
    response = await client.get("/health")

    assert response.headers["X-Correlation-ID"].startswith("cid_")
