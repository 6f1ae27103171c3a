"""Fixtures for HTTP integration tests."""

import pytest
import pytest_asyncio
from httpx import AsyncClient


@pytest.fixture
def api_prefix() -> str:
    return "/api/v1"


@pytest.fixture
def create_user(client: AsyncClient, api_prefix: str):
    """Return a coroutine function that creates a user over HTTP."""

    async def _create(name: str, email: str) -> dict:
        response = await client.post(f"{api_prefix}/users", json={"name": name, "email": email})
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_account(client: AsyncClient, api_prefix: str):
    """Return a coroutine function that creates an account over HTTP."""

    async def _create(account_number: str, primary_user_id: int, balance=None) -> dict:
        payload = {"account_number": account_number, "primary_user_id": primary_user_id}
        if balance is not None:
            payload["balance"] = balance
        response = await client.post(f"{api_prefix}/accounts", json=payload)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest_asyncio.fixture
async def ada(create_user) -> dict:
    return await create_user("Ada", "ada@example.com")


@pytest_asyncio.fixture
async def grace(create_user) -> dict:
    return await create_user("Grace", "grace@example.com")
