import pytest_asyncio

from tests.feature.helpers import login, register


@pytest_asyncio.fixture
async def alice(async_client):
    response = await register(async_client)
    assert response.status_code == 201
    return response.json()["data"]


@pytest_asyncio.fixture
async def alice_tokens(async_client, alice):
    response = await login(async_client, username="alice")
    assert response.status_code == 200
    return response.json()["data"]
