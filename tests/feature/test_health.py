import pytest


@pytest.mark.asyncio
async def test_health_check_ok(async_client, mocker):
    mocker.patch("vidtube_auth.adapters.api.v1.health.check_database_health", return_value=True)

    response = await async_client.get("/api/v1/healthcheck")

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["database"] == "healthy"
    assert body["env"] == "test"


@pytest.mark.asyncio
async def test_health_check_degraded(async_client, mocker):
    mocker.patch("vidtube_auth.adapters.api.v1.health.check_database_health", return_value=False)

    response = await async_client.get("/api/v1/healthcheck")

    assert response.status_code == 200
    assert response.json()["status"] == "degraded"


@pytest.mark.asyncio
async def test_request_id_is_echoed(async_client, mocker):
    mocker.patch("vidtube_auth.adapters.api.v1.health.check_database_health", return_value=True)

    response = await async_client.get("/api/v1/healthcheck", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
