import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from vidtube_auth.core.exceptions import (
    AssetDeleteError,
    AssetUploadError,
    DatabaseError,
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    PasswordReuseError,
    RefreshTokenSupersededError,
    UserNotFoundError,
    UsernameTakenError,
    ValidationError,
    VidTubeError,
)
from vidtube_auth.core.handlers import register_exception_handlers


class Payload(BaseModel):
    name: str


def _build_app(exc: Exception) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)

    @app.get("/boom")
    async def boom():
        raise exc

    @app.post("/echo")
    async def echo(payload: Payload):
        return payload

    return app


async def _call(app: FastAPI, method: str = "GET", path: str = "/boom", **kwargs):
    # Unhandled exceptions are re-raised by Starlette after the 500 response is sent
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        return await client.request(method, path, **kwargs)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "exc, status_code, message",
    [
        (ValidationError("All fields are required"), 400, "All fields are required"),
        (DuplicateUserError(), 409, "User with email or username already exists"),
        (InvalidCredentialsError(), 401, "Invalid user credentials"),
        (InvalidRefreshTokenError(reason="expired"), 401, "Refresh token is expired or invalid"),
        (RefreshTokenSupersededError(), 401, "Refresh token is expired or invalid"),
        (UserNotFoundError(), 404, "User does not exist"),
        (PasswordReuseError(), 406, "New password must differ from the old password"),
        (UsernameTakenError(), 406, "Username is already taken"),
        (AssetUploadError("Failed to upload avatar"), 400, "Failed to upload avatar"),
        (AssetDeleteError("Failed to delete old image"), 400, "Failed to delete old image"),
        (DatabaseError("connection reset"), 500, "A database error occurred."),
        (VidTubeError("something odd"), 500, "An unexpected error occurred."),
        (RuntimeError("secret internals"), 500, "An unexpected error occurred."),
    ],
)
async def test_errors_map_to_envelope(exc, status_code, message):
    response = await _call(_build_app(exc))

    assert response.status_code == status_code
    assert response.json() == {
        "statusCode": status_code,
        "message": message,
        "success": False,
        "errors": [],
    }


@pytest.mark.asyncio
async def test_request_validation_errors_are_400_with_field_details():
    response = await _call(_build_app(RuntimeError()), "POST", "/echo", json={})

    body = response.json()
    assert response.status_code == 400
    assert body["success"] is False
    assert body["message"] == "Invalid request"
    assert body["errors"][0]["field"] == "name"
