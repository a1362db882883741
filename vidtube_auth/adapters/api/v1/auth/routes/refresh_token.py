"""/users/refresh-token route module."""

from typing import Optional

from fastapi import APIRouter, Request, Response, status

from vidtube_auth.adapters.api.v1.auth.cookies import REFRESH_TOKEN_COOKIE
from vidtube_auth.adapters.api.v1.auth.dependencies import DeliveryPolicy, Sessions
from vidtube_auth.adapters.api.v1.auth.schemas import (
    ApiResponse,
    RefreshTokenRequest,
    TokenPairOut,
)

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[TokenPairOut],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Rotate the token pair",
    responses={401: {"description": "Refresh token missing, invalid, expired or already used"}},
)
async def refresh_access_token(
    request: Request,
    response: Response,
    sessions: Sessions,
    delivery: DeliveryPolicy,
    payload: Optional[RefreshTokenRequest] = None,
):
    """Exchange the current refresh token for a new pair.

    The token is read from the ``refreshToken`` cookie, falling back to the
    ``refreshToken`` body field. A token can be exchanged once only.
    """
    presented = request.cookies.get(REFRESH_TOKEN_COOKIE) or (payload.refresh_token if payload else None)
    tokens = await sessions.refresh(presented)
    delivery.apply(response, tokens)
    return ApiResponse[TokenPairOut].ok(
        TokenPairOut(**delivery.body_tokens(tokens)), message="Access token refreshed"
    )
