"""/users/logout route module."""

from fastapi import APIRouter, Response, status

from vidtube_auth.adapters.api.v1.auth.dependencies import CurrentUser, DeliveryPolicy, Sessions
from vidtube_auth.adapters.api.v1.auth.schemas import ApiResponse

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout current user",
    responses={401: {"description": "Missing or invalid access token"}},
)
async def logout_user(
    response: Response,
    current_user: CurrentUser,
    sessions: Sessions,
    delivery: DeliveryPolicy,
):
    """Clear the stored refresh token and both token cookies."""
    await sessions.logout(current_user.id)
    delivery.clear(response)
    return ApiResponse.ok({}, message="User logged out")
