"""/users/change-password route module."""

from fastapi import APIRouter, status

from vidtube_auth.adapters.api.v1.auth.dependencies import OptionalCurrentUser, Sessions
from vidtube_auth.adapters.api.v1.auth.schemas import ApiResponse, ChangePasswordRequest

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse,
    status_code=status.HTTP_200_OK,
    summary="Change password",
    responses={
        401: {"description": "Invalid access token or wrong old password"},
        404: {"description": "User does not exist"},
        406: {"description": "New password equals the old one"},
    },
)
async def change_password(
    payload: ChangePasswordRequest,
    current_user: OptionalCurrentUser,
    sessions: Sessions,
):
    """Change the password of the caller.

    Authenticated callers change their own password. Without an access token
    the user is identified by the ``username`` or ``email`` in the body.
    """
    await sessions.change_password(
        old_password=payload.old_password,
        new_password=payload.new_password,
        user_id=current_user.id if current_user else None,
        username=None if current_user else payload.username,
        email=None if current_user else payload.email,
    )
    return ApiResponse.ok({}, message="Password changed successfully")
