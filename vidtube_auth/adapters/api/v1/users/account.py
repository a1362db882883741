"""Account routes for the authenticated user: profile read and updates."""

from typing import Annotated, Optional

from fastapi import APIRouter, File, UploadFile

from vidtube_auth.adapters.api.v1.auth.dependencies import Accounts, CurrentUser
from vidtube_auth.adapters.api.v1.auth.schemas import ApiResponse, UpdateAccountRequest, UserOut
from vidtube_auth.adapters.api.v1.auth.utils import to_asset_upload

router = APIRouter(tags=["account"])


@router.get("/current-user", response_model=ApiResponse[UserOut], summary="Get the current user")
async def get_current_user_details(current_user: CurrentUser, accounts: Accounts):
    profile = await accounts.get_profile(current_user.id)
    return ApiResponse[UserOut].ok(UserOut.from_profile(profile), message="Current user fetched successfully")


@router.patch(
    "/update-account",
    response_model=ApiResponse[UserOut],
    summary="Update account details",
    responses={
        400: {"description": "No field supplied"},
        406: {"description": "Username unchanged or already taken"},
        409: {"description": "Email already registered"},
    },
)
async def update_account_details(
    payload: UpdateAccountRequest, current_user: CurrentUser, accounts: Accounts
):
    profile = await accounts.update_account_details(
        current_user.id,
        full_name=payload.full_name,
        email=payload.email,
        username=payload.username,
    )
    return ApiResponse[UserOut].ok(
        UserOut.from_profile(profile), message="Account details updated successfully"
    )


@router.patch("/avatar", response_model=ApiResponse[UserOut], summary="Replace the avatar")
async def update_avatar(
    current_user: CurrentUser,
    accounts: Accounts,
    avatar: Annotated[Optional[UploadFile], File()] = None,
):
    """Upload a new avatar and delete the previous one from the media host."""
    profile = await accounts.update_avatar(current_user.id, await to_asset_upload(avatar))
    return ApiResponse[UserOut].ok(UserOut.from_profile(profile), message="Avatar updated successfully")


@router.patch("/cover-image", response_model=ApiResponse[UserOut], summary="Replace the cover image")
async def update_cover_image(
    current_user: CurrentUser,
    accounts: Accounts,
    cover_image: Annotated[Optional[UploadFile], File(alias="coverImage")] = None,
):
    profile = await accounts.update_cover_image(current_user.id, await to_asset_upload(cover_image))
    return ApiResponse[UserOut].ok(
        UserOut.from_profile(profile), message="Cover image updated successfully"
    )
