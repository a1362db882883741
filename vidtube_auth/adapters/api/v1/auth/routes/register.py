"""/users/register route module.

Registration is a multipart form so the avatar and cover image can be sent
together with the account fields.
"""

from typing import Annotated, Optional

from fastapi import APIRouter, File, Form, UploadFile, status
from pydantic import EmailStr

from vidtube_auth.adapters.api.v1.auth.dependencies import Sessions
from vidtube_auth.adapters.api.v1.auth.schemas import ApiResponse, UserOut
from vidtube_auth.adapters.api.v1.auth.utils import to_asset_upload

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[UserOut],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        400: {"description": "Missing field, missing avatar or failed upload"},
        409: {"description": "Username or email already registered"},
    },
)
async def register_user(
    sessions: Sessions,
    username: Annotated[str, Form(min_length=1, max_length=50)],
    email: Annotated[EmailStr, Form()],
    full_name: Annotated[str, Form(alias="fullName", min_length=1, max_length=100)],
    password: Annotated[str, Form(min_length=1)],
    avatar: Annotated[Optional[UploadFile], File()] = None,
    cover_image: Annotated[Optional[UploadFile], File(alias="coverImage")] = None,
):
    """Create an account and return it without credentials."""
    profile = await sessions.register(
        username=username,
        email=email,
        full_name=full_name,
        password=password,
        avatar=await to_asset_upload(avatar),
        cover_image=await to_asset_upload(cover_image),
    )
    return ApiResponse[UserOut].ok(
        UserOut.from_profile(profile),
        message="User registered successfully",
        status_code=status.HTTP_201_CREATED,
    )
