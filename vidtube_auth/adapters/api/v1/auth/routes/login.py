"""/users/login route module."""

from fastapi import APIRouter, Response, status

from vidtube_auth.adapters.api.v1.auth.dependencies import DeliveryPolicy, Sessions
from vidtube_auth.adapters.api.v1.auth.schemas import ApiResponse, LoginOut, LoginRequest, UserOut

router = APIRouter()


@router.post(
    "",
    response_model=ApiResponse[LoginOut],
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
    summary="Authenticate a user",
    responses={
        400: {"description": "Neither username nor email supplied"},
        401: {"description": "Invalid credentials"},
        404: {"description": "User does not exist"},
    },
)
async def login_user(
    payload: LoginRequest,
    response: Response,
    sessions: Sessions,
    delivery: DeliveryPolicy,
):
    """Authenticate with username or email and password.

    The token pair is delivered as http-only cookies and/or in the body,
    according to the configured delivery policy.
    """
    result = await sessions.login(
        password=payload.password,
        username=payload.username,
        email=payload.email,
    )
    delivery.apply(response, result.tokens)
    data = LoginOut(user=UserOut.from_profile(result.user), **delivery.body_tokens(result.tokens))
    return ApiResponse[LoginOut].ok(data, message="User logged in successfully")
