"""Authenticated caller resolution.

The access token is read from the ``accessToken`` cookie first and from an
``Authorization: Bearer`` header otherwise.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from structlog import get_logger

from vidtube_auth.core.dependencies.services import get_token_issuer, get_user_repository
from vidtube_auth.core.exceptions import AuthenticationError, InvalidTokenError
from vidtube_auth.domain.entities.user import User
from vidtube_auth.domain.interfaces.repositories import IUserRepository
from vidtube_auth.domain.services.auth.token import TokenIssuer

__all__ = [
    "ACCESS_TOKEN_COOKIE",
    "get_access_token",
    "get_current_user",
    "get_optional_current_user",
    "CurrentUser",
    "OptionalCurrentUser",
]

logger = get_logger(__name__)

ACCESS_TOKEN_COOKIE = "accessToken"

bearer_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/users/login", auto_error=False)


def get_access_token(
    request: Request, bearer_token: Annotated[Optional[str], Depends(bearer_scheme)]
) -> Optional[str]:
    return request.cookies.get(ACCESS_TOKEN_COOKIE) or bearer_token


async def _resolve_user(
    token: str, token_issuer: TokenIssuer, user_repository: IUserRepository
) -> User:
    try:
        claims = token_issuer.verify_access_token(token)
    except InvalidTokenError as exc:
        logger.info("Access token rejected", error=exc.code)
        raise AuthenticationError("Invalid access token") from exc

    user = await user_repository.get_by_id(claims.subject_id)
    if user is None:
        logger.warning("Access token for deleted user", user_id=claims.subject_id)
        raise AuthenticationError("Invalid access token")
    return user


async def get_current_user(
    token: Annotated[Optional[str], Depends(get_access_token)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    user_repository: Annotated[IUserRepository, Depends(get_user_repository)],
) -> User:
    """Return the authenticated `User` or fail with 401."""
    if not token:
        raise AuthenticationError("Unauthorized request")
    return await _resolve_user(token, token_issuer, user_repository)


async def get_optional_current_user(
    token: Annotated[Optional[str], Depends(get_access_token)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    user_repository: Annotated[IUserRepository, Depends(get_user_repository)],
) -> Optional[User]:
    """Like `get_current_user`, but anonymous callers resolve to None.

    A token that is presented but invalid still fails with 401.
    """
    if not token:
        return None
    return await _resolve_user(token, token_issuer, user_repository)


CurrentUser = Annotated[User, Depends(get_current_user)]
OptionalCurrentUser = Annotated[Optional[User], Depends(get_optional_current_user)]
