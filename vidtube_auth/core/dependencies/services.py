"""FastAPI dependency providers for services and adapters.

Stateless collaborators (the token issuer, the password verifier, the media
client and the cookie policy) are built once per process; the repository and
the services wrapping it are built per request around the request's session.
Tests swap any of them through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from vidtube_auth.core.config.settings import settings
from vidtube_auth.domain.interfaces.media import IAssetStorage
from vidtube_auth.domain.interfaces.repositories import IUserRepository
from vidtube_auth.domain.services.account.account_service import AccountService
from vidtube_auth.domain.services.auth.password import PasswordVerifier
from vidtube_auth.domain.services.auth.session import SessionLifecycle
from vidtube_auth.domain.services.auth.token import TokenIssuer
from vidtube_auth.domain.value_objects.tokens import TokenSigningConfig
from vidtube_auth.infrastructure.database.async_db import get_async_db
from vidtube_auth.infrastructure.media.cloudinary import CloudinaryAssetStorage
from vidtube_auth.infrastructure.repositories.user_repository import UserRepository

AsyncDB = Annotated[AsyncSession, Depends(get_async_db)]


@lru_cache
def get_token_issuer() -> TokenIssuer:
    return TokenIssuer(TokenSigningConfig.from_settings(settings))


@lru_cache
def get_password_verifier() -> PasswordVerifier:
    return PasswordVerifier(work_factor=settings.BCRYPT_WORK_FACTOR)


@lru_cache
def get_asset_storage() -> IAssetStorage:
    return CloudinaryAssetStorage.from_settings(settings)


def get_user_repository(db: AsyncDB) -> IUserRepository:
    return UserRepository(db)


def get_session_lifecycle(
    user_repository: Annotated[IUserRepository, Depends(get_user_repository)],
    password_verifier: Annotated[PasswordVerifier, Depends(get_password_verifier)],
    token_issuer: Annotated[TokenIssuer, Depends(get_token_issuer)],
    asset_storage: Annotated[IAssetStorage, Depends(get_asset_storage)],
) -> SessionLifecycle:
    return SessionLifecycle(
        user_repository=user_repository,
        password_verifier=password_verifier,
        token_issuer=token_issuer,
        asset_storage=asset_storage,
        revoke_sessions_on_password_change=settings.REVOKE_SESSIONS_ON_PASSWORD_CHANGE,
    )


def get_account_service(
    user_repository: Annotated[IUserRepository, Depends(get_user_repository)],
    asset_storage: Annotated[IAssetStorage, Depends(get_asset_storage)],
) -> AccountService:
    return AccountService(user_repository=user_repository, asset_storage=asset_storage)


Sessions = Annotated[SessionLifecycle, Depends(get_session_lifecycle)]
Accounts = Annotated[AccountService, Depends(get_account_service)]
