"""Session lifecycle: registration, login, logout, refresh and password change.

A user is in one of three states:

* anonymous: no token pair issued yet,
* authenticated: a refresh token is stored on the user record,
* logged out: the stored refresh token has been cleared.

The stored refresh token is the only one that can be redeemed. Login and
refresh overwrite it, logout clears it, and refresh swaps it atomically so a
token can be exchanged at most once.
"""

import secrets
from dataclasses import dataclass
from typing import Optional

from structlog import get_logger

from vidtube_auth.core.exceptions import (
    AssetUploadError,
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    MissingCredentialFieldError,
    PasswordReuseError,
    RefreshTokenSupersededError,
    TokenExpiredError,
    TokenSignatureError,
    UserNotFoundError,
    ValidationError,
    VidTubeError,
)
from vidtube_auth.core.logging import mask_identifier
from vidtube_auth.domain.entities.user import User, UserProfile
from vidtube_auth.domain.interfaces.media import IAssetStorage
from vidtube_auth.domain.interfaces.repositories import IUserRepository
from vidtube_auth.domain.services.auth.password import PasswordVerifier
from vidtube_auth.domain.services.auth.token import TokenIssuer
from vidtube_auth.domain.value_objects.assets import AssetUpload, StoredAsset
from vidtube_auth.domain.value_objects.tokens import TokenPair

logger = get_logger(__name__)


def _normalize(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip().lower()
    return value or None


@dataclass(frozen=True)
class LoginResult:
    user: UserProfile
    tokens: TokenPair


class SessionLifecycle:
    """Orchestrates the credential and token lifecycle of a user.

    Attributes:
        user_repository (IUserRepository): Durable store for user records.
        password_verifier (PasswordVerifier): bcrypt hashing and verification.
        token_issuer (TokenIssuer): Mints and verifies token pairs.
        asset_storage (IAssetStorage): Media host for avatar and cover images.
        revoke_sessions_on_password_change (bool): Clear the stored refresh
            token when the password changes.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        password_verifier: PasswordVerifier,
        token_issuer: TokenIssuer,
        asset_storage: IAssetStorage,
        revoke_sessions_on_password_change: bool = True,
    ):
        self.user_repository = user_repository
        self.password_verifier = password_verifier
        self.token_issuer = token_issuer
        self.asset_storage = asset_storage
        self.revoke_sessions_on_password_change = revoke_sessions_on_password_change

    async def register(
        self,
        username: str,
        email: str,
        full_name: str,
        password: str,
        avatar: Optional[AssetUpload],
        cover_image: Optional[AssetUpload] = None,
    ) -> UserProfile:
        """Create a new account.

        Args:
            username: Login handle, stored lowercased.
            email: Email address, stored lowercased.
            full_name: Display name.
            password: Plaintext password, stored only as a bcrypt hash.
            avatar: Mandatory avatar image.
            cover_image: Optional cover image.

        Returns:
            UserProfile: The sanitized record that was created.

        Raises:
            ValidationError: If a text field is blank or the avatar is missing.
            DuplicateUserError: If the username or email is already registered.
            AssetUploadError: If the avatar upload fails.
        """
        fields = [username, email, full_name, password]
        if any(field is None or not field.strip() for field in fields):
            raise ValidationError("All fields are required")

        username = _normalize(username)
        email = _normalize(email)
        full_name = full_name.strip()

        existing = await self.user_repository.find_by_username_or_email(username, email)
        if existing:
            logger.info(
                "Registration rejected for existing identity",
                username=mask_identifier(username),
                email=mask_identifier(email),
            )
            raise DuplicateUserError()

        if avatar is None or avatar.is_empty:
            raise ValidationError("Avatar file is required")

        stored_avatar = await self.asset_storage.upload(avatar)
        if stored_avatar is None or not stored_avatar.url:
            raise AssetUploadError("Failed to upload avatar file")

        stored_cover: Optional[StoredAsset] = None
        if cover_image is not None and not cover_image.is_empty:
            stored_cover = await self.asset_storage.upload(cover_image)
            if stored_cover is None:
                logger.warning("Cover image upload failed, continuing without it")

        new_user = User(
            username=username,
            email=email,
            full_name=full_name,
            avatar_url=stored_avatar.url,
            cover_image_url=stored_cover.url if stored_cover else "",
            password_hash=self.password_verifier.hash(password),
        )
        try:
            created = await self.user_repository.create(new_user)
        except VidTubeError:
            await self._discard_assets(stored_avatar, stored_cover)
            raise

        logger.info("New user registered", user_id=created.id, username=mask_identifier(username))
        return UserProfile.from_user(created)

    async def login(
        self,
        password: str,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> LoginResult:
        """Authenticate by username or email and issue a new token pair.

        The new refresh token replaces any previously stored one.

        Raises:
            MissingCredentialFieldError: If neither username nor email is given.
            UserNotFoundError: If no user matches.
            InvalidCredentialsError: If the password is wrong.
        """
        username = _normalize(username)
        email = _normalize(email)
        if not username and not email:
            raise MissingCredentialFieldError()

        user = await self.user_repository.find_by_username_or_email(username, email)
        if user is None:
            logger.warning(
                "Login attempted for unknown user",
                username=mask_identifier(username),
                email=mask_identifier(email),
            )
            raise UserNotFoundError()

        if not self.password_verifier.verify(password, user.password_hash):
            logger.warning("Invalid credentials for user", user_id=user.id)
            raise InvalidCredentialsError()

        tokens = self.token_issuer.issue_token_pair(user)
        await self.user_repository.set_refresh_token(user.id, tokens.refresh_token)

        logger.info("User logged in", user_id=user.id)
        return LoginResult(user=UserProfile.from_user(user), tokens=tokens)

    async def logout(self, user_id: int) -> None:
        """Clear the stored refresh token so no issued refresh token can be redeemed.

        Raises:
            UserNotFoundError: If the user no longer exists.
        """
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        await self.user_repository.clear_refresh_token(user_id)
        logger.info("User logged out", user_id=user_id)

    async def refresh(self, presented_token: Optional[str]) -> TokenPair:
        """Exchange the current refresh token for a new token pair.

        The stored token is replaced with a conditional write that only succeeds
        while the stored value still equals the presented one, so two concurrent
        exchanges of the same token cannot both succeed.

        Raises:
            InvalidRefreshTokenError: For every failure. ``reason`` is one of
                ``missing``, ``expired``, ``bad_signature``, ``invalid``,
                ``user_not_found`` or ``superseded``.
        """
        if not presented_token:
            raise InvalidRefreshTokenError("Unauthorized request", reason="missing")

        try:
            claims = self.token_issuer.verify_refresh_token(presented_token)
        except TokenExpiredError as e:
            raise InvalidRefreshTokenError(reason="expired") from e
        except TokenSignatureError as e:
            raise InvalidRefreshTokenError(reason="bad_signature") from e
        except InvalidTokenError as e:
            raise InvalidRefreshTokenError(reason="invalid") from e

        user = await self.user_repository.get_by_id(claims.subject_id)
        if user is None:
            raise InvalidRefreshTokenError(reason="user_not_found")

        if not user.refresh_token or not secrets.compare_digest(
            presented_token.encode(), user.refresh_token.encode()
        ):
            raise RefreshTokenSupersededError()

        tokens = self.token_issuer.issue_token_pair(user)
        swapped = await self.user_repository.compare_and_swap_refresh_token(
            user.id, expected=presented_token, new=tokens.refresh_token
        )
        if not swapped:
            raise RefreshTokenSupersededError()

        logger.info("Tokens refreshed", user_id=user.id)
        return tokens

    async def change_password(
        self,
        old_password: str,
        new_password: str,
        user_id: Optional[int] = None,
        username: Optional[str] = None,
        email: Optional[str] = None,
    ) -> None:
        """Replace the password of a user.

        The user is resolved by ``user_id`` first and by username or email
        otherwise. When session revocation is enabled the stored refresh token
        is cleared in the same write as the new hash.

        Raises:
            ValidationError: If either password is blank.
            MissingCredentialFieldError: If no way to identify the user is given.
            UserNotFoundError: If no user matches.
            InvalidCredentialsError: If the old password is wrong.
            PasswordReuseError: If the new password equals the old one.
        """
        if not old_password or not new_password:
            raise ValidationError("Old and new password are required")

        user = await self._resolve_user(user_id, username, email)

        if not self.password_verifier.verify(old_password, user.password_hash):
            logger.warning("Invalid old password provided for password change", user_id=user.id)
            raise InvalidCredentialsError("Invalid old password")

        if self.password_verifier.verify(new_password, user.password_hash):
            logger.warning("Password change attempted with same password", user_id=user.id)
            raise PasswordReuseError()

        await self.user_repository.update_password_hash(
            user.id,
            self.password_verifier.hash(new_password),
            revoke_refresh_token=self.revoke_sessions_on_password_change,
        )
        logger.info(
            "Password changed",
            user_id=user.id,
            sessions_revoked=self.revoke_sessions_on_password_change,
        )

    async def _resolve_user(
        self, user_id: Optional[int], username: Optional[str], email: Optional[str]
    ) -> User:
        user = None
        if user_id is not None:
            user = await self.user_repository.get_by_id(user_id)

        username = _normalize(username)
        email = _normalize(email)
        if user is None and (username or email):
            user = await self.user_repository.find_by_username_or_email(username, email)
        elif user_id is None and not (username or email):
            raise MissingCredentialFieldError()

        if user is None:
            raise UserNotFoundError()
        return user

    async def _discard_assets(self, *assets: Optional[StoredAsset]) -> None:
        for asset in assets:
            if asset is None:
                continue
            if not await self.asset_storage.delete(asset.public_id):
                logger.warning("Orphaned media asset could not be deleted", public_id=asset.public_id)
