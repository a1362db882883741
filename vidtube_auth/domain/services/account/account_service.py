"""Account maintenance for authenticated users: profile reads and updates."""

from typing import Literal, Optional

from structlog import get_logger

from vidtube_auth.core.exceptions import (
    AssetDeleteError,
    AssetUploadError,
    DuplicateUserError,
    UserNotFoundError,
    UsernameTakenError,
    UsernameUnchangedError,
    ValidationError,
)
from vidtube_auth.domain.entities.user import User, UserProfile
from vidtube_auth.domain.interfaces.media import IAssetStorage
from vidtube_auth.domain.interfaces.repositories import IUserRepository
from vidtube_auth.domain.value_objects.assets import AssetUpload

logger = get_logger(__name__)

ImageSlot = Literal["avatar", "cover_image"]


class AccountService:
    """Reads and updates the profile fields of an existing user.

    Credentials and tokens are out of reach of this service; they are only
    changed by `SessionLifecycle`.
    """

    def __init__(self, user_repository: IUserRepository, asset_storage: IAssetStorage):
        self.user_repository = user_repository
        self.asset_storage = asset_storage

    async def get_profile(self, user_id: int) -> UserProfile:
        return UserProfile.from_user(await self._get_user(user_id))

    async def update_account_details(
        self,
        user_id: int,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
        username: Optional[str] = None,
    ) -> UserProfile:
        """Update display name, email and/or username.

        Raises:
            ValidationError: If no field is supplied.
            UsernameUnchangedError: If the new username equals the current one.
            UsernameTakenError: If another user holds the new username.
            DuplicateUserError: If another user holds the new email.
        """
        full_name = full_name.strip() if full_name else None
        email = email.strip().lower() if email else None
        username = username.strip().lower() if username else None
        if not (full_name or email or username):
            raise ValidationError("At least one field is required")

        user = await self._get_user(user_id)
        changes = {}

        if username:
            if username == user.username:
                raise UsernameUnchangedError()
            if await self.user_repository.get_by_username(username):
                raise UsernameTakenError()
            changes["username"] = username

        if email and email != user.email:
            holder = await self.user_repository.get_by_email(email)
            if holder and holder.id != user.id:
                raise DuplicateUserError("Email is already registered")
            changes["email"] = email

        if full_name:
            changes["full_name"] = full_name

        if not changes:
            return UserProfile.from_user(user)

        updated = await self.user_repository.update_profile(user_id, **changes)
        if updated is None:
            raise UserNotFoundError()
        logger.info("Account details updated", user_id=user_id, fields=sorted(changes))
        return UserProfile.from_user(updated)

    async def update_avatar(self, user_id: int, upload: Optional[AssetUpload]) -> UserProfile:
        return await self._replace_image(user_id, upload, slot="avatar")

    async def update_cover_image(self, user_id: int, upload: Optional[AssetUpload]) -> UserProfile:
        return await self._replace_image(user_id, upload, slot="cover_image")

    async def _replace_image(
        self, user_id: int, upload: Optional[AssetUpload], slot: ImageSlot
    ) -> UserProfile:
        """Upload a new image, delete the one it replaces, then store the new URL.

        Raises:
            ValidationError: If no file was sent.
            AssetUploadError: If the media host rejected the upload.
            AssetDeleteError: If the previous image could not be deleted.
        """
        label = "Avatar" if slot == "avatar" else "Cover image"
        if upload is None or upload.is_empty:
            raise ValidationError(f"{label} file is missing")

        user = await self._get_user(user_id)
        previous_url = user.avatar_url if slot == "avatar" else user.cover_image_url

        stored = await self.asset_storage.upload(upload)
        if stored is None or not stored.url:
            raise AssetUploadError(f"Failed to upload {label.lower()}")

        if previous_url:
            public_id = self.asset_storage.public_id_from_url(previous_url)
            if not public_id or not await self.asset_storage.delete(public_id):
                logger.warning("Previous image could not be deleted", user_id=user_id, slot=slot)
                raise AssetDeleteError("Failed to delete old image")

        field = "avatar_url" if slot == "avatar" else "cover_image_url"
        updated = await self.user_repository.update_profile(user_id, **{field: stored.url})
        if updated is None:
            raise UserNotFoundError()
        logger.info("Profile image replaced", user_id=user_id, slot=slot)
        return UserProfile.from_user(updated)

    async def _get_user(self, user_id: int) -> User:
        user = await self.user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError()
        return user
