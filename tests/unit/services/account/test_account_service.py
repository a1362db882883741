from unittest.mock import AsyncMock

import pytest

from vidtube_auth.core.exceptions import (
    AssetDeleteError,
    AssetUploadError,
    DuplicateUserError,
    UserNotFoundError,
    UsernameTakenError,
    UsernameUnchangedError,
    ValidationError,
)
from vidtube_auth.domain.interfaces.repositories import IUserRepository
from vidtube_auth.domain.services.account.account_service import AccountService
from vidtube_auth.domain.value_objects.assets import AssetUpload
from tests.factories.user import create_fake_image, create_fake_user


@pytest.fixture
def user_repository():
    repository = AsyncMock(spec=IUserRepository)
    repository.get_by_username.return_value = None
    repository.get_by_email.return_value = None
    return repository


@pytest.fixture
def account_service(user_repository, asset_storage):
    return AccountService(user_repository, asset_storage)


@pytest.fixture
def alice(user_repository):
    user = create_fake_user(id=1, username="alice", email="a@x.com", full_name="Alice")
    user_repository.get_by_id.return_value = user
    return user


def _apply_changes(user):
    async def _update_profile(user_id, **fields):
        for name, value in fields.items():
            setattr(user, name, value)
        return user

    return _update_profile


@pytest.mark.asyncio
async def test_get_profile(account_service, alice):
    profile = await account_service.get_profile(1)

    assert profile.username == "alice"
    assert "password_hash" not in profile.to_dict()


@pytest.mark.asyncio
async def test_get_profile_unknown_user(account_service, user_repository):
    user_repository.get_by_id.return_value = None

    with pytest.raises(UserNotFoundError):
        await account_service.get_profile(42)


@pytest.mark.asyncio
async def test_update_account_details(account_service, user_repository, alice):
    user_repository.update_profile.side_effect = _apply_changes(alice)

    profile = await account_service.update_account_details(
        1, full_name=" Alice L ", email="Alice@Example.com", username="Alicel"
    )

    user_repository.update_profile.assert_awaited_once_with(
        1, username="alicel", email="alice@example.com", full_name="Alice L"
    )
    assert profile.username == "alicel"
    assert profile.email == "alice@example.com"


@pytest.mark.asyncio
async def test_update_account_details_requires_a_field(account_service, alice):
    with pytest.raises(ValidationError):
        await account_service.update_account_details(1, full_name="  ")


@pytest.mark.asyncio
async def test_update_account_details_same_username(account_service, alice):
    with pytest.raises(UsernameUnchangedError):
        await account_service.update_account_details(1, username="ALICE")


@pytest.mark.asyncio
async def test_update_account_details_username_taken(account_service, user_repository, alice):
    user_repository.get_by_username.return_value = create_fake_user(id=2, username="bob")

    with pytest.raises(UsernameTakenError):
        await account_service.update_account_details(1, username="bob")

    user_repository.update_profile.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_account_details_email_taken(account_service, user_repository, alice):
    user_repository.get_by_email.return_value = create_fake_user(id=2, email="b@x.com")

    with pytest.raises(DuplicateUserError):
        await account_service.update_account_details(1, email="b@x.com")


@pytest.mark.asyncio
async def test_update_account_details_without_changes(account_service, user_repository, alice):
    profile = await account_service.update_account_details(1, email="A@X.com")

    assert profile.email == "a@x.com"
    user_repository.update_profile.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_avatar_replaces_previous_image(account_service, user_repository, asset_storage, alice):
    previous = await asset_storage.upload(create_fake_image())
    alice.avatar_url = previous.url
    user_repository.update_profile.side_effect = _apply_changes(alice)

    profile = await account_service.update_avatar(1, create_fake_image("new.png"))

    assert asset_storage.deleted == [previous.public_id]
    assert profile.avatar_url != previous.url
    assert profile.avatar_url.startswith("https://res.cloudinary.com/")


@pytest.mark.asyncio
async def test_update_cover_image_without_previous_image(account_service, user_repository, asset_storage, alice):
    user_repository.update_profile.side_effect = _apply_changes(alice)

    profile = await account_service.update_cover_image(1, create_fake_image("cover.png"))

    assert asset_storage.deleted == []
    assert profile.cover_image_url
    assert user_repository.update_profile.call_args.kwargs == {"cover_image_url": profile.cover_image_url}


@pytest.mark.asyncio
@pytest.mark.parametrize("upload", [None, AssetUpload(filename="empty.png", content=b"", content_type="image/png")])
async def test_update_avatar_requires_file(account_service, alice, upload):
    with pytest.raises(ValidationError, match="Avatar file is missing"):
        await account_service.update_avatar(1, upload)


@pytest.mark.asyncio
async def test_update_avatar_upload_failure(account_service, user_repository, asset_storage, alice):
    asset_storage.fail_uploads = True

    with pytest.raises(AssetUploadError):
        await account_service.update_avatar(1, create_fake_image())

    user_repository.update_profile.assert_not_awaited()


@pytest.mark.asyncio
async def test_update_avatar_delete_failure(account_service, user_repository, asset_storage, alice):
    previous = await asset_storage.upload(create_fake_image())
    alice.avatar_url = previous.url
    asset_storage.fail_deletes = True

    with pytest.raises(AssetDeleteError):
        await account_service.update_avatar(1, create_fake_image("new.png"))

    user_repository.update_profile.assert_not_awaited()
