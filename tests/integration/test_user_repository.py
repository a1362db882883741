import pytest

from vidtube_auth.core.exceptions import DuplicateUserError
from vidtube_auth.domain.entities.user import User
from vidtube_auth.infrastructure.repositories.user_repository import UserRepository


def _new_user(username="alice", email="a@x.com") -> User:
    return User(
        username=username,
        email=email,
        full_name="Alice Liddell",
        avatar_url="https://res.cloudinary.com/test-cloud/image/upload/v1/vidtube/a.png",
        password_hash="$2b$04$notarealhashnotarealhashnotarealhashnotarealhashnota",
    )


@pytest.mark.asyncio
async def test_create_assigns_id_and_defaults(user_repository):
    user = await user_repository.create(_new_user())

    assert user.id is not None
    assert user.cover_image_url == ""
    assert user.refresh_token is None
    assert user.created_at is not None


@pytest.mark.asyncio
@pytest.mark.parametrize("username, email", [("alice", "other@x.com"), ("other", "a@x.com")])
async def test_create_rejects_duplicate_identity(user_repository, username, email):
    await user_repository.create(_new_user())

    with pytest.raises(DuplicateUserError):
        await user_repository.create(_new_user(username=username, email=email))


@pytest.mark.asyncio
async def test_lookups_are_case_insensitive(user_repository):
    created = await user_repository.create(_new_user())

    assert (await user_repository.get_by_id(created.id)).username == "alice"
    assert (await user_repository.get_by_username(" ALICE ")).id == created.id
    assert (await user_repository.get_by_email("A@X.COM")).id == created.id
    assert (await user_repository.find_by_username_or_email(None, "a@x.com")).id == created.id
    assert (await user_repository.find_by_username_or_email("alice", "nobody@x.com")).id == created.id
    assert await user_repository.find_by_username_or_email(None, None) is None
    assert await user_repository.get_by_id(created.id + 100) is None


@pytest.mark.asyncio
async def test_compare_and_swap_only_matches_current_token(user_repository):
    user = await user_repository.create(_new_user())
    await user_repository.set_refresh_token(user.id, "token-1")

    assert await user_repository.compare_and_swap_refresh_token(user.id, expected="token-1", new="token-2")
    assert not await user_repository.compare_and_swap_refresh_token(user.id, expected="token-1", new="token-3")

    stored = await user_repository.get_by_id(user.id)
    assert stored.refresh_token == "token-2"


@pytest.mark.asyncio
async def test_compare_and_swap_across_sessions(session_factory):
    async with session_factory() as setup_session:
        user = await UserRepository(setup_session).create(_new_user())
        await UserRepository(setup_session).set_refresh_token(user.id, "token-1")

    async with session_factory() as first, session_factory() as second:
        first_repository = UserRepository(first)
        second_repository = UserRepository(second)
        assert (await first_repository.get_by_id(user.id)).refresh_token == "token-1"
        assert (await second_repository.get_by_id(user.id)).refresh_token == "token-1"

        won = await first_repository.compare_and_swap_refresh_token(user.id, "token-1", "token-A")
        lost = await second_repository.compare_and_swap_refresh_token(user.id, "token-1", "token-B")

        assert (won, lost) == (True, False)
        assert (await second_repository.get_by_id(user.id)).refresh_token == "token-A"


@pytest.mark.asyncio
async def test_clear_refresh_token_blocks_later_swaps(user_repository):
    user = await user_repository.create(_new_user())
    await user_repository.set_refresh_token(user.id, "token-1")

    await user_repository.clear_refresh_token(user.id)

    assert (await user_repository.get_by_id(user.id)).refresh_token is None
    assert not await user_repository.compare_and_swap_refresh_token(user.id, "token-1", "token-2")


@pytest.mark.asyncio
async def test_update_password_hash_can_revoke_refresh_token(user_repository):
    user = await user_repository.create(_new_user())
    await user_repository.set_refresh_token(user.id, "token-1")

    await user_repository.update_password_hash(user.id, "new-hash")
    assert (await user_repository.get_by_id(user.id)).refresh_token == "token-1"

    await user_repository.update_password_hash(user.id, "newer-hash", revoke_refresh_token=True)
    stored = await user_repository.get_by_id(user.id)
    assert stored.password_hash == "newer-hash"
    assert stored.refresh_token is None


@pytest.mark.asyncio
async def test_update_profile(user_repository):
    user = await user_repository.create(_new_user())

    updated = await user_repository.update_profile(user.id, full_name="Alice L", email="alice@x.com")

    assert updated.full_name == "Alice L"
    assert (await user_repository.get_by_email("alice@x.com")).id == user.id


@pytest.mark.asyncio
async def test_update_profile_rejects_credential_columns(user_repository):
    user = await user_repository.create(_new_user())

    with pytest.raises(ValueError):
        await user_repository.update_profile(user.id, password_hash="x")


@pytest.mark.asyncio
async def test_update_profile_rejects_taken_username(user_repository):
    await user_repository.create(_new_user())
    bob = await user_repository.create(_new_user(username="bob", email="b@x.com"))

    with pytest.raises(DuplicateUserError):
        await user_repository.update_profile(bob.id, username="alice")


@pytest.mark.asyncio
async def test_update_profile_unknown_user(user_repository):
    assert await user_repository.update_profile(999, full_name="Nobody") is None
