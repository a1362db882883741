from unittest.mock import AsyncMock

import pytest

from vidtube_auth.domain.interfaces.repositories import IUserRepository
from vidtube_auth.domain.services.auth.session import SessionLifecycle


@pytest.fixture
def user_repository():
    """Provides a mocked user repository that finds nothing by default."""
    repository = AsyncMock(spec=IUserRepository)
    repository.get_by_id.return_value = None
    repository.find_by_username_or_email.return_value = None
    repository.compare_and_swap_refresh_token.return_value = True
    return repository


@pytest.fixture
def session_lifecycle(user_repository, password_verifier, token_issuer, asset_storage):
    return SessionLifecycle(
        user_repository=user_repository,
        password_verifier=password_verifier,
        token_issuer=token_issuer,
        asset_storage=asset_storage,
    )
