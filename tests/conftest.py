import os

# Settings are read once at import time, so the environment must be ready first.
os.environ["APP_ENV"] = "test"
os.environ["ACCESS_TOKEN_SECRET"] = "test-access-secret-0123456789abcdef0123456789"
os.environ["REFRESH_TOKEN_SECRET"] = "test-refresh-secret-fedcba9876543210fedcba98"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["BCRYPT_WORK_FACTOR"] = "4"
os.environ["LOG_JSON"] = "false"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from vidtube_auth.core.dependencies.services import get_asset_storage
from vidtube_auth.domain.services.auth.password import PasswordVerifier
from vidtube_auth.domain.services.auth.token import TokenIssuer
from vidtube_auth.domain.value_objects.tokens import TokenSigningConfig
from vidtube_auth.infrastructure.database.async_db import get_async_db
from vidtube_auth.infrastructure.repositories.user_repository import UserRepository
from vidtube_auth.main import app as application

from tests.factories.media import FakeAssetStorage


@pytest.fixture
def signing_config() -> TokenSigningConfig:
    return TokenSigningConfig(
        access_secret=os.environ["ACCESS_TOKEN_SECRET"],
        refresh_secret=os.environ["REFRESH_TOKEN_SECRET"],
    )


@pytest.fixture
def token_issuer(signing_config) -> TokenIssuer:
    return TokenIssuer(signing_config)


@pytest.fixture
def password_verifier() -> PasswordVerifier:
    return PasswordVerifier(work_factor=4)


@pytest.fixture
def asset_storage() -> FakeAssetStorage:
    return FakeAssetStorage()


@pytest_asyncio.fixture
async def engine():
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def user_repository(db_session) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def app(session_factory, asset_storage):
    async def _get_test_db():
        async with session_factory() as session:
            yield session

    application.dependency_overrides[get_async_db] = _get_test_db
    application.dependency_overrides[get_asset_storage] = lambda: asset_storage
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def async_client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
