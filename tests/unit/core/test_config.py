import pytest
from pydantic import ValidationError

from vidtube_auth.core.config.app import AppSettings
from vidtube_auth.core.config.auth import AuthSettings
from vidtube_auth.core.config.database import DatabaseSettings
from vidtube_auth.core.config.settings import settings
from vidtube_auth.domain.value_objects.tokens import TokenSigningConfig

ACCESS = "a" * 32
REFRESH = "r" * 32


def test_test_environment_settings_are_loaded():
    assert settings.APP_ENV == "test"
    assert settings.DATABASE_URL == "sqlite+aiosqlite://"
    assert settings.BCRYPT_WORK_FACTOR == 4


def test_auth_settings_defaults():
    auth = AuthSettings(ACCESS_TOKEN_SECRET=ACCESS, REFRESH_TOKEN_SECRET=REFRESH)

    assert auth.ACCESS_TOKEN_EXPIRE_MINUTES == 15
    assert auth.REFRESH_TOKEN_EXPIRE_DAYS == 10
    assert auth.JWT_ALGORITHM == "HS256"
    assert auth.COOKIE_SECURE is True
    assert auth.REVOKE_SESSIONS_ON_PASSWORD_CHANGE is True


def test_auth_settings_reject_shared_secret():
    with pytest.raises(ValidationError, match="must differ"):
        AuthSettings(ACCESS_TOKEN_SECRET=ACCESS, REFRESH_TOKEN_SECRET=ACCESS)


def test_auth_settings_reject_short_secret():
    with pytest.raises(ValidationError):
        AuthSettings(ACCESS_TOKEN_SECRET="short", REFRESH_TOKEN_SECRET=REFRESH)


def test_auth_settings_require_a_delivery_channel():
    with pytest.raises(ValidationError, match="TOKEN_DELIVERY"):
        AuthSettings(
            ACCESS_TOKEN_SECRET=ACCESS,
            REFRESH_TOKEN_SECRET=REFRESH,
            TOKEN_DELIVERY_COOKIE=False,
            TOKEN_DELIVERY_BODY=False,
        )


def test_allowed_origins_are_split():
    app_settings = AppSettings(ALLOWED_ORIGINS="https://a.example, https://b.example,")

    assert app_settings.ALLOWED_ORIGINS == ["https://a.example", "https://b.example"]


def test_database_url_is_assembled_from_parts():
    db = DatabaseSettings(
        DATABASE_URL="",
        POSTGRES_USER="vid",
        POSTGRES_PASSWORD="pw",
        POSTGRES_HOST="db",
        POSTGRES_PORT=6543,
        POSTGRES_DB="tube",
    )

    assert db.DATABASE_URL == "postgresql+asyncpg://vid:pw@db:6543/tube"


def test_auth_settings_require_access_tokens_to_expire_first():
    with pytest.raises(ValidationError, match="shorter than"):
        AuthSettings(
            ACCESS_TOKEN_SECRET=ACCESS,
            REFRESH_TOKEN_SECRET=REFRESH,
            ACCESS_TOKEN_EXPIRE_MINUTES=24 * 60,
            REFRESH_TOKEN_EXPIRE_DAYS=1,
        )


def test_auth_settings_build_a_signing_config():
    auth = AuthSettings(
        ACCESS_TOKEN_SECRET=ACCESS,
        REFRESH_TOKEN_SECRET=REFRESH,
        ACCESS_TOKEN_EXPIRE_MINUTES=24 * 60 - 1,
        REFRESH_TOKEN_EXPIRE_DAYS=1,
    )

    config = TokenSigningConfig.from_settings(auth)

    assert config.access_ttl < config.refresh_ttl
