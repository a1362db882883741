"""Main application settings and configuration management.

This module composes all the application settings from the different modules
(app, database, auth, media) into a single, accessible `Settings` class.

It loads settings from environment variables and .env files, validates them,
and provides a single `settings` object for use throughout the application.

Environment Support:
- Development: Uses .env
- Test: Uses .env.test when present
- Staging: Uses .env.staging when present
- Production: Uses .env.production when present
"""

import logging
import os
from pathlib import Path

from pydantic_settings import SettingsConfigDict

from .app import AppSettings
from .auth import AuthSettings
from .database import DatabaseSettings
from .media import MediaSettings

logger = logging.getLogger(__name__)
logging.getLogger("passlib").setLevel(logging.ERROR)


class Settings(AppSettings, DatabaseSettings, AuthSettings, MediaSettings):
    """The main settings class that aggregates all application configurations.

    It inherits from all the specialized settings classes, providing a unified
    interface to all configuration parameters.

    Usage:
        - Access settings via the singleton instance `settings` throughout the application.
        - Token signing material is copied out of it once, at startup, into an
          immutable `TokenSigningConfig`.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", case_sensitive=True, extra="ignore"
    )

    def __init__(self, **kwargs):
        """Initialize settings with environment-specific configuration."""
        super().__init__(**kwargs)

        env = os.getenv("APP_ENV", "development")
        self._set_environment_defaults(env)

    def _set_environment_defaults(self, env: str) -> None:
        """Set environment-specific default values.

        Args:
            env: Environment name
        """
        if env == "development":
            self.DEBUG = True
            self.LOG_JSON = False
            # Local development usually runs over plain http
            self.COOKIE_SECURE = False
            logger.info("Debug mode enabled for development environment")

        logger.info(f"Application running in {env} environment")

    def validate_required_fields(self) -> None:
        """Validates that the settings needed outside of tests are present.

        Media credentials are only needed once an upload is attempted, so a
        missing value is logged rather than raised.
        """
        media_fields = ["CLOUDINARY_CLOUD_NAME", "CLOUDINARY_API_KEY"]
        missing_fields = [field for field in media_fields if not getattr(self, field, None)]
        if not self.CLOUDINARY_API_SECRET.get_secret_value():
            missing_fields.append("CLOUDINARY_API_SECRET")

        if missing_fields:
            logger.warning(
                f"Media uploads disabled, missing environment variables: {', '.join(missing_fields)}"
            )
        else:
            logger.info("All required environment variables are set.")


def create_settings() -> Settings:
    """Create settings instance with environment-specific configuration.

    Returns:
        Settings: Configured settings instance
    """
    env = os.getenv("APP_ENV", "development")

    env_files = {
        "development": ".env",
        "test": ".env.test",
        "staging": ".env.staging",
        "production": ".env.production",
    }

    env_file = env_files.get(env, ".env")

    if env != "development" and Path(env_file).exists():
        logger.info(f"Loading environment configuration from {env_file}")
        settings_instance = Settings(_env_file=env_file)
    elif Path(".env").exists():
        logger.info(f"Loading environment configuration from .env (environment: {env})")
        settings_instance = Settings()
    else:
        logger.warning(f"No .env file found, using environment variables only (environment: {env})")
        settings_instance = Settings()

    return settings_instance


# Create a singleton instance of the settings to be used across the application.
settings = create_settings()
settings.validate_required_fields()
