"""Authentication settings: token signing, token delivery and password hashing.
"""

import logging
from typing import Literal, Optional

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class AuthSettings(BaseSettings):
    """Defines settings for JWT signing, cookie delivery and session policy.

    Access and refresh tokens are signed with two distinct secrets so that
    possession of one secret cannot be used to forge the other token class.

    Security Note:
        - Both secrets must be long random strings, stored outside version control.
        - COOKIE_SECURE must stay enabled anywhere other than local development.
    """

    # JWT settings
    ACCESS_TOKEN_SECRET: SecretStr = Field(..., min_length=32)
    REFRESH_TOKEN_SECRET: SecretStr = Field(..., min_length=32)
    JWT_ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"
    JWT_ISSUER: str = "vidtube-auth"
    JWT_AUDIENCE: str = "vidtube:api:v1"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(ge=1, le=24 * 60, default=15)
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(ge=1, default=10)

    # Password hashing
    BCRYPT_WORK_FACTOR: int = Field(ge=4, le=31, default=12)

    # Token delivery policy (cookies for browsers, body for non-browser clients)
    TOKEN_DELIVERY_COOKIE: bool = True
    TOKEN_DELIVERY_BODY: bool = True
    COOKIE_SECURE: bool = True
    COOKIE_SAMESITE: Literal["strict", "lax", "none"] = "strict"
    COOKIE_DOMAIN: Optional[str] = None

    # Session policy
    REVOKE_SESSIONS_ON_PASSWORD_CHANGE: bool = True

    @model_validator(mode="after")
    def _validate_token_policy(self) -> "AuthSettings":
        """Rejects token settings that would fail when the issuer is built.

        Both token classes must use distinct secrets, access tokens must expire
        before refresh tokens, and at least one delivery channel must be on.

        Returns:
            Self instance once validated.
        """
        if (
            self.ACCESS_TOKEN_SECRET.get_secret_value()
            == self.REFRESH_TOKEN_SECRET.get_secret_value()
        ):
            error_msg = "ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ."
            logger.error(error_msg)
            raise ValueError(error_msg)

        if self.ACCESS_TOKEN_EXPIRE_MINUTES >= self.REFRESH_TOKEN_EXPIRE_DAYS * 24 * 60:
            error_msg = "ACCESS_TOKEN_EXPIRE_MINUTES must be shorter than REFRESH_TOKEN_EXPIRE_DAYS."
            logger.error(error_msg)
            raise ValueError(error_msg)

        if not (self.TOKEN_DELIVERY_COOKIE or self.TOKEN_DELIVERY_BODY):
            error_msg = "At least one of TOKEN_DELIVERY_COOKIE or TOKEN_DELIVERY_BODY must be enabled."
            logger.error(error_msg)
            raise ValueError(error_msg)

        return self
