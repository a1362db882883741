"""Token value objects.

These value objects describe signed tokens and the immutable signing
configuration they are minted with.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Literal, Optional

TokenType = Literal["access", "refresh"]


@dataclass(frozen=True)
class TokenSigningConfig:
    """Signing material loaded once at startup and injected into the issuer.

    Access and refresh tokens use distinct secrets; construction fails when
    they are equal or empty.
    """

    access_secret: str
    refresh_secret: str
    algorithm: str = "HS256"
    issuer: str = "vidtube-auth"
    audience: str = "vidtube:api:v1"
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=10)

    def __post_init__(self):
        if not self.access_secret or not self.refresh_secret:
            raise ValueError("Token signing secrets cannot be empty")
        if self.access_secret == self.refresh_secret:
            raise ValueError("Access and refresh tokens must be signed with different secrets")
        if self.access_ttl >= self.refresh_ttl:
            raise ValueError("Access tokens must expire before refresh tokens")

    @classmethod
    def from_settings(cls, settings) -> "TokenSigningConfig":
        return cls(
            access_secret=settings.ACCESS_TOKEN_SECRET.get_secret_value(),
            refresh_secret=settings.REFRESH_TOKEN_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            access_ttl=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            refresh_ttl=timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS),
        )


@dataclass(frozen=True)
class TokenClaims:
    """Verified claims of a decoded token."""

    subject_id: int
    token_type: TokenType
    token_id: str
    issued_at: datetime
    expires_at: datetime
    username: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
