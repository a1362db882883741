from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, Text
from sqlmodel import Column, Field, SQLModel, String


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Represents a registered account and the single refresh token it owns.

    `username` and `email` are stored lowercased by the services that create
    and update users; the unique constraints are therefore case-insensitive in
    practice.

    Attributes:
        id: Database identifier, opaque to API callers.
        username: Unique login handle.
        email: Unique email address, also accepted at login.
        full_name: Display name.
        avatar_url: Public URL of the avatar image on the media host.
        cover_image_url: Public URL of the cover image, empty when absent.
        password_hash: bcrypt hash of the password.
        refresh_token: The only refresh token currently redeemable for this
            user. ``None`` after logout.
        created_at: Creation timestamp.
        updated_at: Timestamp of the last write to the record.
    """

    __tablename__ = "users"

    id: Optional[int] = Field(
        default=None,
        primary_key=True,
        description="The unique identifier for the user.",
    )
    username: str = Field(
        sa_column=Column(String(50), unique=True, index=True, nullable=False),
        description="Unique, lowercased username.",
    )
    email: str = Field(
        sa_column=Column(String(255), unique=True, index=True, nullable=False),
        description="Unique, lowercased email address.",
    )
    full_name: str = Field(sa_column=Column(String(100), nullable=False))
    avatar_url: str = Field(sa_column=Column(String(512), nullable=False))
    cover_image_url: str = Field(default="", sa_column=Column(String(512), nullable=False, default=""))
    password_hash: str = Field(sa_column=Column(String(255), nullable=False))
    refresh_token: Optional[str] = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=_utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )


@dataclass(frozen=True)
class UserProfile:
    """Sanitized, immutable view of a `User`.

    It never carries the password hash or the refresh token, so it is the only
    shape handed back across the service boundary.
    """

    id: int
    username: str
    email: str
    full_name: str
    avatar_url: str
    cover_image_url: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserProfile":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            full_name=user.full_name,
            avatar_url=user.avatar_url,
            cover_image_url=user.cover_image_url or "",
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "full_name": self.full_name,
            "avatar_url": self.avatar_url,
            "cover_image_url": self.cover_image_url,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
