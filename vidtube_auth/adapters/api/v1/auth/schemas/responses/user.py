"""Response model for user data."""

from datetime import datetime

from vidtube_auth.domain.entities.user import UserProfile

from ..base import CamelModel


class UserOut(CamelModel):
    """Sanitized representation of a user. Never carries the password hash or tokens."""

    id: int
    username: str
    email: str
    full_name: str
    avatar: str
    cover_image: str = ""
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserOut":
        return cls(
            id=profile.id,
            username=profile.username,
            email=profile.email,
            full_name=profile.full_name,
            avatar=profile.avatar_url,
            cover_image=profile.cover_image_url,
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
