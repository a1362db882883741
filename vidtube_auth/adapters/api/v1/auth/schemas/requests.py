"""Request payload models for the user endpoints."""

from typing import Optional

from pydantic import EmailStr, Field, model_validator

from .base import CamelModel


class LoginRequest(CamelModel):
    """Payload expected by ``POST /users/login``. Either username or email is required."""

    username: Optional[str] = Field(None, max_length=50, examples=["alice"])
    email: Optional[str] = Field(None, max_length=255, examples=["alice@example.com"])
    password: str = Field(..., min_length=1, examples=["s3cret"])


class RefreshTokenRequest(CamelModel):
    """Optional body of ``POST /users/refresh-token``; the cookie is used otherwise."""

    refresh_token: Optional[str] = Field(None, examples=["eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."])


class ChangePasswordRequest(CamelModel):
    """Payload expected by ``POST /users/change-password``.

    ``username``/``email`` identify the user only when the request carries no
    access token.
    """

    old_password: str = Field(..., min_length=1, description="Current password for verification")
    new_password: str = Field(..., min_length=1, description="Replacement password")
    username: Optional[str] = None
    email: Optional[str] = None


class UpdateAccountRequest(CamelModel):
    """Payload expected by ``PATCH /users/update-account``."""

    full_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(None, min_length=3, max_length=50, pattern=r"^[A-Za-z0-9_.-]+$")

    @model_validator(mode="after")
    def _require_one_field(self) -> "UpdateAccountRequest":
        if not (self.full_name or self.email or self.username):
            raise ValueError("At least one of fullName, email or username is required")
        return self
