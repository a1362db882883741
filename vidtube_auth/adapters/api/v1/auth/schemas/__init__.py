"""Request and response schemas for the user endpoints."""

# flake8: noqa: F401

from .base import CamelModel
from .requests import (
    ChangePasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    UpdateAccountRequest,
)
from .responses.envelope import ApiResponse
from .responses.token import LoginOut, TokenPairOut
from .responses.user import UserOut

__all__ = [
    "CamelModel",
    "ApiResponse",
    "ChangePasswordRequest",
    "LoginRequest",
    "LoginOut",
    "RefreshTokenRequest",
    "TokenPairOut",
    "UpdateAccountRequest",
    "UserOut",
]
