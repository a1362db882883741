"""User credential router: registration, login, logout, token refresh and password change."""

from fastapi import APIRouter

from .routes import change_password as change_password_route
from .routes import login as login_route
from .routes import logout as logout_route
from .routes import refresh_token as refresh_token_route
from .routes import register as register_route

router = APIRouter(tags=["auth"])

router.include_router(register_route.router, prefix="/register")
router.include_router(login_route.router, prefix="/login")
router.include_router(logout_route.router, prefix="/logout")
router.include_router(refresh_token_route.router, prefix="/refresh-token")
router.include_router(change_password_route.router, prefix="/change-password")

__all__ = ["router"]
