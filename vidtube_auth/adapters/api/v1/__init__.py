"""API v1 router configuration."""

from fastapi import APIRouter

from .auth import router as auth_router
from .health import router as health_router
from .users import router as account_router

api_router = APIRouter()

api_router.include_router(health_router, prefix="/healthcheck", tags=["health"])
api_router.include_router(auth_router, prefix="/users")
api_router.include_router(account_router, prefix="/users")
