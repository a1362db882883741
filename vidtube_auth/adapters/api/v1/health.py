from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel

from vidtube_auth.core.config.settings import settings
from vidtube_auth.infrastructure.database.async_db import check_database_health

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    env: str
    database: str
    timestamp: datetime


@router.get("", response_model=HealthResponse)
async def health_check():
    """Reports whether the service and its database are reachable."""
    database_healthy = await check_database_health()
    return HealthResponse(
        status="ok" if database_healthy else "degraded",
        env=settings.APP_ENV,
        database="healthy" if database_healthy else "unhealthy",
        timestamp=datetime.now(timezone.utc),
    )
