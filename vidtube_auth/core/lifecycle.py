"""Application lifecycle management.

This module handles application startup and shutdown events.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from vidtube_auth.core.config.settings import settings
from vidtube_auth.core.dependencies.services import get_asset_storage
from vidtube_auth.core.logging import logger
from vidtube_auth.infrastructure.database.async_db import create_db_and_tables, dispose_engine


def create_lifespan_manager():
    """Create the application lifespan manager.

    Returns:
        AsyncContextManager: The lifespan manager for the FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Creates the user tables on startup; on shutdown closes the media client and the database pool."""
        await create_db_and_tables()
        logger.info("application_startup", env=settings.APP_ENV, version=settings.VERSION)

        yield

        await get_asset_storage().close()
        await dispose_engine()
        logger.info("application_shutdown", env=settings.APP_ENV)

    return lifespan
