"""Application factory for creating and configuring the FastAPI application.

This module provides a factory function to create a FastAPI application with
middleware, exception handlers and routers registered.
"""

from fastapi import FastAPI
from fastapi.responses import JSONResponse

from vidtube_auth.adapters.api.v1 import api_router
from vidtube_auth.core.config.settings import settings
from vidtube_auth.core.handlers import register_exception_handlers
from vidtube_auth.core.lifecycle import create_lifespan_manager
from vidtube_auth.core.middleware import configure_middleware


def create_application() -> FastAPI:
    """Create and configure the FastAPI application.

    Interactive docs are only exposed when DEBUG is enabled.

    Returns:
        FastAPI: The configured FastAPI application instance
    """
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Credential and session service for the VidTube platform.",
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url=None,
        openapi_url="/openapi.json" if settings.DEBUG else None,
        lifespan=create_lifespan_manager(),
        default_response_class=JSONResponse,
    )

    configure_middleware(app)
    register_exception_handlers(app)
    app.include_router(api_router, prefix="/api/v1")

    return app
