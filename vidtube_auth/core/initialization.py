"""Application initialization and setup.

This module handles the tasks required before the application starts:
environment variable loading and logging configuration.
"""

from dotenv import load_dotenv

from vidtube_auth.core.config.settings import settings
from vidtube_auth.core.logging import configure_logging


def initialize_application() -> None:
    """Initialize the application.

    1. Load environment variables
    2. Configure logging
    """
    load_dotenv(override=False)
    configure_logging(log_level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)
