"""
Logging configuration module for structured logging.

This module configures the application's logging system using structlog.
It provides structured logging with JSON formatting for production and
human-readable console output for development.

The logging configuration includes:
- Timestamp formatting
- Log level inclusion
- Request-scoped context (request_id) merged from contextvars
- JSON/Console output based on environment
"""

import logging

import structlog


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configures the application's logging system.

    Args:
        log_level: Minimum level for the standard library root logger.
        json_logs: Render JSON lines when True, colored console output otherwise.
    """
    logging.basicConfig(format="%(message)s", level=log_level.upper())

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def mask_identifier(value: str | None) -> str:
    """Mask a username or email for log output, keeping only its first characters."""
    if not value:
        return ""
    local, sep, domain = value.partition("@")
    visible = local[:2]
    masked = f"{visible}{'*' * max(len(local) - len(visible), 1)}"
    return f"{masked}{sep}{domain}" if sep else masked


# Create a singleton logger instance for the application
logger = structlog.get_logger()
