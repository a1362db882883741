"""
Asynchronous database utilities.

Key Components:
    - engine: The asynchronous SQLAlchemy engine.
    - AsyncSessionFactory: A factory for creating asynchronous database sessions.
    - get_async_db: FastAPI dependency yielding one session per request.
    - create_db_and_tables: Creates the tables on startup, retrying while the
      database is unreachable.
    - check_database_health: Round-trip query used by the health endpoint.

**Security Note**: Never log the connection URL, it embeds the database password.
"""

from typing import Any, AsyncGenerator, Dict

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from structlog import get_logger
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from vidtube_auth.core.config.settings import settings

# Register the table on SQLModel.metadata before create_all runs
from vidtube_auth.domain.entities.user import User  # noqa: F401

logger = get_logger(__name__)


def _engine_options(database_url: str) -> Dict[str, Any]:
    """Pool options for the configured backend.

    SQLite in-memory databases live inside a single connection, so they are
    shared through a StaticPool instead of a sized pool.
    """
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }
    return {
        "pool_size": settings.POSTGRES_POOL_SIZE,
        "max_overflow": settings.POSTGRES_MAX_OVERFLOW,
        "pool_pre_ping": True,
    }


engine = create_async_engine(
    settings.DATABASE_URL,
    echo=settings.DATABASE_ECHO,
    **_engine_options(settings.DATABASE_URL),
)

AsyncSessionFactory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields an AsyncSession.

    Rolls back the open transaction if the request fails and always closes
    the session.

    Yields:
        AsyncSession: An asynchronous database session for use in FastAPI routes.
    """
    async with AsyncSessionFactory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            logger.error("Async database session rollback due to error")
            raise


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=4, max=10),
    retry=retry_if_exception_type(OperationalError),
    reraise=True,
)
async def create_db_and_tables() -> None:
    """
    Creates database tables with retry logic.

    Raises:
        OperationalError: If the database stays unreachable after all attempts.
    """
    try:
        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("database_tables_created")
    except OperationalError as e:
        logger.warning("database_tables_creation_retry", error=str(e))
        raise


async def check_database_health() -> bool:
    """Returns True if the database answers a trivial query."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError as e:
        logger.error("database_health_check_failed", error=str(e))
        return False


async def dispose_engine() -> None:
    await engine.dispose()
    logger.info("database_engine_disposed")
