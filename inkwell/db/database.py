"""Database engine and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import getLogger

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from inkwell.configs import file_logger, settings

logger = file_logger(getLogger(__name__))


def _configure_engine_events(engine: AsyncEngine) -> None:
    """Configure connection pool events for monitoring."""

    @event.listens_for(engine.sync_engine, "connect")
    def on_connect(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("New database connection established")

    @event.listens_for(engine.sync_engine, "checkin")
    def on_checkin(dbapi_connection: object, connection_record: object) -> None:
        logger.debug("Connection returned to pool")


def create_engine(url: str, *, echo: bool = settings.DATABASE_ECHO) -> AsyncEngine:
    """
    Create the async engine for the blog database.

    Args:
        url: SQLAlchemy async database URL.
        echo: Log emitted SQL.

    Returns:
        AsyncEngine: Engine with pre-ping enabled.
    """
    engine = create_async_engine(url, echo=echo, pool_pre_ping=True)
    if settings.DEBUG:
        _configure_engine_events(engine)
    return engine


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker[SQLModelAsyncSession]:
    return async_sessionmaker(
        engine,
        class_=SQLModelAsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@asynccontextmanager
async def transaction(
    session_maker: async_sessionmaker[SQLModelAsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """
    Context manager for explicit transaction management.

    Yields:
        AsyncSession: Database session within a transaction

    Example:
        ```python
        async with transaction(session_maker) as session:
            session.add(BlogDB(title="Hello"))
            # Commits on successful exit, rolls back on exception
        ```
    """
    async with session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Transaction error")
            raise
        finally:
            await session.close()


async def ping(engine: AsyncEngine) -> None:
    """Run a trivial statement to prove the database is reachable."""
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def init_db(engine: AsyncEngine) -> None:
    """
    Initialize database tables.

    Note:
        This is a simple initialization for development.
        For production, use proper migration tools like Alembic.
    """
    async with engine.begin() as conn:
        from inkwell.models import BlogDB  # noqa: F401, PLC0415

        await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized successfully!")


async def close_db(engine: AsyncEngine) -> None:
    """Close database connections."""
    await engine.dispose()
    logger.info("Database connections closed")
