"""SQL-backed blog store."""

from asyncio import wait_for
from logging import getLogger
from typing import Self

from sqlalchemy import desc, func, select
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession as SQLModelAsyncSession

from inkwell.configs import file_logger, settings
from inkwell.db import close_db, create_engine, create_session_maker, init_db, ping, transaction
from inkwell.errors.store import StoreConfigurationError, StoreConnectionError, StoreError
from inkwell.models.blog import BlogDB
from inkwell.schemas.blog import Blog, BlogFields
from inkwell.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))

# Raised by drivers when the server cannot be reached at all
CONNECT_ERRORS = (OSError, TimeoutError, SQLAlchemyError)


class DatabaseBlogStore:
    """
    Blog store backed by a SQL database through SQLModel.

    Each operation runs in its own transaction. Driver and SQLAlchemy errors
    are re-raised as ``StoreError`` so the API answers with a generic 500.
    """

    backend = "database"

    def __init__(
        self,
        engine: AsyncEngine,
        session_maker: async_sessionmaker[SQLModelAsyncSession] | None = None,
    ) -> None:
        self.engine = engine
        self.session_maker = session_maker or create_session_maker(engine)

    @classmethod
    def from_url(cls, url: str = settings.DATABASE_URL) -> Self:
        """
        Build a store for ``url`` without connecting.

        Raises:
            StoreConfigurationError: If the URL is malformed or its driver is missing.
        """
        try:
            return cls(create_engine(url))
        except (ArgumentError, ImportError) as e:
            raise StoreConfigurationError(detail=f"Cannot create database engine: {e}") from e

    async def connect(self, timeout: float = settings.DB_CONNECT_TIMEOUT) -> None:
        """
        Verify the database is reachable and create missing tables.

        Raises:
            StoreConnectionError: If the database does not answer in time.
        """
        try:
            await wait_for(ping(self.engine), timeout=timeout)
            await init_db(self.engine)
        except CONNECT_ERRORS as e:
            raise StoreConnectionError(detail=f"Database unreachable: {e}") from e

    async def list_blogs(self) -> list[Blog]:
        # pyrefly: ignore [bad-argument-type]
        statement = select(BlogDB).order_by(desc(BlogDB.updated_at))
        try:
            async with transaction(self.session_maker) as session:
                result = await session.execute(statement)
                return [self._to_blog(row) for row in result.scalars().all()]
        except SQLAlchemyError as e:
            raise StoreError(detail=f"Failed to list blogs: {e}") from e

    async def get_by_id(self, blog_id: str) -> Blog | None:
        try:
            async with transaction(self.session_maker) as session:
                db_blog = await session.get(BlogDB, blog_id)
                return self._to_blog(db_blog) if db_blog else None
        except SQLAlchemyError as e:
            raise StoreError(detail=f"Failed to fetch blog {blog_id}: {e}") from e

    async def upsert(self, blog_id: str | None, fields: BlogFields) -> Blog | None:
        changes = fields.model_dump(exclude_none=True)
        try:
            async with transaction(self.session_maker) as session:
                if blog_id is None:
                    now = utc_now()
                    db_blog = BlogDB(**{"status": "draft", **changes}, created_at=now, updated_at=now)
                    session.add(db_blog)
                else:
                    db_blog = await session.get(BlogDB, blog_id)
                    if db_blog is None:
                        return None
                    for key, value in changes.items():
                        setattr(db_blog, key, value)
                    db_blog.updated_at = utc_now()

                await session.flush()
                await session.refresh(db_blog)
                return self._to_blog(db_blog)
        except SQLAlchemyError as e:
            raise StoreError(detail=f"Failed to save blog: {e}") from e

    async def delete(self, blog_id: str) -> bool:
        try:
            async with transaction(self.session_maker) as session:
                db_blog = await session.get(BlogDB, blog_id)
                if db_blog is None:
                    return False
                await session.delete(db_blog)
                await session.flush()
                return True
        except SQLAlchemyError as e:
            raise StoreError(detail=f"Failed to delete blog {blog_id}: {e}") from e

    async def count(self) -> int:
        statement = select(func.count()).select_from(BlogDB)
        try:
            async with transaction(self.session_maker) as session:
                result = await session.execute(statement)
                return result.scalar() or 0
        except SQLAlchemyError as e:
            raise StoreError(detail=f"Failed to count blogs: {e}") from e

    async def ping(self) -> bool:
        try:
            await ping(self.engine)
        except CONNECT_ERRORS:
            logger.warning("Database ping failed", exc_info=True)
            return False
        return True

    async def close(self) -> None:
        await close_db(self.engine)

    @staticmethod
    def _to_blog(db_blog: BlogDB) -> Blog:
        return Blog.model_validate(db_blog, from_attributes=True)
