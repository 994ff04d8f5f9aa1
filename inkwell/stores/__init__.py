"""
Blog store package.

This package provides the persistence backends for blogs, with support for
a SQL database and a volatile in-memory fallback.
"""

from logging import getLogger

from inkwell.configs import file_logger, settings
from inkwell.errors.store import StoreError
from inkwell.stores.base import BlogStore
from inkwell.stores.database import DatabaseBlogStore
from inkwell.stores.memory import MemoryBlogStore

logger = file_logger(getLogger(__name__))


async def select_blog_store(
    backend: str = settings.STORE_BACKEND,
    database_url: str = settings.DATABASE_URL,
) -> BlogStore:
    """
    Build the configured blog store.

    ``memory`` always uses the in-memory store. ``database`` connects to the
    database and fails when it is unreachable. ``auto`` tries the database
    and falls back to the in-memory store.

    Raises:
        StoreError: If ``backend`` is ``database`` and the database cannot be used.
    """
    if backend == "memory":
        logger.info("Using in-memory blog store.")
        return MemoryBlogStore()

    store: DatabaseBlogStore | None = None
    try:
        store = DatabaseBlogStore.from_url(database_url)
        await store.connect()
    except StoreError as e:
        if store is not None:
            await store.close()
        if backend == "database":
            raise
        logger.warning(
            f"{e.detail}. Falling back to in-memory blog store; data will not survive a restart.",
        )
        return MemoryBlogStore()

    logger.info("Using database blog store.")
    return store


__all__ = [
    "BlogStore",
    "DatabaseBlogStore",
    "MemoryBlogStore",
    "select_blog_store",
]
