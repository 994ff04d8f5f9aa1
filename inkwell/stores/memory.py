"""In-memory blog store, used when the database is not available."""

from asyncio import Lock
from collections import OrderedDict
from logging import getLogger

from inkwell.configs import file_logger
from inkwell.models.blog import new_blog_id
from inkwell.schemas.blog import Blog, BlogFields
from inkwell.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))


class MemoryBlogStore:
    """
    A process-local blog store that mimics ``DatabaseBlogStore``.

    Blogs live in an insertion-ordered dict and vanish with the process.
    Suitable for local development and tests only. Mutations are serialized
    through an ``asyncio.Lock`` and callers always receive copies.
    """

    backend = "memory"

    def __init__(self) -> None:
        self._blogs: OrderedDict[str, Blog] = OrderedDict()
        # Mutation counter per blog, breaks ties between equal timestamps
        self._revisions: dict[str, int] = {}
        self._revision = 0
        self._lock = Lock()
        self.is_connected = True

    async def list_blogs(self) -> list[Blog]:
        async with self._lock:
            blogs = [blog.model_copy(deep=True) for blog in self._blogs.values()]
            revisions = dict(self._revisions)
        return sorted(
            blogs,
            key=lambda blog: (blog.updated_at, revisions[blog.id]),
            reverse=True,
        )

    async def get_by_id(self, blog_id: str) -> Blog | None:
        async with self._lock:
            blog = self._blogs.get(blog_id)
            return blog.model_copy(deep=True) if blog else None

    async def upsert(self, blog_id: str | None, fields: BlogFields) -> Blog | None:
        changes = fields.model_dump(exclude_none=True)
        async with self._lock:
            if blog_id is None:
                now = utc_now()
                blog = Blog(
                    id=new_blog_id(),
                    created_at=now,
                    updated_at=now,
                    **{"status": "draft", **changes},
                )
                self._blogs[blog.id] = blog
                self._touch(blog.id)
                logger.info(f"Created blog {blog.id} in memory store")
                return blog.model_copy(deep=True)

            existing = self._blogs.get(blog_id)
            if existing is None:
                return None

            blog = existing.model_copy(update={**changes, "updated_at": utc_now()}, deep=True)
            self._blogs[blog_id] = blog
            self._touch(blog_id)
            return blog.model_copy(deep=True)

    async def delete(self, blog_id: str) -> bool:
        async with self._lock:
            self._revisions.pop(blog_id, None)
            return self._blogs.pop(blog_id, None) is not None

    def _touch(self, blog_id: str) -> None:
        self._revision += 1
        self._revisions[blog_id] = self._revision

    async def count(self) -> int:
        async with self._lock:
            return len(self._blogs)

    async def ping(self) -> bool:
        return self.is_connected

    async def clear(self) -> None:
        async with self._lock:
            self._blogs.clear()
            self._revisions.clear()

    async def close(self) -> None:
        async with self._lock:
            self.is_connected = False
