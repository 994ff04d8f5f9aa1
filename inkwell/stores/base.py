"""Protocol definition for blog store implementations."""

from typing import Protocol, runtime_checkable

from inkwell.schemas.blog import Blog, BlogFields


@runtime_checkable
class BlogStore(Protocol):
    """
    Protocol for blog persistence backends.

    Both ``DatabaseBlogStore`` and ``MemoryBlogStore`` conform to this
    protocol, so the API layer never knows which one is active.
    """

    backend: str

    async def list_blogs(self) -> list[Blog]:
        """Return every blog, most recently updated first."""
        ...

    async def get_by_id(self, blog_id: str) -> Blog | None:
        """Return the blog with ``blog_id``, or None."""
        ...

    async def upsert(self, blog_id: str | None, fields: BlogFields) -> Blog | None:
        """
        Create a blog (no id) or update one in place.

        Returns None when ``blog_id`` is given but unknown.
        """
        ...

    async def delete(self, blog_id: str) -> bool:
        """Delete a blog. False when it did not exist."""
        ...

    async def count(self) -> int:
        """Number of stored blogs."""
        ...

    async def ping(self) -> bool:
        """Check if the store is reachable."""
        ...

    async def close(self) -> None:
        """Release resources held by the store."""
        ...
