"""Client-side blog state shared by the list and editor views."""

from collections.abc import Callable
from typing import TypeAlias
from logging import getLogger

from inkwell.client.api import BlogApiClient
from inkwell.configs import file_logger
from inkwell.errors.client import ApiError
from inkwell.schemas.blog import BlogDocument

logger = file_logger(getLogger(__name__))

Listener: TypeAlias = Callable[["BlogContext"], None]


class BlogContext:
    """
    Holds the blogs fetched from the API plus loading and error state.

    Every operation catches ``ApiError``, records a short message in
    ``error`` and returns ``None``/``False`` instead of raising. Listeners
    registered with ``subscribe`` are called after each state change, which
    is when a view should re-render.
    """

    def __init__(self, api: BlogApiClient) -> None:
        self.api = api
        self.blogs: list[BlogDocument] = []
        self.loading = False
        self.error: str | None = None
        self._listeners: list[Listener] = []

    @property
    def published(self) -> list[BlogDocument]:
        return [blog for blog in self.blogs if blog.status == "published"]

    @property
    def drafts(self) -> list[BlogDocument]:
        return [blog for blog in self.blogs if blog.status == "draft"]

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)

    def _start(self) -> None:
        self.loading = True
        self.error = None
        self._notify()

    def _finish(self, error: str | None = None) -> None:
        self.loading = False
        self.error = error
        self._notify()

    def _remember(self, document: BlogDocument) -> None:
        """Replace the listed copy of ``document`` or list it first."""
        for index, blog in enumerate(self.blogs):
            if blog.id == document.id:
                self.blogs[index] = document
                return
        self.blogs.insert(0, document)

    async def fetch_blogs(self) -> None:
        self._start()
        try:
            self.blogs = await self.api.get_blogs()
        except ApiError:
            logger.exception("Failed to fetch blogs")
            self._finish("Failed to fetch blogs")
            return
        self._finish()

    async def fetch_blog(self, blog_id: str) -> BlogDocument | None:
        self._start()
        try:
            blog = await self.api.get_blog_by_id(blog_id)
        except ApiError:
            logger.exception(f"Failed to fetch blog {blog_id}")
            self._finish("Failed to fetch blog")
            return None
        self._finish()
        return blog

    async def save_draft(self, document: BlogDocument) -> BlogDocument | None:
        self._start()
        try:
            saved = await self.api.save_draft(document)
        except ApiError:
            logger.exception("Failed to save draft")
            self._finish("Failed to save draft")
            return None
        self._remember(saved)
        self._finish()
        return saved

    async def update_blog(self, document: BlogDocument) -> BlogDocument | None:
        self._start()
        try:
            updated = await self.api.update_blog(document)
        except (ApiError, ValueError):
            logger.exception(f"Failed to update blog {document.id}")
            self._finish("Failed to update blog")
            return None
        self._remember(updated)
        self._finish()
        return updated

    async def publish_blog(self, document: BlogDocument) -> BlogDocument | None:
        self._start()
        try:
            published = await self.api.publish_blog(document)
        except ApiError:
            logger.exception("Failed to publish blog")
            self._finish("Failed to publish blog")
            return None
        self._remember(published)
        self._finish()
        return published

    async def delete_blog(self, blog_id: str) -> bool:
        self._start()
        try:
            await self.api.delete_blog(blog_id)
        except ApiError:
            logger.exception(f"Failed to delete blog {blog_id}")
            self._finish("Failed to delete blog")
            return False
        self.blogs = [blog for blog in self.blogs if blog.id != blog_id]
        self._finish()
        return True
