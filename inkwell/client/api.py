"""
Async HTTP client for the blog API.

``BlogApiClient`` wraps ``httpx.AsyncClient`` with the behaviour the editor
relies on:

- transport failures (timeouts, refused connections) are retried once
  after ``API_RETRY_DELAY`` seconds, then raised as ``ApiError``;
- every blog fetched or saved is cached in device storage under
  ``blog_<id>``;
- ``get_blog_by_id`` answers from that cache first and refreshes it in the
  background, and falls back to it when the server cannot be reached.
"""

from asyncio import Task, create_task, gather
from logging import getLogger
from types import TracebackType
from typing import Any, Self

from httpx import AsyncBaseTransport, AsyncClient, HTTPStatusError, Response, TransportError

from inkwell.client.storage import (
    DeviceStorage,
    backup_key,
    cache_key,
    discard,
    get_device_storage,
    load_document,
    store_document,
)
from inkwell.configs import file_logger, settings
from inkwell.decorators import with_retry
from inkwell.errors.client import ApiError
from inkwell.schemas.blog import BlogDocument
from inkwell.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))

BLOG_FETCH_TIMEOUT = 20.0  # seconds
BACKGROUND_REFRESH_TIMEOUT = 10.0  # seconds
PUBLISH_TIMEOUT = 20.0  # seconds


class BlogApiClient:
    """
    Client for ``/api/blogs``.

    Args:
        base_url: API root, e.g. ``http://localhost:5000/api``.
        timeout: Default request timeout in seconds.
        storage: Device storage for cached blogs; defaults to the configured one.
        transport: Optional httpx transport, used to target an ASGI app or a mock.
        retry_delay: Seconds to wait before retrying a failed transport.
    """

    def __init__(
        self,
        base_url: str = settings.API_BASE_URL,
        *,
        timeout: float = settings.API_TIMEOUT,
        storage: DeviceStorage | None = None,
        transport: AsyncBaseTransport | None = None,
        retry_delay: float = settings.API_RETRY_DELAY,
    ) -> None:
        self.storage = storage if storage is not None else get_device_storage()
        self._client = AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
            headers={"Content-Type": "application/json"},
        )
        self._send = with_retry(delay=retry_delay)(self._send_once)
        self._refresh_tasks: set[Task[None]] = set()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        for task in self._refresh_tasks:
            task.cancel()
        await gather(*self._refresh_tasks, return_exceptions=True)
        await self._client.aclose()

    async def _send_once(
        self,
        method: str,
        url: str,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Response:
        if timeout is None:
            return await self._client.request(method, url, json=json)
        return await self._client.request(method, url, json=json, timeout=timeout)

    async def _request(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any] | None = None,
        timeout: float | None = None,
    ) -> Any:
        """
        Send a request and return its decoded JSON body.

        Raises:
            ApiError: On a transport failure (after the retry) or an error status.
        """
        try:
            response = await self._send(method, url, json=json, timeout=timeout)
            response.raise_for_status()
        except TransportError as e:
            logger.error(f"API Error: {method} {url}: {e!r}")
            raise ApiError.from_transport_error(e) from e
        except HTTPStatusError as e:
            logger.error(f"API Error: {method} {url}: {e.response.status_code}")
            raise ApiError.from_status_error(e) from e
        return response.json()

    async def _cache(self, document: BlogDocument) -> None:
        if document.id:
            await store_document(self.storage, cache_key(document.id), document)

    async def get_blogs(self) -> list[BlogDocument]:
        """Fetch every blog, most recently updated first. Failures yield ``[]``."""
        try:
            data = await self._request("GET", "blogs")
        except ApiError as e:
            logger.error(f"Failed to fetch blogs: {e.friendly_message}")
            return []
        return [BlogDocument.model_validate(item) for item in data]

    async def get_blog_by_id(self, blog_id: str) -> BlogDocument:
        """
        Fetch one blog, preferring the cached copy.

        A cached copy is returned immediately and refreshed in the background.
        Without a cache the blog is fetched; when the server cannot be
        reached the cache is consulted again, and as a last resort an empty
        draft carrying the failure message in ``error`` is returned.

        Raises:
            ApiError: For failures other than connectivity (404, 5xx).
        """
        cached = await load_document(self.storage, cache_key(blog_id))
        if cached is not None:
            logger.info(f"Using cached blog {blog_id} while refreshing it")
            self._schedule_refresh(blog_id)
            return cached

        try:
            data = await self._request("GET", f"blogs/{blog_id}", timeout=BLOG_FETCH_TIMEOUT)
        except ApiError as e:
            if not e.is_network_error:
                raise
            cached = await load_document(self.storage, cache_key(blog_id))
            if cached is not None:
                return cached
            now = utc_now()
            return BlogDocument(
                id=blog_id,
                created_at=now,
                updated_at=now,
                error=e.friendly_message,
            )

        blog = BlogDocument.model_validate(data)
        await self._cache(blog)
        return blog

    def _schedule_refresh(self, blog_id: str) -> None:
        task = create_task(self._refresh(blog_id))
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    async def _refresh(self, blog_id: str) -> None:
        try:
            data = await self._request("GET", f"blogs/{blog_id}", timeout=BACKGROUND_REFRESH_TIMEOUT)
        except ApiError as e:
            logger.info(f"Background refresh of blog {blog_id} failed: {e.friendly_message}")
            return
        await self._cache(BlogDocument.model_validate(data))
        logger.debug(f"Updated cache for blog {blog_id}")

    async def wait_for_refreshes(self) -> None:
        """Wait for pending background cache refreshes."""
        await gather(*self._refresh_tasks, return_exceptions=True)

    async def save_draft(self, document: BlogDocument) -> BlogDocument:
        """
        Save a document as a draft.

        Documents that already have an id go through ``update_blog``;
        others are created with ``POST /blogs/save-draft``.

        Raises:
            ApiError: If the request fails.
        """
        if document.id:
            return await self.update_blog(document)

        data = await self._request("POST", "blogs/save-draft", json=document.to_payload())
        saved = BlogDocument.model_validate(data)
        await self._cache(saved)
        return saved

    async def update_blog(self, document: BlogDocument) -> BlogDocument:
        """
        Update an existing blog's title, content and tags.

        The local state is cached before the request so it survives a failure.

        Raises:
            ValueError: If the document has no id.
            ApiError: If the request fails.
        """
        if not document.id:
            mssg = "Blog ID is required for updates"
            raise ValueError(mssg)

        await self._cache(document.model_copy(update={"updated_at": utc_now()}))
        data = await self._request(
            "PATCH",
            f"blogs/update/{document.id}",
            json=document.to_payload(include_id=False),
        )
        saved = BlogDocument.model_validate(data)
        await self._cache(saved)
        return saved

    async def publish_blog(self, document: BlogDocument) -> BlogDocument:
        """
        Publish a document, creating it when it has no id.

        Raises:
            ApiError: If the request fails.
        """
        data = await self._request(
            "POST",
            "blogs/publish",
            json=document.to_payload(),
            timeout=PUBLISH_TIMEOUT,
        )
        published = BlogDocument.model_validate(data)
        await self._cache(published)
        return published

    async def delete_blog(self, blog_id: str) -> None:
        """
        Delete a blog and forget its cached copy and snapshot.

        Raises:
            ApiError: If the request fails.
        """
        await self._request("DELETE", f"blogs/{blog_id}")
        await discard(self.storage, cache_key(blog_id))
        await discard(self.storage, backup_key(blog_id))
