"""
Auto-save coordination for the blog editor.

``AutoSaveCoordinator`` turns a stream of edits into as few saves as
possible:

1. every edit restarts a debounce timer (``AUTOSAVE_DELAY_MS``);
2. when it fires, the document is saved unless it is empty or its title
   and content match what was last saved;
3. a snapshot is written to device storage under ``blog_backup_<id>``
   before the request and removed once the server confirms the save;
4. at most one save runs at a time and a new edit never cancels a save
   already sent. An automatic save that fires while another is running
   is dropped; a forced save waits its turn.

Connectivity failures are soft under the ``optimistic`` policy: the
document is reported as saved locally (``local_save=True``). Under the
``strict`` policy, and for every other failure, the error callback runs
and the last-saved markers stay put so the next save retries.
"""

from asyncio import CancelledError, Lock, Task, create_task, gather, sleep
from collections.abc import AsyncGenerator, Callable
from contextlib import asynccontextmanager
from logging import getLogger
from typing import Literal, TypeAlias

from inkwell.client.api import BlogApiClient
from inkwell.client.storage import backup_key, discard, store_document
from inkwell.configs import file_logger, settings
from inkwell.errors.client import ApiError
from inkwell.schemas.blog import BlogDocument
from inkwell.utils.helpers import epoch_ms, utc_now

logger = file_logger(getLogger(__name__))

SavePolicy: TypeAlias = Literal["optimistic", "strict"]
SuccessCallback: TypeAlias = Callable[[BlogDocument], None]
ErrorCallback: TypeAlias = Callable[[Exception], None]


class AutoSaveCoordinator:
    """
    Debounced, single-flight saving of one document.

    Args:
        api: Client used to reach the blog API.
        current: Returns the document as it is being edited right now.
        delay_ms: Quiet period before an automatic save.
        policy: How connectivity failures are reported.
        on_success: Called with the saved (or locally saved) document.
        on_error: Called with the failure of a save.
    """

    def __init__(
        self,
        api: BlogApiClient,
        current: Callable[[], BlogDocument],
        *,
        delay_ms: int = settings.AUTOSAVE_DELAY_MS,
        policy: SavePolicy = settings.SAVE_POLICY,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self.api = api
        self.current = current
        self.delay = delay_ms / 1000
        self.policy = policy
        self.on_success = on_success
        self.on_error = on_error

        self.last_saved_title = ""
        self.last_saved_content = ""
        self.has_saved_once = False

        self._lock = Lock()
        self._timer: Task[None] | None = None
        self._saves: set[Task[None]] = set()

    @property
    def is_saving(self) -> bool:
        return self._lock.locked()

    @property
    def is_pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def prime(self, document: BlogDocument) -> None:
        """Take the markers from a loaded document so it is not saved again unchanged."""
        if document.id and not self.has_saved_once:
            self.mark_saved(document)

    def mark_saved(self, document: BlogDocument) -> None:
        self.last_saved_title = document.title
        self.last_saved_content = document.content
        self.has_saved_once = True

    def has_changes(self, document: BlogDocument) -> bool:
        return (
            document.title != self.last_saved_title
            or document.content != self.last_saved_content
        )

    def schedule(self) -> None:
        """Restart the debounce timer. A save already running is left alone."""
        self.cancel()
        self._timer = create_task(self._save_after_delay())

    def cancel(self) -> None:
        """Stop the debounce timer. Saves the timer already started keep running."""
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def flush(self) -> None:
        """Wait for the pending timer, if any, and the saves it started."""
        if self._timer is not None:
            try:
                await self._timer
            except CancelledError:
                logger.debug("Pending auto-save was cancelled")
        if self._saves:
            await gather(*self._saves)

    @asynccontextmanager
    async def exclusive(self) -> AsyncGenerator[None]:
        """
        Hold the single-flight lock around a save made outside the coordinator.

        Example:
            ```python
            async with coordinator.exclusive():
                await api.publish_blog(document)
            ```
        """
        async with self._lock:
            yield

    async def _save_after_delay(self) -> None:
        await sleep(self.delay)
        # Outlives the timer: cancelling the timer never reaches the request
        task = create_task(self._auto_save())
        self._saves.add(task)
        task.add_done_callback(self._saves.discard)

    async def _auto_save(self) -> None:
        try:
            await self.save()
        except Exception as e:
            logger.exception("Error in auto-save")
            self._notify_error(e)

    async def save(self, *, force: bool = False) -> BlogDocument | None:
        """
        Save the current document.

        Args:
            force: Save even without changes, waiting for a running save
                instead of being dropped.

        Returns:
            BlogDocument | None: The saved document, or ``None`` when nothing
            was saved or the save failed.
        """
        if not force and self._lock.locked():
            logger.debug("Save in progress, skipping this auto-save request")
            return None

        async with self._lock:
            document = self.current().model_copy(deep=True)
            if document.is_empty:
                logger.debug("Skipping save - no content to save")
                return None
            if not force and not self.has_changes(document):
                logger.debug("Skipping save - no changes since last save")
                return None
            return await self._save(document)

    async def _save(self, document: BlogDocument) -> BlogDocument | None:
        if document.id:
            await store_document(
                self.api.storage,
                backup_key(document.id),
                document.model_copy(update={"updated_at": utc_now()}),
            )

        try:
            if document.id:
                saved = await self.api.update_blog(document)
            else:
                saved = await self.api.save_draft(document)
        except ApiError as e:
            if e.is_network_error and self.policy == "optimistic":
                local = document.model_copy(
                    update={
                        "id": document.id or f"local_{epoch_ms()}",
                        "updated_at": utc_now(),
                        "local_save": True,
                    },
                )
                logger.warning(f"Saved {local.id} locally: {e.friendly_message}")
                self._notify_success(local)
                return local
            logger.error(f"Error saving draft: {e}")
            self._notify_error(e)
            return None

        self.mark_saved(document)
        if document.id:
            await discard(self.api.storage, backup_key(document.id))
        self._notify_success(saved)
        return saved

    def _notify_success(self, document: BlogDocument) -> None:
        if self.on_success is not None:
            self.on_success(document)

    def _notify_error(self, error: Exception) -> None:
        if self.on_error is not None:
            self.on_error(error)
