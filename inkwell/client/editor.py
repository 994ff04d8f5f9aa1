"""
Editor session: the create/edit page flow without the widgets.

An ``EditorSession`` owns the document being edited, drives the auto-save
coordinator on every edit and records the toasts and navigation a UI
would show.
"""

from datetime import datetime
from logging import getLogger

from inkwell.client.autosave import AutoSaveCoordinator, SavePolicy
from inkwell.client.context import BlogContext
from inkwell.client.storage import cache_key, load_document
from inkwell.client.views import Toast, save_error_message, save_success_message
from inkwell.configs import file_logger, settings
from inkwell.schemas.blog import BlogDocument, normalize_tags
from inkwell.utils.helpers import utc_now

logger = file_logger(getLogger(__name__))

NEW_BLOG = "new"
HOME = "/"


class EditorSession:
    """
    One open editor page.

    Args:
        context: Shared client state.
        blog_id: Id of the blog to edit, or ``None``/``"new"`` for a new post.
        delay_ms: Auto-save debounce.
        policy: Auto-save policy for connectivity failures.
    """

    def __init__(
        self,
        context: BlogContext,
        blog_id: str | None = None,
        *,
        delay_ms: int = settings.AUTOSAVE_DELAY_MS,
        policy: SavePolicy = settings.SAVE_POLICY,
    ) -> None:
        self.context = context
        self.blog_id = blog_id if blog_id and blog_id != NEW_BLOG else None
        self.document = BlogDocument()
        self.path = f"/edit/{self.blog_id}" if self.blog_id else f"/{NEW_BLOG}"

        self.last_saved: datetime | None = None
        self.saving = False
        self.loading = False
        self.error: str | None = None
        self.toasts: list[Toast] = []

        self.autosave = AutoSaveCoordinator(
            context.api,
            lambda: self.document,
            delay_ms=delay_ms,
            policy=policy,
            on_success=self._on_save_success,
            on_error=self._on_save_error,
        )

    @property
    def is_new(self) -> bool:
        return self.blog_id is None

    def _toast(self, toast: Toast) -> None:
        logger.info(f"[{toast.level}] {toast.message}")
        self.toasts.append(toast)

    def _navigate(self, path: str) -> None:
        self.path = path

    def _populate(self, blog: BlogDocument) -> None:
        self.document = BlogDocument(
            id=blog.id,
            title=blog.title,
            content=blog.content,
            tags=list(blog.tags),
            status=blog.status,
        )
        self.last_saved = blog.updated_at or utc_now()
        self.autosave.prime(self.document)

    async def load(self) -> None:
        """Load the blog being edited; a new post has nothing to load."""
        if self.blog_id is None:
            return

        self.loading = True
        try:
            blog = await self.context.fetch_blog(self.blog_id)
            if blog is not None:
                self._populate(blog)
                if blog.error:
                    self._toast(Toast("warning", blog.error))
                return

            self._toast(Toast("error", "Error loading blog data. Using cached version if available."))
            cached = await load_document(self.context.api.storage, cache_key(self.blog_id))
            if cached is not None:
                self._populate(cached)
                self._toast(Toast("info", "Using cached version of the blog"))
            else:
                self._toast(Toast("error", "No cached version found. Redirecting to home."))
                self._navigate(HOME)
        finally:
            self.loading = False

    def set_title(self, title: str) -> None:
        self.document = self.document.model_copy(update={"title": title})
        self._changed()

    def set_content(self, content: str) -> None:
        self.document = self.document.model_copy(update={"content": content})
        self._changed()

    def set_tags(self, raw: str) -> None:
        """Set tags from the comma-separated tags field."""
        self.document = self.document.model_copy(update={"tags": normalize_tags(raw)})
        self._changed()

    def _changed(self) -> None:
        meaningful = self.document.title.strip() or self.document.content.strip()
        if meaningful and not self.loading:
            self.saving = True
            self.autosave.schedule()

    def _on_save_success(self, saved: BlogDocument) -> None:
        self.last_saved = utc_now()
        self.saving = False

        if not self.document.id and saved.id and not saved.local_save:
            logger.info(f"New blog saved with ID: {saved.id}")
            self.document = self.document.model_copy(update={"id": saved.id})
            if self.is_new:
                self.blog_id = saved.id
                self._navigate(f"/edit/{saved.id}")

        self._toast(save_success_message(saved))

    def _on_save_error(self, error: Exception) -> None:
        self.saving = False
        self._toast(save_error_message(error))

    async def save_draft(self) -> None:
        """Save now, as the "Save as Draft" button does."""
        if self.document.is_empty:
            self._toast(Toast("warning", "Please add a title or content before saving"))
            return

        self.autosave.cancel()
        self.saving = True
        try:
            async with self.autosave.exclusive():
                if self.document.id:
                    sent = self.document
                    result = await self.context.update_blog(sent)
                    if result is not None:
                        self.autosave.mark_saved(sent)
                        self.last_saved = utc_now()
                        self._toast(Toast("success", "Blog updated successfully"))
                    else:
                        self._toast(Toast("error", "Failed to update blog"))
                    return
            await self.autosave.save(force=True)
        finally:
            self.saving = False

    async def publish(self) -> BlogDocument | None:
        """Publish the post, saving it first when it has never been saved."""
        if not self.document.title:
            self._toast(Toast("warning", "Please add a title before publishing"))
            return None
        if not self.document.content:
            self._toast(Toast("warning", "Please add content before publishing"))
            return None

        self.autosave.cancel()
        self.saving = True
        try:
            if not self.document.id:
                saved = await self.autosave.save(force=True)
                if saved is None or not saved.id or saved.local_save:
                    self._toast(Toast("error", "Failed to save blog before publishing"))
                    return None

            async with self.autosave.exclusive():
                published = await self.context.publish_blog(self.document)
                if published is None:
                    self._toast(Toast("error", "Failed to publish blog"))
                    return None

                self.document = self.document.model_copy(update={"status": published.status})
                self.autosave.mark_saved(self.document)
            self.last_saved = utc_now()
            self._toast(Toast("success", "Blog published successfully"))
            self._navigate(HOME)
            return published
        finally:
            self.saving = False

    async def close(self) -> None:
        """Leave the editor, letting a pending auto-save finish."""
        await self.autosave.flush()
