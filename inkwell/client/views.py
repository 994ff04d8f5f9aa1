"""
Terminal presentation of blogs with rich.

Also selects the toast shown for a save outcome, so the editor and any
front-end agree on the wording.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, TypeAlias

from rich.console import Console, Group, RenderableType
from rich.table import Table
from rich.text import Text

from inkwell.client.context import BlogContext
from inkwell.errors.client import ApiError, ApiErrorKind
from inkwell.schemas.blog import BlogDocument

ToastLevel: TypeAlias = Literal["success", "info", "warning", "error"]

UNTITLED = "Untitled"


@dataclass(frozen=True)
class Toast:
    level: ToastLevel
    message: str


def save_status_text(last_saved: datetime | None, *, saving: bool) -> str:
    """
    Text of the editor's save indicator.

    Examples
    --------
    >>> save_status_text(None, saving=True)
    'Saving...'
    >>> save_status_text(None, saving=False)
    ''
    """
    if saving:
        return "Saving..."
    if last_saved is not None:
        return f"Last saved: {last_saved.astimezone():%H:%M:%S}"
    return ""


def save_error_message(error: Exception) -> Toast:
    """Pick the toast for a failed save."""
    if isinstance(error, ApiError):
        if error.kind is ApiErrorKind.NETWORK:
            return Toast("warning", "Network issue detected. Changes saved locally.")
        if error.kind is ApiErrorKind.NOT_FOUND:
            return Toast("error", "Blog not found on server. Please recreate it.")
        if error.kind is ApiErrorKind.SERVER:
            return Toast("error", "Server error. Please try again later.")
    return Toast("error", "Failed to save draft")


def save_success_message(document: BlogDocument) -> Toast:
    if document.local_save:
        return Toast("info", "Changes saved locally (offline mode)")
    return Toast("success", "Draft saved successfully")


def render_blog_list(
    blogs: list[BlogDocument],
    title: str,
    empty_message: str = "No blogs found",
) -> RenderableType:
    """Render one section of the home page as a table, or its empty message."""
    if not blogs:
        return Group(Text(title, style="bold"), Text(empty_message, style="dim"))

    table = Table(title=title, title_justify="left", expand=True)
    table.add_column("Title", style="bold")
    table.add_column("Last updated")
    table.add_column("Tags")
    table.add_column("ID", style="dim")
    for blog in blogs:
        updated = f"{blog.updated_at.astimezone():%x}" if blog.updated_at else "-"
        table.add_row(blog.title or UNTITLED, updated, ", ".join(blog.tags), blog.id or "-")
    return table


def render_home(context: BlogContext) -> RenderableType:
    """Render the home page: published posts, then drafts."""
    if context.loading:
        return Text("Loading blogs...")
    if context.error:
        return Text(context.error, style="red")
    return Group(
        Text("Blog Manager", style="bold underline"),
        render_blog_list(context.published, "Published Blogs", "No published blogs yet"),
        render_blog_list(context.drafts, "Drafts", "No drafts yet"),
    )


def render_preview(document: BlogDocument) -> RenderableType:
    """Render a document's title and tags above its raw content."""
    parts: list[RenderableType] = [Text(document.title or UNTITLED, style="bold")]
    if document.tags:
        parts.append(Text(" ".join(f"#{tag}" for tag in document.tags), style="cyan"))
    parts.append(Text(document.content))
    return Group(*parts)


def print_home(context: BlogContext, console: Console | None = None) -> None:
    (console or Console()).print(render_home(context))
