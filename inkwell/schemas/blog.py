"""
Blog schemas for the Inkwell application.

This module defines the request payloads accepted by the blog API, the
``Blog`` record returned by blog stores and API responses, and the
``BlogDocument`` used on the client side while a post is being edited.
"""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from inkwell.configs.settings import MAX_TAG_LENGTH, MAX_TITLE_LENGTH

BlogStatus = Literal["draft", "published"]


def normalize_tags(value: Any) -> list[str]:
    """
    Normalize tags to a list of trimmed, non-empty strings.

    Accepts a comma-separated string, a list, or nothing.

    Examples
    --------
    >>> normalize_tags(" a, b ,, c")
    ['a', 'b', 'c']
    >>> normalize_tags(["x ", "", "x"])
    ['x', 'x']
    """
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    if not isinstance(value, list | tuple):
        mssg = "Tags must be a comma-separated string or a list of strings"
        raise ValueError(mssg)
    return [tag for tag in (str(item).strip() for item in value if item is not None) if tag]


def _checked_tags(value: Any) -> list[str]:
    tags = normalize_tags(value)
    if any(len(tag) > MAX_TAG_LENGTH for tag in tags):
        mssg = f"Each tag must be at most {MAX_TAG_LENGTH} characters"
        raise ValueError(mssg)
    return tags


class BlogFields(BaseModel):
    """Fields a store writes on create or update. ``None`` leaves a field untouched."""

    title: str | None = None
    content: str | None = None
    tags: list[str] | None = None
    status: BlogStatus | None = None


class BlogPayload(BaseModel):
    """Request body for ``/save-draft``: an optional id plus the editable fields."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": None,
                "title": "My first post",
                "content": "<p>Hello world</p>",
                "tags": "intro, personal",
            },
        },
    )

    id: str | None = Field(default=None, description="Existing blog id; omit to create")
    title: str = Field(default="", max_length=MAX_TITLE_LENGTH)
    content: str = ""
    tags: list[str] = Field(
        default_factory=list,
        description="Comma-separated string or list of tags",
    )

    @field_validator("id", mode="before")
    @classmethod
    def blank_id_is_none(cls, v: Any) -> Any:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        if v is None:
            return ""
        return v.strip() if isinstance(v, str) else v

    @field_validator("content", mode="before")
    @classmethod
    def content_default(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Any) -> list[str]:
        return _checked_tags(v)

    def to_fields(self, status: BlogStatus) -> BlogFields:
        return BlogFields(title=self.title, content=self.content, tags=self.tags, status=status)


class BlogPublishPayload(BlogPayload):
    """Request body for ``/publish``. Title and content are required."""

    # Omitted fields must still go through the required checks
    model_config = ConfigDict(validate_default=True)

    @field_validator("title", mode="after")
    @classmethod
    def title_required(cls, v: str) -> str:
        if not v:
            mssg = "Title is required to publish"
            raise ValueError(mssg)
        return v

    @field_validator("content", mode="after")
    @classmethod
    def content_required(cls, v: str) -> str:
        if not v.strip():
            mssg = "Content is required to publish"
            raise ValueError(mssg)
        return v


class BlogUpdate(BaseModel):
    """Request body for ``/update/{id}`` (all fields optional, status untouched)."""

    title: str | None = Field(default=None, max_length=MAX_TITLE_LENGTH)
    content: str | None = None
    tags: list[str] | None = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("tags", mode="before")
    @classmethod
    def validate_tags(cls, v: Any) -> list[str] | None:
        return None if v is None else _checked_tags(v)

    def to_fields(self) -> BlogFields:
        return BlogFields(**self.model_dump(exclude_unset=True))


class Blog(BaseModel):
    """A stored blog post, as returned by stores and the API."""

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "9b2f0c6e5d4a4f1e8c7b6a5d4c3b2a19",
                "title": "My first post",
                "content": "<p>Hello world</p>",
                "tags": ["intro", "personal"],
                "status": "draft",
                "createdAt": "2025-01-01T10:00:00Z",
                "updatedAt": "2025-01-01T10:05:00Z",
            },
        },
    )

    id: str
    title: str = ""
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    status: BlogStatus = "draft"
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class MessageResponse(BaseModel):
    """Plain message body."""

    message: str


class BlogDocument(BaseModel):
    """
    Client-side view of a blog post being listed or edited.

    Unlike ``Blog`` every field is optional, since a post being written has
    no id until its first save. ``local_save`` marks a document that was only
    saved to device storage; ``error`` carries the message of a failed fetch
    on a placeholder document.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    title: str = ""
    content: str = ""
    tags: list[str] = Field(default_factory=list)
    status: BlogStatus = "draft"
    created_at: datetime | None = Field(default=None, alias="createdAt")
    updated_at: datetime | None = Field(default=None, alias="updatedAt")
    local_save: bool = Field(default=False, alias="localSave")
    error: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.title and not self.content

    def to_payload(self, *, include_id: bool = True) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "content": self.content,
            "tags": list(self.tags),
        }
        if include_id:
            payload["id"] = self.id
        return payload
