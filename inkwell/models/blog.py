"""Blog database model using SQLModel."""

from datetime import UTC, datetime
from typing import cast
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Index, Text
from sqlalchemy.orm import declared_attr
from sqlmodel import Column, Field, SQLModel, String

from inkwell.configs.settings import MAX_TITLE_LENGTH


def new_blog_id() -> str:
    """Generate an opaque blog identifier."""
    return uuid4().hex


def _now() -> datetime:
    return datetime.now(tz=UTC)


class BlogDB(SQLModel, table=True):
    """
    Blog database model.

    This model represents the blogs table. Tags are kept as a JSON array,
    so the table works on any SQLAlchemy backend with JSON support.
    """

    __tablename__ = cast("declared_attr[str]", "blogs")

    __table_args__ = (Index("ix_blogs_status_updated", "status", "updated_at"),)

    id: str = Field(
        default_factory=new_blog_id,
        sa_column=Column(String(32), primary_key=True, nullable=False),
        description="Blog ID",
    )
    title: str = Field(
        default="",
        sa_column=Column(String(MAX_TITLE_LENGTH), nullable=False),
        description="Blog title",
    )
    content: str = Field(
        default="",
        sa_column=Column(Text, nullable=False),
        description="Blog content (HTML)",
    )
    tags: list[str] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Blog tags",
    )
    status: str = Field(
        default="draft",
        sa_column=Column(String(20), nullable=False, index=True),
        description="Blog status (draft, published)",
    )
    created_at: datetime = Field(
        default_factory=_now,
        sa_column=Column(DateTime(timezone=True), nullable=False),
        description="Creation timestamp",
    )
    updated_at: datetime = Field(
        default_factory=_now,
        sa_column=Column(DateTime(timezone=True), nullable=False, index=True),
        description="Last update timestamp",
    )
