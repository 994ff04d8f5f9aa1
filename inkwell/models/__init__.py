"""Database models for the application."""

from inkwell.models.blog import BlogDB, new_blog_id

__all__ = ["BlogDB", "new_blog_id"]
