# inkwell/dependencies/dependencies.py

"""Application dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from inkwell.errors.store import StoreConnectionError
from inkwell.stores import BlogStore


def get_blog_store(request: Request) -> BlogStore:
    """
    Resolve the blog store selected at startup.

    Raises:
        StoreConnectionError: If the application started without a store.
    """
    store: BlogStore | None = getattr(request.app.state, "blog_store", None)
    if store is None:
        raise StoreConnectionError(detail="Blog store is not initialized")
    return store


BlogStoreDep = Annotated[BlogStore, Depends(get_blog_store)]
