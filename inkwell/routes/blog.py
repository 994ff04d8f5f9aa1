# inkwell/routes/blog.py

"""
Blog Routes.

Provides the CRUD endpoints used by the editor: listing, reading, saving
drafts, updating, publishing and deleting posts.

Summary
-------
Endpoints include:
  - List blogs (most recently updated first)
  - Get blog by id
  - Save draft (create or update)
  - Update blog (status untouched)
  - Publish blog (create or update)
  - Delete blog

Dependencies
------------
  - `BlogStoreDep`: The blog store selected at startup.

Errors
------
Unknown ids answer `404 {"message": "Blog not found"}`. Store failures are
handled globally and answer `500 {"message": "Server error"}`.
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body
from fastapi.responses import ORJSONResponse
from starlette.responses import Response
from starlette.status import HTTP_201_CREATED

from inkwell.configs import BLOG_DELETED_MESSAGE, file_logger
from inkwell.dependencies import BlogStoreDep
from inkwell.errors.store import BlogNotFoundError
from inkwell.schemas import (
    Blog,
    BlogPayload,
    BlogPublishPayload,
    BlogStatus,
    BlogUpdate,
    MessageResponse,
)
from inkwell.stores import BlogStore

router = APIRouter(prefix="/api/blogs", tags=["📝 Blogs"])

logger = file_logger(getLogger(__name__))

BLOG_EXAMPLE = {
    "id": "9b2f0c6e5d4a4f1e8c7b6a5d4c3b2a19",
    "title": "My first post",
    "content": "<p>Hello world</p>",
    "tags": ["intro", "personal"],
    "status": "draft",
    "createdAt": "2025-01-01T10:00:00Z",
    "updatedAt": "2025-01-01T10:05:00Z",
}
NOT_FOUND_RESPONSE = {
    "description": "Not found",
    "content": {"application/json": {"example": {"message": "Blog not found"}}},
}
SERVER_ERROR_RESPONSE = {
    "description": "Store failure",
    "content": {"application/json": {"example": {"message": "Server error"}}},
}
VALIDATION_RESPONSE = {
    "description": "Validation failed",
    "content": {
        "application/json": {
            "example": {
                "message": "Validation failed",
                "errors": [
                    {
                        "field": "body.title",
                        "message": "Value error, Title is required to publish",
                        "type": "value_error",
                        "input": "",
                    },
                ],
            },
        },
    },
}


async def save_with_status(
    store: BlogStore,
    payload: BlogPayload,
    status: BlogStatus,
    response: Response,
) -> Blog:
    """
    Create or update a blog and force its status.

    Parameters
    ----------
    store : BlogStore
        Store to write to.
    payload : BlogPayload
        Incoming fields; ``payload.id`` selects update over create.
    status : BlogStatus
        Status written on the blog.
    response : Response
        Switched to ``201`` when a blog is created.

    Returns
    -------
    Blog
        The stored blog.

    Raises
    ------
    BlogNotFoundError
        If ``payload.id`` does not exist.
    """
    blog = await store.upsert(payload.id, payload.to_fields(status))
    if blog is None:
        raise BlogNotFoundError
    if payload.id is None:
        response.status_code = HTTP_201_CREATED
        logger.info(f"Created {status} blog {blog.id}")
    else:
        logger.info(f"Saved {status} blog {blog.id}")
    return blog


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[Blog],
    summary="List blogs",
    description="Return every blog, most recently updated first.",
    responses={
        200: {"content": {"application/json": {"example": [BLOG_EXAMPLE]}}},
        500: SERVER_ERROR_RESPONSE,
    },
    operation_id="blogs_list",
)
@router.get("/", include_in_schema=False, response_model=list[Blog])
async def get_blogs(store: BlogStoreDep) -> list[Blog]:
    """
    List all blogs.

    Parameters
    ----------
    store : BlogStore
        Blog store dependency.

    Returns
    -------
    list[Blog]
        Blogs sorted by ``updatedAt`` descending.
    """
    return await store.list_blogs()


@router.get(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=Blog,
    summary="Get blog by ID",
    description="Retrieve a single blog post by its id.",
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        404: NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
    operation_id="blogs_get_by_id",
)
async def get_blog(blog_id: str, store: BlogStoreDep) -> Blog:
    """
    Get blog by ID.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    store : BlogStore
        Blog store dependency.

    Returns
    -------
    Blog
        Blog data.

    Raises
    ------
    BlogNotFoundError
        If blog not found.
    """
    blog = await store.get_by_id(blog_id)
    if blog is None:
        raise BlogNotFoundError
    return blog


@router.post(
    "/save-draft",
    response_class=ORJSONResponse,
    response_model=Blog,
    summary="Save draft",
    description=(
        "Create a draft when no id is given, otherwise update the existing blog "
        "and set its status back to draft."
    ),
    responses={
        200: {"description": "Draft updated", "content": {"application/json": {"example": BLOG_EXAMPLE}}},
        201: {"description": "Draft created", "content": {"application/json": {"example": BLOG_EXAMPLE}}},
        404: NOT_FOUND_RESPONSE,
        422: VALIDATION_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
    operation_id="blogs_save_draft",
)
async def save_draft(
    response: Response,
    payload: Annotated[
        BlogPayload,
        Body(
            examples={
                "create": {
                    "summary": "Create a new draft",
                    "value": {"title": "My first post", "content": "<p>Hi</p>", "tags": "intro"},
                },
                "update": {
                    "summary": "Update an existing draft",
                    "value": {
                        "id": "9b2f0c6e5d4a4f1e8c7b6a5d4c3b2a19",
                        "title": "My first post",
                        "content": "<p>Hi again</p>",
                        "tags": ["intro"],
                    },
                },
            },
        ),
    ],
    store: BlogStoreDep,
) -> Blog:
    """
    Create or update a draft.

    Parameters
    ----------
    response : Response
        Response object, switched to 201 on create.
    payload : BlogPayload
        Draft fields with an optional id.
    store : BlogStore
        Blog store dependency.

    Returns
    -------
    Blog
        The saved draft.

    Raises
    ------
    BlogNotFoundError
        If the given id does not exist.
    """
    return await save_with_status(store, payload, "draft", response)


@router.api_route(
    "/update/{blog_id}",
    methods=["PATCH", "PUT"],
    response_class=ORJSONResponse,
    response_model=Blog,
    summary="Update blog",
    description="Update title, content or tags. Only provided fields change; status is kept.",
    responses={
        200: {"content": {"application/json": {"example": BLOG_EXAMPLE}}},
        404: NOT_FOUND_RESPONSE,
        422: VALIDATION_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
    operation_id="blogs_update",
)
async def update_blog(
    blog_id: str,
    blog_update: Annotated[
        BlogUpdate,
        Body(
            examples={
                "basic": {
                    "summary": "Update content only",
                    "value": {"content": "<p>Edited</p>"},
                },
            },
        ),
    ],
    store: BlogStoreDep,
) -> Blog:
    """
    Update blog fields in place.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    blog_update : BlogUpdate
        Partial update payload.
    store : BlogStore
        Blog store dependency.

    Returns
    -------
    Blog
        Updated blog.

    Raises
    ------
    BlogNotFoundError
        If blog not found.
    """
    blog = await store.upsert(blog_id, blog_update.to_fields())
    if blog is None:
        raise BlogNotFoundError
    return blog


@router.post(
    "/publish",
    response_class=ORJSONResponse,
    response_model=Blog,
    summary="Publish blog",
    description=(
        "Create a published blog when no id is given, otherwise update the existing "
        "blog and mark it published. Title and content are required."
    ),
    responses={
        200: {"description": "Blog published", "content": {"application/json": {"example": BLOG_EXAMPLE}}},
        201: {"description": "Blog created and published"},
        404: NOT_FOUND_RESPONSE,
        422: VALIDATION_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
    operation_id="blogs_publish",
)
async def publish_blog(
    response: Response,
    payload: BlogPublishPayload,
    store: BlogStoreDep,
) -> Blog:
    """
    Publish a blog, creating it when needed.

    Publishing the same payload twice leaves the blog published with the
    same content; only ``updatedAt`` moves.

    Raises
    ------
    BlogNotFoundError
        If the given id does not exist.
    """
    return await save_with_status(store, payload, "published", response)


@router.delete(
    "/{blog_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete blog",
    description="Delete a blog post permanently.",
    responses={
        200: {"content": {"application/json": {"example": {"message": BLOG_DELETED_MESSAGE}}}},
        404: NOT_FOUND_RESPONSE,
        500: SERVER_ERROR_RESPONSE,
    },
    operation_id="blogs_delete",
)
async def delete_blog(blog_id: str, store: BlogStoreDep) -> MessageResponse:
    """
    Delete blog by ID.

    Parameters
    ----------
    blog_id : str
        Blog identifier.
    store : BlogStore
        Blog store dependency.

    Returns
    -------
    MessageResponse
        Confirmation message.

    Raises
    ------
    BlogNotFoundError
        If blog not found.
    """
    if not await store.delete(blog_id):
        raise BlogNotFoundError
    logger.info(f"Deleted blog {blog_id}")
    return MessageResponse(message=BLOG_DELETED_MESSAGE)
