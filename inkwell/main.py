# inkwell/main.py

"""Inkwell Blog API - draft, auto-save and publish blog posts."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse

from inkwell.configs import settings
from inkwell.errors import (
    BlogNotFoundError,
    StoreError,
    not_found_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)
from inkwell.middleware import LoggingMiddleware, configure_cors, lifespan
from inkwell.routes import blog_router
from inkwell.schemas import HealthCheckResponse, MessageResponse
from inkwell.schemas.health import StoreHealth
from inkwell.stores import BlogStore
from inkwell.utils.helpers import utc_now

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog authoring API: drafts, updates and publishing",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)

app.include_router(blog_router)

errors = [
    (StoreError, store_exception_handler),
    (BlogNotFoundError, not_found_exception_handler),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]


@app.get(
    "/",
    tags=["🩺 Health"],
    summary="API root",
    response_model=MessageResponse,
    response_class=ORJSONResponse,
    operation_id="root",
)
async def root() -> MessageResponse:
    """Report that the API is up."""
    return MessageResponse(message="API is running...")


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "timestamp": "2025-01-01T10:00:00+00:00",
                        "store": {"backend": "memory", "status": "healthy", "total_blogs": 3},
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Health check endpoint with blog store status.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    HealthCheckResponse
        Overall status plus the active store backend and its reachability.
        ``status`` is ``degraded`` when the store does not answer.

    Examples
    --------
    Request
        GET /health
    Response
        200 OK
        {"version": "1.0.0", "status": "ok", "timestamp": "...", "store": {"backend": "memory", ...}}
    """
    store: BlogStore | None = getattr(request.app.state, "blog_store", None)
    if store is None:
        store_health = StoreHealth(backend="none", status="unavailable")
    elif await store.ping():
        store_health = StoreHealth(
            backend=store.backend,
            status="healthy",
            total_blogs=await store.count(),
        )
    else:
        store_health = StoreHealth(backend=store.backend, status="unreachable")

    return HealthCheckResponse(
        version=app.version,
        status="ok" if store_health.status == "healthy" else "degraded",
        timestamp=utc_now().isoformat(),
        store=store_health,
    )
