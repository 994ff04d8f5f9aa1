# inkwell/middleware/middleware.py
"""
Middleware components for the Inkwell blog API.

This module contains request logging and CORS handling, plus the lifespan
event handler that selects the blog store on startup and closes it on
shutdown.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from logging import basicConfig, getLogger
from time import perf_counter

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from rich.logging import RichHandler
from rich.traceback import install
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from inkwell.configs import file_logger, settings
from inkwell.stores import select_blog_store
from inkwell.utils.helpers import get_summary, host

# --- Logging Configuration ---
basicConfig(
    level=settings.LOG_LEVEL,
    format="%(message)s",
    datefmt="%X",
    handlers=[RichHandler(rich_tracebacks=True)],
)
logger = file_logger(getLogger("rich"))

install()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Select the blog store on startup and release it on shutdown."""
    logger.info(f"Starting {app.title}...")

    try:
        if settings.LOG_TO_FILE:
            logger.info(f"Logging to file enabled: {settings.LOG_FILE}")

        store = await select_blog_store()
        app.state.blog_store = store

        logger.info(f"Blog store ready: {store.backend}")
        logger.info("Services:")
        logger.info(f"  - Backend API: http://{settings.HOST}:{settings.PORT}/api/blogs")
        logger.info(f"  - API Documentation: http://{settings.HOST}:{settings.PORT}/docs")
        logger.info(f"  - Health Check: http://{settings.HOST}:{settings.PORT}/health")

    except Exception:
        logger.exception("Failed to initialize services")
        raise

    yield

    logger.info(f"Shutting down {app.title}...")

    try:
        await store.close()
        logger.info("Services cleaned up successfully")

    except Exception:
        logger.exception("Error during service cleanup")


def configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware for the editor front-ends."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )


class LoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        """Log request summary and timing information."""

        start_time = perf_counter()
        summary = get_summary(request)

        route_info = summary or f"{request.method} {request.url.path}"
        logger.info(f"Request: {route_info}, from ip: {host(request)}")

        response = await call_next(request)
        duration = perf_counter() - start_time

        logger.info(
            f"Response: {response.status_code} for {request.method} {request.url.path} "
            f"in {duration:.2f}s",
        )

        return response
