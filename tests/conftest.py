# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Settings are read on import, so the environment must be set first
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOG_TO_FILE"] = "false"
os.environ["DEVICE_STORAGE"] = "memory"

from collections.abc import AsyncGenerator  # noqa: E402

from asgi_lifespan import LifespanManager  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from pytest import fixture  # noqa: E402

from inkwell.client import BlogApiClient, MemoryDeviceStorage  # noqa: E402
from inkwell.main import app  # noqa: E402


@fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """HTTP client for the app, with a fresh in-memory store per test."""
    async with (
        LifespanManager(app),
        AsyncClient(base_url="http://test", transport=ASGITransport(app=app)) as ac,
    ):
        yield ac


@fixture
def storage() -> MemoryDeviceStorage:
    return MemoryDeviceStorage()


@fixture
async def api(storage: MemoryDeviceStorage) -> AsyncGenerator[BlogApiClient]:
    """Blog API client wired to the app in-process."""
    async with (
        LifespanManager(app),
        BlogApiClient(
            "http://test/api",
            storage=storage,
            transport=ASGITransport(app=app),
            retry_delay=0,
        ) as api_client,
    ):
        yield api_client
