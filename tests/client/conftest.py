# tests/client/conftest.py
"""Fixtures for client tests."""

from collections.abc import AsyncGenerator

from httpx import ConnectError, MockTransport, Request, Response
from pytest import fixture

from inkwell.client import BlogApiClient, MemoryDeviceStorage


def refuse(request: Request) -> Response:
    raise ConnectError("Connection refused", request=request)


@fixture
async def offline_api(storage: MemoryDeviceStorage) -> AsyncGenerator[BlogApiClient]:
    """A client whose server is never reachable."""
    async with BlogApiClient(
        "http://test/api",
        storage=storage,
        transport=MockTransport(refuse),
        retry_delay=0,
    ) as api_client:
        yield api_client
