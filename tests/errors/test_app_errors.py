# tests/errors/test_app_errors.py
"""Tests for inkwell/errors base, store and validation handlers."""

from unittest.mock import MagicMock

import orjson
import pytest
from fastapi.exceptions import RequestValidationError

from inkwell.errors import (
    BaseAppError,
    BlogNotFoundError,
    StoreConnectionError,
    StoreError,
    create_exception_handler,
    not_found_exception_handler,
    store_exception_handler,
    validation_exception_handler,
)


@pytest.fixture
def request_mock() -> MagicMock:
    request = MagicMock()
    request.client.host = "192.168.1.1"
    request.url.path = "/api/blogs"
    return request


class TestBaseAppError:
    """Tests for BaseAppError exception."""

    def test_default_values(self) -> None:
        """Test BaseAppError default values."""
        error = BaseAppError()
        assert error.detail == "Internal Server Error"
        assert error.status_code == 500

    def test_str_representation(self) -> None:
        """Test BaseAppError string representation."""
        assert str(BaseAppError(detail="Test error")) == "Test error"

    def test_store_error_hierarchy(self) -> None:
        """Test the store error classes and their status codes."""
        assert issubclass(StoreConnectionError, StoreError)
        assert BlogNotFoundError().status_code == 404
        assert BlogNotFoundError().detail == "Blog not found"


class TestCreateExceptionHandler:
    """Tests for create_exception_handler factory function."""

    async def test_handler_with_app_error(self, request_mock: MagicMock) -> None:
        """Test the handler answers with the error status and detail."""
        logger = MagicMock()
        handler = create_exception_handler(logger)

        response = await handler(request_mock, BaseAppError(detail="Test error", status_code=400))

        assert response.status_code == 400
        assert response.body == b'{"message":"Test error"}'
        logger.warning.assert_called_once_with(
            "Test error for ip: 192.168.1.1 for endpoint /api/blogs",
        )

    async def test_handler_with_generic_exception(self, request_mock: MagicMock) -> None:
        """Test the handler answers 500 for other exceptions."""
        handler = create_exception_handler(MagicMock())

        response = await handler(request_mock, ValueError("boom"))

        assert response.status_code == 500
        assert response.body == b'{"message":"Internal Server Error"}'

    async def test_public_message_hides_detail(self, request_mock: MagicMock) -> None:
        """Test that a public message replaces the detail."""
        logger = MagicMock()
        handler = create_exception_handler(logger, public_message="Server error")

        response = await handler(request_mock, StoreError(detail="password authentication failed"))

        assert response.body == b'{"message":"Server error"}'
        assert "password authentication failed" in logger.warning.call_args.args[0]


class TestRegisteredHandlers:
    """Tests for the handlers registered on the app."""

    async def test_store_handler(self, request_mock: MagicMock) -> None:
        """Test the store error handler response."""
        response = await store_exception_handler(request_mock, StoreConnectionError())
        assert response.status_code == 500
        assert orjson.loads(response.body) == {"message": "Server error"}

    async def test_not_found_handler(self, request_mock: MagicMock) -> None:
        """Test the not-found handler response."""
        response = await not_found_exception_handler(request_mock, BlogNotFoundError())
        assert response.status_code == 404
        assert orjson.loads(response.body) == {"message": "Blog not found"}

    async def test_validation_handler(self, request_mock: MagicMock) -> None:
        """Test the validation handler response."""
        exc = RequestValidationError(
            [
                {
                    "loc": ("body", "title"),
                    "msg": "String should have at most 200 characters",
                    "type": "string_too_long",
                    "input": "x" * 201,
                },
            ],
        )

        response = await validation_exception_handler(request_mock, exc)

        assert response.status_code == 422
        body = orjson.loads(response.body)
        assert body["message"] == "Validation failed"
        assert body["errors"][0]["field"] == "title"
        assert body["errors"][0]["type"] == "string_too_long"
