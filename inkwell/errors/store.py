from logging import getLogger

from starlette.status import HTTP_404_NOT_FOUND, HTTP_500_INTERNAL_SERVER_ERROR

from inkwell.configs import BLOG_NOT_FOUND_MESSAGE, SERVER_ERROR_MESSAGE, file_logger
from inkwell.errors.base import BaseAppError, create_exception_handler

logger = file_logger(getLogger(__name__))


class StoreError(BaseAppError):
    """Base exception for blog store errors."""

    def __init__(
        self,
        detail: str = "Store Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        super().__init__(detail, status_code)


class StoreConnectionError(StoreError):
    """Exception raised when the store cannot be reached."""

    def __init__(
        self,
        detail: str = "Failed to connect to the blog store",
    ) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class StoreConfigurationError(StoreError):
    """Exception raised when the store configuration is invalid."""

    def __init__(
        self,
        detail: str = "Invalid blog store configuration",
    ) -> None:
        super().__init__(detail, HTTP_500_INTERNAL_SERVER_ERROR)


class BlogNotFoundError(BaseAppError):
    """Exception raised when a blog id does not exist in the store."""

    def __init__(self, detail: str = BLOG_NOT_FOUND_MESSAGE) -> None:
        super().__init__(detail, HTTP_404_NOT_FOUND)


# Store failures never leak their detail to the client.
store_exception_handler = create_exception_handler(logger, public_message=SERVER_ERROR_MESSAGE)
not_found_exception_handler = create_exception_handler(logger)
