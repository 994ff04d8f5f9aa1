from collections.abc import Awaitable, Callable
from logging import Logger

from fastapi import Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from inkwell.utils.helpers import host


class BaseAppError(Exception):
    """Base exception class for application errors."""

    def __init__(
        self,
        detail: str = "Internal Server Error",
        status_code: int = HTTP_500_INTERNAL_SERVER_ERROR,
    ) -> None:
        self.detail = detail
        self.status_code = status_code

    def __str__(self) -> str:
        return self.detail


def create_exception_handler(
    logger: Logger,
    public_message: str | None = None,
) -> Callable[[Request, Exception], Awaitable[ORJSONResponse]]:
    """
    Create a standardized exception handler for the application.

    Args:
        logger: Logger instance to use for logging exceptions.
        public_message: Message sent to the client instead of the error detail.
            The detail is still logged.

    Returns:
        A callable exception handler.
    """

    async def handler(request: Request, exc: Exception) -> ORJSONResponse:
        status_code = HTTP_500_INTERNAL_SERVER_ERROR
        detail = "Internal Server Error"

        if hasattr(exc, "status_code"):
            status_code = exc.status_code
        if hasattr(exc, "detail"):
            detail = exc.detail

        logger.warning(f"{detail} for ip: {host(request)} for endpoint {request.url.path}")

        return ORJSONResponse(
            content={"message": public_message or detail},
            status_code=status_code,
        )

    return handler
