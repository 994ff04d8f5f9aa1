"""Custom validation error handling for FastAPI."""

from logging import getLogger
from typing import cast

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_422_UNPROCESSABLE_CONTENT

from inkwell.configs import file_logger
from inkwell.utils.helpers import host

logger = file_logger(getLogger(__name__))


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> ORJSONResponse:
    """
    Handle Pydantic validation errors with cleaner response format.

    Args:
        request: The incoming request.
        exc: The RequestValidationError exception.

    Returns:
        ORJSONResponse with formatted validation errors.
    """
    exec_error = cast(RequestValidationError, exc)

    formatted_errors = []
    for error in exec_error.errors():
        formatted_error = {
            "field": ".".join(str(loc) for loc in error.get("loc", [])[1:]),  # Skip 'body'
            "message": error.get("msg", "Invalid value"),
            "type": error.get("type", "validation_error"),
        }
        if "input" in error:
            formatted_error["input"] = error["input"]
        formatted_errors.append(formatted_error)

    logger.warning(
        f"Validation error for ip: {host(request)} at endpoint {request.url.path}: {formatted_errors}",
    )

    return ORJSONResponse(
        status_code=HTTP_422_UNPROCESSABLE_CONTENT,
        content=jsonable_encoder({"message": "Validation failed", "errors": formatted_errors}),
    )
