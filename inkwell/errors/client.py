"""Errors raised by the blog API client."""

from enum import StrEnum

from httpx import HTTPStatusError, Response, TimeoutException, TransportError

NETWORK_MESSAGE = "Connection issue detected. Please check your internet connection."
NOT_FOUND_MESSAGE = "The requested resource was not found."
SERVER_MESSAGE = "Server error. Please try again later."
NO_RESPONSE_MESSAGE = "Server not responding. Please try again later."
DEFAULT_MESSAGE = "Request failed."


class ApiErrorKind(StrEnum):
    """Classification of a failed API call."""

    NETWORK = "network"
    NOT_FOUND = "not_found"
    SERVER = "server"
    CLIENT = "client"


class ApiError(Exception):
    """A failed API call, classified for user-facing messages."""

    def __init__(
        self,
        kind: ApiErrorKind,
        friendly_message: str,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(detail or friendly_message)
        self.kind = kind
        self.friendly_message = friendly_message
        self.status_code = status_code
        self.detail = detail

    @property
    def is_network_error(self) -> bool:
        return self.kind is ApiErrorKind.NETWORK

    @classmethod
    def from_transport_error(cls, exc: TransportError) -> "ApiError":
        message = NO_RESPONSE_MESSAGE if isinstance(exc, TimeoutException) else NETWORK_MESSAGE
        return cls(ApiErrorKind.NETWORK, message, detail=str(exc) or type(exc).__name__)

    @classmethod
    def from_status_error(cls, exc: HTTPStatusError) -> "ApiError":
        response = exc.response
        status_code = response.status_code
        detail = _response_message(response)
        if status_code == 404:
            return cls(ApiErrorKind.NOT_FOUND, NOT_FOUND_MESSAGE, status_code, detail)
        if status_code >= 500:
            return cls(ApiErrorKind.SERVER, SERVER_MESSAGE, status_code, detail)
        return cls(ApiErrorKind.CLIENT, detail or DEFAULT_MESSAGE, status_code, detail)


def _response_message(response: Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return response.text or None
    if isinstance(body, dict):
        return body.get("message") or body.get("detail")
    return None
