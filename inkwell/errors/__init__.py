from inkwell.errors.base import BaseAppError, create_exception_handler
from inkwell.errors.client import ApiError, ApiErrorKind
from inkwell.errors.store import (
    BlogNotFoundError,
    StoreConfigurationError,
    StoreConnectionError,
    StoreError,
    not_found_exception_handler,
    store_exception_handler,
)
from inkwell.errors.validation import validation_exception_handler

__all__ = [
    "ApiError",
    "ApiErrorKind",
    "BaseAppError",
    "BlogNotFoundError",
    "StoreConfigurationError",
    "StoreConnectionError",
    "StoreError",
    "create_exception_handler",
    "not_found_exception_handler",
    "store_exception_handler",
    "validation_exception_handler",
]
