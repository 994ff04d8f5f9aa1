from inkwell.decorators.with_retry import RETRIABLE_EXCEPTIONS, _log_before_sleep, with_retry

__all__ = [
    "RETRIABLE_EXCEPTIONS",
    "_log_before_sleep",
    "with_retry",
]
