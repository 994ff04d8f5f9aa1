from collections.abc import Awaitable, Callable
from logging import getLogger
from typing import ParamSpec, TypeVar

from httpx import NetworkError, RemoteProtocolError, TimeoutException
from tenacity import (
    RetryCallState,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from inkwell.configs import file_logger, settings

logger = file_logger(getLogger(__name__))

P = ParamSpec("P")
T = TypeVar("T")
# Transport failures worth a second attempt; HTTP error statuses are not retried
RETRIABLE_EXCEPTIONS = (TimeoutException, NetworkError, RemoteProtocolError)


def _log_before_sleep(
    max_attempts: int,
) -> Callable[[RetryCallState], None]:
    """
    Create a before_sleep callback that logs retry attempts.

    Args:
        max_attempts: Total number of attempts, for the log message.

    Returns:
        Callback function for tenacity before_sleep.
    """

    def before_sleep_callback(retry_state: RetryCallState) -> None:
        exception = retry_state.outcome.exception() if retry_state.outcome else None
        sleep_duration = retry_state.next_action.sleep if retry_state.next_action else 0
        func_name = retry_state.fn.__name__ if retry_state.fn else "unknown"

        logger.warning(
            "Retry %d/%d for %s after %.2fs delay. Exception: %s",
            retry_state.attempt_number,
            max_attempts - 1,
            func_name,
            sleep_duration,
            exception,
        )

    return before_sleep_callback


def with_retry(
    max_attempts: int = 2,
    delay: float = settings.API_RETRY_DELAY,
    exec_retry: tuple[type[Exception], ...] = RETRIABLE_EXCEPTIONS,
) -> Callable[[Callable[P, Awaitable[T]]], Callable[P, Awaitable[T]]]:
    """
    Retry an async function on transport failures with a fixed wait, using Tenacity.

    The default is one retry after one second, after which the last
    exception is re-raised unchanged.

    Args:
        max_attempts: Total attempts including the first call.
        delay: Seconds to wait between attempts.
        exec_retry: Tuple of exception types to retry on.

    Returns:
        Decorated function with retry logic.
    """
    return retry(
        stop=stop_after_attempt(max_attempts),
        wait=wait_fixed(delay),
        retry=retry_if_exception_type(exec_retry),
        before_sleep=_log_before_sleep(max_attempts),
        reraise=True,
    )
