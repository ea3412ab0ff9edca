"""Retry policy for downloading scheme documents."""

import functools
import time
from collections.abc import Callable
from typing import ParamSpec, TypeVar

import httpx

from jbtheme.logger import get_logger

logger = get_logger(__name__)

P = ParamSpec("P")
T = TypeVar("T")

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BACKOFF_FACTOR = 2.0
DEFAULT_INITIAL_DELAY = 0.5


def is_transient_http_error(exc: Exception) -> bool:
    """Check whether a failed request is worth repeating.

    Connection problems, timeouts and 5xx responses are transient. Client
    errors (4xx) and anything that is not an httpx error are not.

    Args:
        exc: The exception raised by the request.

    Returns:
        True if the request should be retried.
    """
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.is_server_error
    return isinstance(exc, httpx.TransportError)


def with_retry(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    backoff_factor: float = DEFAULT_BACKOFF_FACTOR,
    initial_delay: float = DEFAULT_INITIAL_DELAY,
    should_retry: Callable[[Exception], bool] = is_transient_http_error,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator that retries a request with exponential backoff.

    Exceptions rejected by ``should_retry`` propagate on the spot. When every
    attempt fails, the last exception is re-raised.

    Args:
        max_attempts: Maximum number of attempts (including the first one).
        backoff_factor: Factor to multiply delay by after each retry.
        initial_delay: Initial delay in seconds before first retry.
        should_retry: Predicate deciding whether an exception is transient.

    Returns:
        Decorator function.

    Example:
        @with_retry(max_attempts=3)
        def download(client, url):
            return client.get(url).raise_for_status()
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        func_name = getattr(func, "__name__", repr(func))

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            if max_attempts < 1:
                msg = f"{func_name} was called with max_attempts={max_attempts}"
                raise ValueError(msg)

            delay = initial_delay
            attempt = 1
            while True:
                try:
                    return func(*args, **kwargs)
                except Exception as exc:
                    if not should_retry(exc) or attempt >= max_attempts:
                        if attempt > 1:
                            logger.warning(f"{func_name} gave up after {attempt} attempts: {exc}")
                        raise
                    logger.debug(
                        f"{func_name} failed (attempt {attempt}/{max_attempts}), retrying in {delay:.1f}s: {exc}"
                    )
                    time.sleep(delay)
                    delay *= backoff_factor
                    attempt += 1

        return wrapper

    return decorator
