"""
FinalTake — Retry Utility
Async retry decorator with exponential backoff and a per-attempt timeout.
Used by every upstream client (TMDB, OMDb director, YouTube trailer).
"""

import asyncio
import logging
from functools import wraps
from typing import Awaitable, Callable, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

RETRYABLE = (httpx.HTTPError, asyncio.TimeoutError)


class RetryExhausted(Exception):
    """Every attempt of a wrapped call failed."""


def backoff_delay(attempt: int, base_delay: float, max_delay: float) -> float:
    """Delay before retry number `attempt` (0-based): base * 2^attempt, capped."""
    return min(base_delay * (2 ** attempt), max_delay)


def with_retry(
    max_retries: int = 2,
    base_delay: float = 1.0,
    max_delay: float = 5.0,
    timeout: float = 10.0,
    exceptions: tuple = RETRYABLE,
):
    """
    Retry an async function on `exceptions`.

    Args:
        max_retries: Retries after the first attempt
        base_delay: Delay before the first retry, doubled each time
        max_delay: Upper bound on a single delay
        timeout: Per-attempt timeout in seconds
        exceptions: Exception types that trigger a retry; others propagate
    """
    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            last_error = None

            for attempt in range(max_retries + 1):
                try:
                    return await asyncio.wait_for(func(*args, **kwargs), timeout=timeout)
                except exceptions as e:
                    last_error = e
                    if attempt == max_retries:
                        logger.error(f"{func.__name__} failed after {attempt + 1} attempts: {e!r}")
                        break
                    delay = backoff_delay(attempt, base_delay, max_delay)
                    logger.warning(
                        f"{func.__name__} attempt {attempt + 1}/{max_retries + 1} "
                        f"raised {e.__class__.__name__}, retrying in {delay}s"
                    )
                    await asyncio.sleep(delay)

            raise RetryExhausted(
                f"{func.__name__} failed after {max_retries + 1} attempts: {last_error}"
            ) from last_error

        return wrapper
    return decorator
