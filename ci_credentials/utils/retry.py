"""
Retry an async operation with exponential backoff.
"""

import asyncio
import logging
import random
from typing import Any, Awaitable, Callable, Optional, TypeVar, Union

from ..config import RetryConfig

T = TypeVar("T")

logger = logging.getLogger(__name__)

RetryPredicate = Union[bool, Callable[[BaseException], bool]]


async def default_sleep(seconds: float) -> None:
    """Suspend for the given number of seconds."""
    await asyncio.sleep(seconds)


def compute_delay(attempt: int, base_delay: float, max_delay: Optional[float] = None,
                  jitter: bool = True) -> float:
    """
    Compute the backoff delay before the next attempt.

    Args:
        attempt: Zero-based number of the attempt that just failed
        base_delay: Delay in seconds for the first retry
        max_delay: Optional upper bound in seconds
        jitter: Draw the delay uniformly from [0, delay] ("full jitter")

    Returns:
        float: Seconds to wait
    """
    delay = base_delay * (2 ** attempt)
    if max_delay is not None:
        delay = min(delay, max_delay)
    if jitter:
        delay = random.uniform(0, delay)
    return delay


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    is_retryable: RetryPredicate = True,
    *,
    config: Optional[RetryConfig] = None,
    max_attempts: Optional[int] = None,
    base_delay: Optional[float] = None,
    max_delay: Optional[float] = None,
    jitter: Optional[bool] = None,
    sleep: Callable[[float], Awaitable[Any]] = default_sleep,
) -> T:
    """Await ``operation`` until it succeeds, retrying retryable failures.

    A failure that ``is_retryable`` rejects propagates at once, after a single
    attempt. Once ``max_attempts`` attempts have failed, the last exception
    propagates unchanged.

    Args:
        operation: Zero-argument callable returning an awaitable.
        is_retryable: Predicate called with the exception, or a plain bool.
        config: RetryConfig supplying defaults for the keywords below.
        max_attempts: Total number of attempts, including the first.
        base_delay: Seconds to wait before the first retry; doubled each time.
        max_delay: Optional cap on the delay.
        jitter: Randomize each delay between zero and its computed value.
        sleep: Coroutine function used to wait between attempts.

    Returns:
        The result of the first successful attempt.
    """
    config = config or RetryConfig()
    max_attempts = config.max_attempts if max_attempts is None else max_attempts
    base_delay = config.base_delay if base_delay is None else base_delay
    max_delay = config.max_delay if max_delay is None else max_delay
    jitter = config.jitter if jitter is None else jitter

    attempt = 0
    while True:
        try:
            return await operation()
        except Exception as exc:
            retryable = is_retryable(exc) if callable(is_retryable) else is_retryable
            if not retryable or attempt + 1 >= max_attempts:
                raise

            delay = compute_delay(attempt, base_delay, max_delay, jitter)
            logger.debug(
                "Attempt %d/%d failed with %s, retrying in %.3fs",
                attempt + 1,
                max_attempts,
                type(exc).__name__,
                delay,
            )
            await sleep(delay)
            attempt += 1
