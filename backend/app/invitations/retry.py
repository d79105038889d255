"""Exponential backoff with jitter for fallible async operations."""

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def backoff_delay(attempt: int, base_delay: float = 1.0, max_jitter: float = 1.0) -> float:
    """Delay in seconds before the retry that follows 0-based ``attempt``."""
    return base_delay * (2**attempt) + random.uniform(0, max_jitter)


async def execute_with_retry(
    operation: Callable[[], Awaitable[T]],
    max_attempts: int = 3,
    base_delay: float = 1.0,
    max_jitter: float = 1.0,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` up to ``max_attempts`` times, backing off between failures.

    The operation must be safe to repeat and is responsible for its own
    per-attempt timeout. When every attempt fails the last exception is
    re-raised as-is.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt.
        max_attempts: Total number of attempts, including the first.
        base_delay: Seconds before the first retry; doubled for each later one.
        max_jitter: Upper bound of the random seconds added to every delay.
        sleep: Awaitable sleep function (injectable for tests).
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    for attempt in range(max_attempts):
        try:
            return await operation()
        except Exception as exc:
            if attempt + 1 >= max_attempts:
                raise
            delay = backoff_delay(attempt, base_delay, max_jitter)
            logger.warning(
                "Attempt %d/%d failed (%s: %s), retrying in %.2fs",
                attempt + 1,
                max_attempts,
                type(exc).__name__,
                exc,
                delay,
            )
            await sleep(delay)

    raise AssertionError("unreachable")  # pragma: no cover
