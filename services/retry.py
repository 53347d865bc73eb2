"""Shared retry-with-backoff helper for rate-limited providers."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def linear_backoff(base_seconds: float) -> Callable[[int], float]:
    """Delay of ``base_seconds * attempt`` (attempt is 1-based)."""

    def _delay(attempt: int) -> float:
        return base_seconds * attempt

    return _delay


async def retry_with_backoff(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = 3,
    delay: Callable[[int], float] = linear_backoff(2.0),
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> T:
    """Run ``operation`` until it succeeds or ``max_attempts`` is reached.

    Only exceptions listed in ``retry_on`` trigger another attempt; anything
    else propagates immediately. The last retryable error is re-raised.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")
    last_error: Optional[BaseException] = None
    for attempt in range(1, max_attempts + 1):
        try:
            return await operation()
        except retry_on as exc:
            last_error = exc
            if attempt == max_attempts:
                break
            wait = delay(attempt)
            logger.warning("Attempt %s/%s failed (%s); retrying in %.1fs", attempt, max_attempts, exc, wait)
            await sleep(wait)
    assert last_error is not None
    raise last_error
