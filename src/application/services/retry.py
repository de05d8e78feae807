"""
Fixed-schedule retry for provider calls.

Every failure is retried the same way, whatever its cause; after the last
attempt the final exception propagates to the caller.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_DELAYS = (0.2, 0.5, 1.0)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Args:
        delays:          Seconds to wait after each failed attempt. The number of
                         attempts is ``len(delays) + 1``.
        attempt_timeout: Per-attempt deadline in seconds; None disables it.
        sleep:           Awaitable sleep, injectable for tests.
    """

    delays: tuple[float, ...] = DEFAULT_DELAYS
    attempt_timeout: Optional[float] = 10.0
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep

    @property
    def max_attempts(self) -> int:
        return len(self.delays) + 1

    async def _attempt(self, operation: Callable[[], Awaitable[T]]) -> T:
        if self.attempt_timeout is None:
            return await operation()
        return await asyncio.wait_for(operation(), timeout=self.attempt_timeout)

    async def run(self, operation: Callable[[], Awaitable[T]], label: str = "operation") -> T:
        """Await ``operation()`` until it succeeds or the attempt budget is spent."""
        for attempt, delay in enumerate(self.delays, start=1):
            try:
                return await self._attempt(operation)
            except Exception as exc:
                logger.warning(
                    "%s failed (attempt %d/%d): %r; retrying in %.1fs",
                    label, attempt, self.max_attempts, exc, delay,
                )
                await self.sleep(delay)
        return await self._attempt(operation)


async def with_retry(operation: Callable[[], Awaitable[T]], policy: Optional[RetryPolicy] = None) -> T:
    """Run *operation* under *policy* (the default schedule when omitted)."""
    return await (policy or RetryPolicy()).run(operation)
