"""
Explicit outcome of an awaited fetch: either a value or the exception it raised.

Lets the orchestrator gather independent fetches and decide per item how to
degrade, instead of catching inside every fetch.
"""

from dataclasses import dataclass
from typing import Awaitable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Settled(Generic[T]):
    value: Optional[T] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def settle(awaitable: Awaitable[T]) -> Settled[T]:
    try:
        return Settled(value=await awaitable)
    except Exception as exc:
        return Settled(error=exc)
