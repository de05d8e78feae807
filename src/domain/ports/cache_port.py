"""
Port (interface) for the expiring key/value store shared by market-data fetches.
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional


class ICache(ABC):
    @abstractmethod
    def get(self, key: Hashable) -> Optional[Any]:
        """Return the live value for *key*, or None on a miss or expired entry."""
        ...

    @abstractmethod
    def set(self, key: Hashable, value: Any, ttl: float) -> None:
        """Store *value* under *key* for *ttl* seconds, replacing any prior entry."""
        ...
