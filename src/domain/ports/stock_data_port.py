"""
Port (interface) for stock data providers.
Infrastructure adapters (e.g. YFinanceStockDataProvider) must implement this interface.
"""

from abc import ABC, abstractmethod
from datetime import date

from src.domain.entities.stock_price import Quote, Series


class IStockDataProvider(ABC):
    @abstractmethod
    def get_quote(self, symbol: str) -> Quote:
        """Current price for an already-normalized provider *symbol*."""
        ...

    @abstractmethod
    def get_chart(
        self,
        symbol: str,
        start: date,
        end: date,
        interval: str = "1d",
    ) -> Series:
        """Daily points for *symbol* over ``[start, end]`` (both inclusive).

        Returns an empty Series when the provider has no data for the symbol.
        Raises on network errors and malformed payloads.
        """
        ...
