"""
Data access layer: symbol normalization + shared cache + retrying provider calls.
Depends only on Domain ports and services — no infrastructure imports.

Both fetches populate the shared cache on success; that is how repeated requests
for the same symbol inside the TTL window avoid extra provider round-trips.
Failures are never cached and always reach the caller.
"""

import asyncio
import logging
from datetime import date
from typing import Callable, Optional

from src.application.services.retry import RetryPolicy
from src.domain.entities.stock_price import Quote, Series
from src.domain.ports.cache_port import ICache
from src.domain.ports.stock_data_port import IStockDataProvider
from src.domain.services.symbols import normalize_symbol

logger = logging.getLogger(__name__)

CHART_TTL_SECONDS = 15 * 60
QUOTE_TTL_SECONDS = 60


class MarketDataGateway:
    def __init__(
        self,
        provider: IStockDataProvider,
        cache: ICache,
        retry_policy: Optional[RetryPolicy] = None,
        normalize: Callable[[str], str] = normalize_symbol,
        chart_ttl: float = CHART_TTL_SECONDS,
        quote_ttl: float = QUOTE_TTL_SECONDS,
    ) -> None:
        self._provider = provider
        self._cache = cache
        self._retry = retry_policy or RetryPolicy()
        self._normalize = normalize
        self._chart_ttl = chart_ttl
        self._quote_ttl = quote_ttl

    async def fetch_series(
        self, ticker: str, start: date, end: date, interval: str = "1d"
    ) -> Series:
        """Daily series for *ticker* over ``[start, end]``.

        Raises:
            The provider's last exception once the retry budget is exhausted.
        """
        symbol = self._normalize(ticker)
        key = ("chart", symbol, start.isoformat(), end.isoformat(), interval)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        series = await self._retry.run(
            lambda: asyncio.to_thread(self._provider.get_chart, symbol, start, end, interval),
            label=f"chart {symbol}",
        )
        self._cache.set(key, series, self._chart_ttl)
        logger.debug("Cached %d points for %s", len(series), symbol)
        return series

    async def fetch_quote(self, ticker: str) -> Quote:
        """Latest quote for *ticker*; ``Quote.price`` may be None."""
        symbol = self._normalize(ticker)
        key = ("quote", symbol)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        quote = await self._retry.run(
            lambda: asyncio.to_thread(self._provider.get_quote, symbol),
            label=f"quote {symbol}",
        )
        self._cache.set(key, quote, self._quote_ttl)
        return quote
