"""
Infrastructure adapter: yfinance → IStockDataProvider.
All yfinance-specific details (ticker.info, fast_info, history()) are confined here;
the rest of the codebase depends only on IStockDataProvider.

Raw frames are decoded into domain entities at this boundary; a frame without
the expected OHLCV columns raises ProviderPayloadError instead of leaking inward.
"""

import math
from datetime import date, timedelta
from typing import Any, Optional

import yfinance as yf

from src.domain.entities.stock_price import PricePoint, Quote, Series
from src.domain.exceptions import ProviderPayloadError
from src.domain.ports.stock_data_port import IStockDataProvider

REQUIRED_COLUMNS = ("Open", "High", "Low", "Close", "Volume")


def _clean_float(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


def decode_history(history: Any, symbol: str, start: date, end: date, interval: str) -> Series:
    """Convert a yfinance ``history()`` frame into a Series."""
    if history is None or history.empty:
        return Series.empty(symbol, start, end, interval)

    missing = [col for col in REQUIRED_COLUMNS if col not in history.columns]
    if missing:
        raise ProviderPayloadError(
            f"History for {symbol!r} is missing columns: {', '.join(missing)}"
        )

    by_date: dict[date, PricePoint] = {}
    for index, row in history.iterrows():
        ohlc = [_clean_float(row[col]) for col in ("Open", "High", "Low", "Close")]
        if any(v is None for v in ohlc):
            continue
        open_, high, low, close = ohlc
        day = index.date() if hasattr(index, "date") else index
        adj_close = _clean_float(row["Adj Close"]) if "Adj Close" in history.columns else None
        by_date[day] = PricePoint(
            date=day,
            open=round(open_, 4),
            high=round(high, 4),
            low=round(low, 4),
            close=round(close, 4),
            volume=int(_clean_float(row["Volume"]) or 0),
            adj_close=round(adj_close if adj_close is not None else close, 4),
        )

    points = [by_date[day] for day in sorted(by_date)]
    return Series(symbol=symbol, start=start, end=end, interval=interval, points=points)


class YFinanceStockDataProvider(IStockDataProvider):
    """Fetches stock market data from Yahoo Finance via the yfinance library."""

    def __init__(self, timeout: float = 10.0) -> None:
        self._timeout = timeout

    def get_quote(self, symbol: str) -> Quote:
        ticker = yf.Ticker(symbol)
        fast_info = ticker.fast_info

        price = _clean_float(getattr(fast_info, "last_price", None))
        previous_close = _clean_float(getattr(fast_info, "previous_close", None))
        info: dict = {}
        if price is None:
            info = ticker.info or {}
            price = _clean_float(info.get("regularMarketPrice")) or _clean_float(
                info.get("currentPrice")
            )

        return Quote(
            symbol=symbol,
            price=round(price, 4) if price is not None else None,
            previous_close=previous_close or _clean_float(info.get("previousClose")),
            currency=getattr(fast_info, "currency", None) or info.get("currency", "IDR"),
            market_state=info.get("marketState", "UNKNOWN"),
        )

    def get_chart(
        self,
        symbol: str,
        start: date,
        end: date,
        interval: str = "1d",
    ) -> Series:
        ticker = yf.Ticker(symbol)
        # yfinance treats `end` as exclusive; `timeout` bounds the HTTP request itself
        history = ticker.history(
            start=start.isoformat(),
            end=(end + timedelta(days=1)).isoformat(),
            interval=interval,
            auto_adjust=False,
            timeout=self._timeout,
        )
        return decode_history(history, symbol, start, end, interval)
