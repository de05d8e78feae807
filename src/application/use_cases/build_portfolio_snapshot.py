"""
Use-case: build the portfolio snapshot, every call enriched with live market
data and compared against the JKSE and LQ45 benchmarks.
Depends only on Domain ports/services and application services — no infrastructure imports.

Failure policy, from narrowest to widest:
  * an index fetch fails          → that index is an empty series
  * LQ45 comes back empty         → alternative spellings are tried in order
  * a call's series fetch fails   → empty history for that call
  * a call's quote is unusable    → last historical close, then the static price
  * anything else blows up        → every call rebuilt from static fields only
"""

import asyncio
import logging
from datetime import date, timedelta
from typing import Callable, Iterable, Optional, Sequence

from src.application.services.market_data_gateway import MarketDataGateway
from src.application.services.settled import Settled, settle
from src.domain.entities.stock_call import CallResult, PortfolioSnapshot, StockCall
from src.domain.entities.stock_price import IndexSnapshot, Quote, Series
from src.domain.services.metrics import (
    current_gain,
    index_relative_return,
    max_gain_since_call,
    resolve_current_price,
)

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_DAYS = 365
JKSE_TICKER = "^JKSE"
LQ45_TICKER = "LQ45.JK"
LQ45_ALTERNATIVES = ("^LQ45", "IDX:LQ45", "LQ45.JK")


def evaluate_call(
    call: StockCall,
    series: Series,
    current_price: float,
    indices: IndexSnapshot,
    price_source: str,
) -> CallResult:
    """Apply the metrics to one call. Pure."""
    best = max_gain_since_call(series, call.call_date, call.entry_price, current_price)
    return CallResult(
        call=call,
        current_price=current_price,
        historical_data=series,
        current_gain=current_gain(call.entry_price, current_price),
        max_gain=best.max_gain,
        days_to_max=best.days_to_max,
        jkse_return=index_relative_return(indices.jkse, call.call_date),
        lq45_return=index_relative_return(indices.lq45, call.call_date),
        price_source=price_source,
    )


def static_snapshot(calls: Iterable[StockCall], start: date, end: date) -> PortfolioSnapshot:
    """Snapshot built only from configured call data, with no market data at all."""
    indices = IndexSnapshot(
        jkse=Series.empty(JKSE_TICKER, start, end),
        lq45=Series.empty(LQ45_TICKER, start, end),
    )
    results = [
        evaluate_call(
            call,
            Series.empty(call.ticker, start, end),
            call.current_price,
            indices,
            price_source="static",
        )
        for call in calls
    ]
    return PortfolioSnapshot(results=results, indices=indices, as_of=end, degraded=True)


class BuildPortfolioSnapshotUseCase:
    def __init__(
        self,
        gateway: MarketDataGateway,
        jkse_ticker: str = JKSE_TICKER,
        lq45_ticker: str = LQ45_TICKER,
        lq45_alternatives: Sequence[str] = LQ45_ALTERNATIVES,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._gateway = gateway
        self._jkse_ticker = jkse_ticker
        self._lq45_ticker = lq45_ticker
        self._lq45_alternatives = tuple(lq45_alternatives)
        self._today = today

    async def execute(
        self,
        calls: Sequence[StockCall],
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
    ) -> PortfolioSnapshot:
        """Analyse *calls* over the last *lookback_days* days ending today.

        Never raises for market-data problems; the worst case is a snapshot with
        ``degraded=True`` built from static call data.

        Raises:
            ValueError: if *lookback_days* is not positive.
        """
        if lookback_days <= 0:
            raise ValueError("lookback_days must be positive")
        end = self._today()
        start = end - timedelta(days=lookback_days)
        try:
            return await self._build(calls, start, end)
        except Exception:
            logger.exception("Snapshot pipeline failed; falling back to static call data")
            return static_snapshot(calls, start, end)

    async def _build(
        self, calls: Sequence[StockCall], start: date, end: date
    ) -> PortfolioSnapshot:
        indices, call_data = await asyncio.gather(
            self._fetch_indices(start, end),
            asyncio.gather(*(self._fetch_call_data(call, start, end) for call in calls)),
        )

        results = []
        for call, (series, quote) in zip(calls, call_data):
            price, source = resolve_current_price(quote, series, call.current_price)
            if source != "quote":
                logger.info("%s: using %s price %.2f", call.ticker, source, price)
            results.append(evaluate_call(call, series, price, indices, source))

        return PortfolioSnapshot(results=results, indices=indices, as_of=end)

    async def _fetch_indices(self, start: date, end: date) -> IndexSnapshot:
        jkse, lq45 = await asyncio.gather(
            settle(self._gateway.fetch_series(self._jkse_ticker, start, end)),
            settle(self._gateway.fetch_series(self._lq45_ticker, start, end)),
        )
        jkse_series = self._series_or_empty(jkse, self._jkse_ticker, start, end)
        lq45_series = self._series_or_empty(lq45, self._lq45_ticker, start, end)
        if not lq45_series:
            lq45_series = await self._first_non_empty(self._lq45_alternatives, start, end) or lq45_series
        return IndexSnapshot(jkse=jkse_series, lq45=lq45_series)

    async def _first_non_empty(
        self, tickers: Sequence[str], start: date, end: date
    ) -> Optional[Series]:
        for ticker in tickers:
            outcome = await settle(self._gateway.fetch_series(ticker, start, end))
            series = self._series_or_empty(outcome, ticker, start, end)
            if series:
                logger.info("LQ45 resolved via alternative symbol %s", ticker)
                return series
        logger.warning("LQ45 unavailable under every alternative symbol")
        return None

    async def _fetch_call_data(
        self, call: StockCall, start: date, end: date
    ) -> tuple[Series, Optional[Quote]]:
        series_outcome, quote_outcome = await asyncio.gather(
            settle(self._gateway.fetch_series(call.ticker, start, end)),
            settle(self._gateway.fetch_quote(call.ticker)),
        )
        series = self._series_or_empty(series_outcome, call.ticker, start, end)
        if not quote_outcome.ok:
            logger.warning("Quote for %s unavailable: %r", call.ticker, quote_outcome.error)
        return series, quote_outcome.value

    @staticmethod
    def _series_or_empty(
        outcome: Settled[Series], ticker: str, start: date, end: date
    ) -> Series:
        if outcome.ok:
            return outcome.value
        logger.warning("Series for %s unavailable: %r", ticker, outcome.error)
        return Series.empty(ticker, start, end)
