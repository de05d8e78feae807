"""
FastAPI entry point: market-data service for the call-tracking dashboard.

This module is the Composition Root: it wires the cache, the yfinance adapter and
the retry policy into the gateway, hands the gateway to the snapshot use-case and
exposes it over HTTP.  Settings and the list of tracked calls are read once here.

Run locally:
    uvicorn src.infrastructure.entrypoints.fastapi_app:app --reload --port 4000
"""

import asyncio
import os
from datetime import datetime, timezone
from typing import Optional, Sequence

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Query

load_dotenv()

from src.application.services.market_data_gateway import MarketDataGateway  # noqa: E402
from src.application.services.retry import RetryPolicy  # noqa: E402
from src.application.use_cases.build_portfolio_snapshot import (  # noqa: E402
    BuildPortfolioSnapshotUseCase,
)
from src.domain.entities.stock_call import PortfolioSnapshot, StockCall  # noqa: E402
from src.domain.exceptions import SnapshotUnavailableError  # noqa: E402
from src.domain.services.portfolio_stats import (  # noqa: E402
    DEFAULT_INVESTMENT_PER_STOCK,
    simulate,
    summarize,
)
from src.infrastructure.cache.ttl_cache import TTLCache  # noqa: E402
from src.infrastructure.config.settings import Settings  # noqa: E402
from src.infrastructure.config.stock_calls import load_stock_calls  # noqa: E402
from src.infrastructure.entrypoints.schemas import SnapshotResponse  # noqa: E402
from src.infrastructure.observability.log_config import configure_logging  # noqa: E402
from src.infrastructure.stock_data.yfinance_adapter import YFinanceStockDataProvider  # noqa: E402


def compose_use_case(settings: Settings) -> BuildPortfolioSnapshotUseCase:
    gateway = MarketDataGateway(
        provider=YFinanceStockDataProvider(timeout=settings.provider_timeout),
        cache=TTLCache(),
        retry_policy=RetryPolicy(
            delays=settings.retry_delays,
            attempt_timeout=settings.provider_timeout,
        ),
        chart_ttl=settings.chart_cache_ttl,
        quote_ttl=settings.quote_cache_ttl,
    )
    return BuildPortfolioSnapshotUseCase(gateway)


async def build_snapshot(
    use_case: BuildPortfolioSnapshotUseCase,
    calls: Sequence[StockCall],
    lookback_days: int,
    deadline: Optional[float],
) -> PortfolioSnapshot:
    """Run the use-case, optionally bounded by *deadline* seconds.

    Raises:
        SnapshotUnavailableError: if the deadline elapses first.
    """
    if deadline is None:
        return await use_case.execute(calls, lookback_days=lookback_days)
    try:
        return await asyncio.wait_for(
            use_case.execute(calls, lookback_days=lookback_days), timeout=deadline
        )
    except asyncio.TimeoutError as exc:
        raise SnapshotUnavailableError(
            f"market data not available within {deadline:g}s"
        ) from exc


def build_app(
    use_case: BuildPortfolioSnapshotUseCase,
    calls: Sequence[StockCall],
    settings: Settings,
) -> FastAPI:
    app = FastAPI(title="IDX Call Tracker Market Data API")

    @app.get("/market-data", response_model=SnapshotResponse)
    async def market_data(
        lookback_days: int = Query(settings.lookback_days, ge=1, le=3650),
        investment_per_stock: float = Query(DEFAULT_INVESTMENT_PER_STOCK, gt=0),
    ):
        """Every tracked call with live prices, gains and benchmark returns."""
        try:
            snapshot = await build_snapshot(
                use_case, calls, lookback_days, settings.snapshot_timeout
            )
        except SnapshotUnavailableError as exc:
            raise HTTPException(
                status_code=503,
                detail={
                    "error": "Upstream failed",
                    "details": str(exc),
                    "timestamp": datetime.now(timezone.utc).isoformat(),
                },
            ) from exc

        return SnapshotResponse.build(
            snapshot,
            summarize(snapshot.results),
            simulate(snapshot.results, snapshot.indices, investment_per_stock),
        )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


# ---------------------------------------------------------------------------
# Composition Root — wire all dependencies once at startup
# ---------------------------------------------------------------------------
_settings = Settings.from_env()
configure_logging(_settings.log_level)
_calls = load_stock_calls(_settings.stock_calls_file)
app = build_app(compose_use_case(_settings), _calls, _settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=int(os.environ.get("PORT", "4000")))
