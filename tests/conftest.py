from datetime import date
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.services.retry import RetryPolicy
from src.domain.entities.stock_call import StockCall
from src.domain.entities.stock_price import PricePoint, Series
from src.domain.ports.stock_data_port import IStockDataProvider


@pytest.fixture
def make_series():
    """Factory: rows are (date, high, close) tuples."""

    def _make(symbol="TEST.JK", rows=(), start=date(2024, 8, 1), end=date(2025, 8, 1)):
        points = [
            PricePoint(
                date=day,
                open=close,
                high=high,
                low=min(high, close),
                close=close,
                volume=1_000,
                adj_close=close,
            )
            for day, high, close in rows
        ]
        return Series(symbol=symbol, start=start, end=end, points=points)

    return _make


@pytest.fixture
def make_call():
    def _make(**overrides):
        fields = dict(
            id="2",
            ticker="TEBE.JK",
            company_name="PT Dana Brata Luhur Tbk",
            sector="Conglomerate",
            analyst="John Doe",
            recommendation="BUY",
            confidence=8,
            entry_price=800.0,
            target_price=3400.0,
            call_date=date(2025, 5, 1),
            thesis="akuisisi hj isam",
            current_price=2200.0,
        )
        fields.update(overrides)
        return StockCall(**fields)

    return _make


@pytest.fixture
def instant_retry():
    """Default schedule, but the sleeps are recorded instead of awaited."""
    return RetryPolicy(sleep=AsyncMock(), attempt_timeout=None)


@pytest.fixture
def mock_provider():
    return MagicMock(spec=IStockDataProvider)
