"""
Domain entities for analyst calls and their computed results.
Zero external dependencies — pure Python dataclasses only.
"""

import math
from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.domain.entities.stock_price import IndexSnapshot, Series
from src.domain.exceptions import InvalidCallError

RECOMMENDATIONS = ("BUY", "HOLD", "SELL")


@dataclass(frozen=True)
class StockCall:
    """An analyst's recommendation on a ticker, fixed at configuration time.

    ``current_price`` is the statically configured price used only when neither
    a live quote nor price history is available.
    """

    id: str
    ticker: str
    company_name: str
    sector: str
    analyst: str
    recommendation: str
    confidence: int
    entry_price: float
    target_price: float
    call_date: date
    thesis: str = ""
    current_price: float = 0.0

    def __post_init__(self) -> None:
        if not self.ticker or not self.ticker.strip():
            raise InvalidCallError(f"Call {self.id!r}: ticker must be a non-empty string")
        if (
            self.entry_price is None
            or not math.isfinite(self.entry_price)
            or self.entry_price <= 0
        ):
            raise InvalidCallError(
                f"Call {self.id!r}: entry price must be positive, got {self.entry_price!r}"
            )
        if not 1 <= self.confidence <= 10:
            raise InvalidCallError(
                f"Call {self.id!r}: confidence must be between 1 and 10, got {self.confidence!r}"
            )
        if self.recommendation not in RECOMMENDATIONS:
            raise InvalidCallError(
                f"Call {self.id!r}: recommendation must be one of {RECOMMENDATIONS}, "
                f"got {self.recommendation!r}"
            )


@dataclass(frozen=True)
class CallResult:
    """A call enriched with market data for a single analysis run.

    price_source: where ``current_price`` came from: "quote", "history" or "static".
    """

    call: StockCall
    current_price: float
    historical_data: Series
    current_gain: float
    max_gain: float
    days_to_max: Optional[int]
    jkse_return: float
    lq45_return: float
    price_source: str = "quote"


@dataclass(frozen=True)
class PortfolioSnapshot:
    results: list[CallResult]
    indices: IndexSnapshot
    as_of: date
    degraded: bool = False
