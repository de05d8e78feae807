"""
Per-call performance metrics. Pure functions, no I/O.

All gains are percentages relative to the call's entry price.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from src.domain.entities.stock_price import Quote, Series


@dataclass(frozen=True)
class MaxGain:
    max_gain: float
    days_to_max: Optional[int]


def current_gain(entry_price: float, current_price: float) -> float:
    return (current_price - entry_price) / entry_price * 100


def max_gain_since_call(
    series: Series,
    call_date: date,
    entry_price: float,
    current_price: float,
) -> MaxGain:
    """Best gain reached since *call_date*, counting today's price as a candidate.

    ``days_to_max`` counts whole days from the call to the first point whose high
    is the historical maximum. When the current price is strictly above every
    historical high the maximum was not observed in the series, so
    ``days_to_max`` is None.
    """
    since_call = series.since(call_date)
    if not since_call:
        return MaxGain(current_gain(entry_price, current_price), None)

    # max() returns the first point on ties
    peak = max(since_call, key=lambda p: p.high)
    effective_max = max(peak.high, current_price)
    gain = current_gain(entry_price, effective_max)

    if current_price > peak.high:
        return MaxGain(gain, None)
    return MaxGain(gain, abs((peak.date - call_date).days))


def index_relative_return(index_series: Series, call_date: date) -> float:
    """Index change from the first session on/after *call_date* to the latest one.

    Returns 0 when either anchor is missing or the start close is zero.
    """
    since_call = index_series.since(call_date)
    end = index_series.last
    if not since_call or end is None:
        return 0.0
    start = since_call[0]
    if not start.close:
        return 0.0
    return (end.close - start.close) / start.close * 100


def resolve_current_price(
    quote: Optional[Quote],
    series: Series,
    static_price: float,
) -> tuple[float, str]:
    """Pick the best available current price and report where it came from.

    Order: live quote, last close in *series*, the call's static price.
    """
    if quote is not None and quote.price is not None and quote.price > 0:
        return quote.price, "quote"
    if series.last is not None:
        return series.last.close, "history"
    return static_price, "static"
