"""
Portfolio-level aggregates over a set of analysed calls.
Pure functions, no I/O.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.domain.entities.stock_call import CallResult
from src.domain.entities.stock_price import IndexSnapshot, Series

STATS_INVESTMENT_PER_CALL = 1_000_000
DEFAULT_INVESTMENT_PER_STOCK = 10_000_000


@dataclass(frozen=True)
class PortfolioStats:
    total_calls: int = 0
    winning_calls: int = 0
    win_rate: float = 0.0
    avg_gain: float = 0.0
    avg_loss: float = 0.0
    portfolio_return: float = 0.0
    best_performer: Optional[str] = None
    worst_performer: Optional[str] = None
    highest_max_gain: float = 0.0
    avg_days_to_max: float = 0.0
    total_gain_amount: float = 0.0


@dataclass(frozen=True)
class Position:
    id: str
    ticker: str
    investment: float
    shares: float
    current_value: float
    unrealized_gain: float
    return_pct: float


@dataclass(frozen=True)
class IndexPosition:
    name: str
    investment: float
    current_value: float
    unrealized_gain: float
    return_pct: float


@dataclass(frozen=True)
class PortfolioSimulation:
    investment_per_stock: float
    total_investment: float = 0.0
    total_value: float = 0.0
    total_return: float = 0.0
    total_return_pct: float = 0.0
    positions: list[Position] = field(default_factory=list)
    jkse: Optional[IndexPosition] = None
    lq45: Optional[IndexPosition] = None
    alpha_vs_jkse: float = 0.0
    alpha_vs_lq45: float = 0.0


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def summarize(results: list[CallResult]) -> PortfolioStats:
    """Win rate, averages and extremes across *results*, equal-weighted."""
    if not results:
        return PortfolioStats()

    gains = [r.current_gain for r in results]
    winners = [g for g in gains if g > 0]
    losers = [g for g in gains if g < 0]
    # max()/min() keep the first result on ties
    best = max(results, key=lambda r: r.current_gain)
    worst = min(results, key=lambda r: r.current_gain)
    days = [r.days_to_max for r in results if r.days_to_max is not None]

    return PortfolioStats(
        total_calls=len(results),
        winning_calls=len(winners),
        win_rate=len(winners) / len(results) * 100,
        avg_gain=_mean(winners),
        avg_loss=_mean(losers),
        portfolio_return=_mean(gains),
        best_performer=best.call.ticker,
        worst_performer=worst.call.ticker,
        highest_max_gain=max(r.max_gain for r in results),
        avg_days_to_max=_mean(days),
        total_gain_amount=sum(g / 100 * STATS_INVESTMENT_PER_CALL for g in gains),
    )


def _simulate_index(name: str, series: Series, investment: float) -> Optional[IndexPosition]:
    if not series or not series.points[0].close:
        return None
    shares = investment / series.points[0].close
    value = shares * series.points[-1].close
    gain = value - investment
    return IndexPosition(
        name=name,
        investment=investment,
        current_value=value,
        unrealized_gain=gain,
        return_pct=gain / investment * 100,
    )


def simulate(
    results: list[CallResult],
    indices: IndexSnapshot,
    investment_per_stock: float = DEFAULT_INVESTMENT_PER_STOCK,
) -> PortfolioSimulation:
    """Equal-money position in every call, compared against buying each index.

    Index positions hold the whole portfolio amount from the first to the last
    close of the index series; they are None when the series is empty.
    """
    if investment_per_stock <= 0:
        raise ValueError("investment_per_stock must be positive")
    if not results:
        return PortfolioSimulation(investment_per_stock=investment_per_stock)

    positions = []
    for r in results:
        shares = investment_per_stock / r.call.entry_price
        value = shares * r.current_price
        gain = value - investment_per_stock
        positions.append(
            Position(
                id=r.call.id,
                ticker=r.call.ticker,
                investment=investment_per_stock,
                shares=shares,
                current_value=value,
                unrealized_gain=gain,
                return_pct=gain / investment_per_stock * 100,
            )
        )

    total_investment = investment_per_stock * len(results)
    total_value = sum(p.current_value for p in positions)
    total_return = total_value - total_investment
    total_return_pct = total_return / total_investment * 100

    jkse = _simulate_index("jkse", indices.jkse, total_investment)
    lq45 = _simulate_index("lq45", indices.lq45, total_investment)

    return PortfolioSimulation(
        investment_per_stock=investment_per_stock,
        total_investment=total_investment,
        total_value=total_value,
        total_return=total_return,
        total_return_pct=total_return_pct,
        positions=positions,
        jkse=jkse,
        lq45=lq45,
        alpha_vs_jkse=total_return_pct - jkse.return_pct if jkse else 0.0,
        alpha_vs_lq45=total_return_pct - lq45.return_pct if lq45 else 0.0,
    )


def relative_performance(
    stock_gain: float, index_gain: Optional[float]
) -> tuple[float, bool]:
    """Outperformance of a call over an index, and whether it is positive."""
    if index_gain is None:
        return 0.0, False
    outperformance = stock_gain - index_gain
    return outperformance, outperformance > 0
