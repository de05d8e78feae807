"""
Domain entities for stock price data.
Zero external dependencies — pure Python dataclasses only.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Iterator, Optional


@dataclass(frozen=True)
class PricePoint:
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int
    adj_close: float


@dataclass(frozen=True)
class Series:
    """Daily price points for one symbol over ``[start, end]``.

    An empty series is a valid result (the provider had nothing for the range),
    not a failure.
    """

    symbol: str
    start: date
    end: date
    interval: str = "1d"
    points: tuple[PricePoint, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # frozen dataclass: coerce lists handed in by callers
        object.__setattr__(self, "points", tuple(self.points))
        for prev, cur in zip(self.points, self.points[1:]):
            if cur.date <= prev.date:
                raise ValueError(
                    f"Series for {self.symbol!r} is not strictly ascending at {cur.date}"
                )

    @classmethod
    def empty(cls, symbol: str, start: date, end: date, interval: str = "1d") -> "Series":
        return cls(symbol=symbol, start=start, end=end, interval=interval)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[PricePoint]:
        return iter(self.points)

    def __bool__(self) -> bool:
        return bool(self.points)

    @property
    def last(self) -> Optional[PricePoint]:
        return self.points[-1] if self.points else None

    def since(self, day: date) -> list[PricePoint]:
        """Points dated on or after *day*."""
        return [p for p in self.points if p.date >= day]


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: Optional[float]
    previous_close: Optional[float] = None
    currency: str = "IDR"
    market_state: str = "UNKNOWN"


@dataclass(frozen=True)
class IndexSnapshot:
    """The two benchmark series over the analysis window."""

    jkse: Series
    lq45: Series
