"""
Pydantic response models for the HTTP API.
Field names are snake_case in Python and camelCase on the wire, which is what
the dashboard front end reads.
"""

import dataclasses
import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from src.domain.entities.stock_call import CallResult, PortfolioSnapshot
from src.domain.entities.stock_price import PricePoint, Series
from src.domain.services.portfolio_stats import (
    PortfolioSimulation,
    PortfolioStats,
    relative_performance,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PricePointOut(CamelModel):
    date: datetime.date
    open: float
    high: float
    low: float
    close: float
    volume: int
    adj_close: float

    @classmethod
    def from_point(cls, point: PricePoint) -> "PricePointOut":
        return cls.model_validate(dataclasses.asdict(point))


def _points(series: Series) -> list[PricePointOut]:
    return [PricePointOut.from_point(p) for p in series]


class StockResultOut(CamelModel):
    id: str
    ticker: str
    company_name: str
    sector: str
    analyst: str
    recommendation: str
    confidence: int
    entry_price: float
    target_price: float
    call_date: datetime.date
    thesis: str
    current_price: float
    historical_data: list[PricePointOut]
    current_gain: float
    max_gain: float
    days_to_max: Optional[int]
    jkse_return: float
    lq45_return: float
    jkse_outperformance: float
    lq45_outperformance: float
    price_source: str

    @classmethod
    def from_result(cls, result: CallResult) -> "StockResultOut":
        call = result.call
        return cls(
            id=call.id,
            ticker=call.ticker,
            company_name=call.company_name,
            sector=call.sector,
            analyst=call.analyst,
            recommendation=call.recommendation,
            confidence=call.confidence,
            entry_price=call.entry_price,
            target_price=call.target_price,
            call_date=call.call_date,
            thesis=call.thesis,
            current_price=result.current_price,
            historical_data=_points(result.historical_data),
            current_gain=result.current_gain,
            max_gain=result.max_gain,
            days_to_max=result.days_to_max,
            jkse_return=result.jkse_return,
            lq45_return=result.lq45_return,
            jkse_outperformance=relative_performance(result.current_gain, result.jkse_return)[0],
            lq45_outperformance=relative_performance(result.current_gain, result.lq45_return)[0],
            price_source=result.price_source,
        )


class MarketIndicesOut(CamelModel):
    jkse: list[PricePointOut]
    lq45: list[PricePointOut]


class StatsOut(CamelModel):
    total_calls: int
    winning_calls: int
    win_rate: float
    avg_gain: float
    avg_loss: float
    portfolio_return: float
    best_performer: Optional[str]
    worst_performer: Optional[str]
    highest_max_gain: float
    avg_days_to_max: float
    total_gain_amount: float


class PositionOut(CamelModel):
    id: str
    ticker: str
    investment: float
    shares: float
    current_value: float
    unrealized_gain: float
    return_pct: float


class IndexPositionOut(CamelModel):
    name: str
    investment: float
    current_value: float
    unrealized_gain: float
    return_pct: float


class SimulationOut(CamelModel):
    investment_per_stock: float
    total_investment: float
    total_value: float
    total_return: float
    total_return_pct: float
    positions: list[PositionOut]
    jkse: Optional[IndexPositionOut]
    lq45: Optional[IndexPositionOut]
    alpha_vs_jkse: float
    alpha_vs_lq45: float


class SnapshotResponse(CamelModel):
    stocks: list[StockResultOut]
    market_indices: MarketIndicesOut
    stats: StatsOut
    simulation: SimulationOut
    degraded: bool
    as_of: datetime.date

    @classmethod
    def build(
        cls,
        snapshot: PortfolioSnapshot,
        stats: PortfolioStats,
        simulation: PortfolioSimulation,
    ) -> "SnapshotResponse":
        return cls(
            stocks=[StockResultOut.from_result(r) for r in snapshot.results],
            market_indices=MarketIndicesOut(
                jkse=_points(snapshot.indices.jkse),
                lq45=_points(snapshot.indices.lq45),
            ),
            stats=StatsOut.model_validate(dataclasses.asdict(stats)),
            simulation=SimulationOut.model_validate(dataclasses.asdict(simulation)),
            degraded=snapshot.degraded,
            as_of=snapshot.as_of,
        )
