from datetime import date

import pytest

from src.domain.entities.stock_call import CallResult
from src.domain.entities.stock_price import IndexSnapshot, Series
from src.domain.services.portfolio_stats import (
    PortfolioStats,
    relative_performance,
    simulate,
    summarize,
)

START, END = date(2024, 8, 1), date(2025, 8, 1)
EMPTY = Series.empty("X", START, END)


@pytest.fixture
def make_result(make_call):
    def _make(ticker, entry, current, max_gain=None, days_to_max=None):
        gain = (current - entry) / entry * 100
        return CallResult(
            call=make_call(id=ticker, ticker=ticker, entry_price=entry),
            current_price=current,
            historical_data=EMPTY,
            current_gain=gain,
            max_gain=gain if max_gain is None else max_gain,
            days_to_max=days_to_max,
            jkse_return=0.0,
            lq45_return=0.0,
        )

    return _make


class TestSummarize:
    def test_empty(self):
        assert summarize([]) == PortfolioStats()

    def test_aggregates(self, make_result):
        results = [
            make_result("AAA.JK", 100, 150, max_gain=80.0, days_to_max=10),
            make_result("BBB.JK", 100, 90, days_to_max=30),
            make_result("CCC.JK", 100, 100),
        ]
        stats = summarize(results)

        assert stats.total_calls == 3
        assert stats.winning_calls == 1
        assert stats.win_rate == pytest.approx(100 / 3)
        assert stats.avg_gain == pytest.approx(50.0)
        assert stats.avg_loss == pytest.approx(-10.0)
        assert stats.portfolio_return == pytest.approx(40 / 3)
        assert stats.best_performer == "AAA.JK"
        assert stats.worst_performer == "BBB.JK"
        assert stats.highest_max_gain == pytest.approx(80.0)
        assert stats.avg_days_to_max == pytest.approx(20.0)
        assert stats.total_gain_amount == pytest.approx(400_000.0)


class TestSimulate:
    def test_positions_and_alpha(self, make_result, make_series):
        results = [make_result("AAA.JK", 100, 150), make_result("BBB.JK", 200, 100)]
        jkse = make_series(
            symbol="^JKSE", rows=[(date(2025, 1, 2), 101.0, 100.0), (date(2025, 7, 31), 111.0, 110.0)]
        )
        indices = IndexSnapshot(jkse=jkse, lq45=EMPTY)

        sim = simulate(results, indices, investment_per_stock=1000)

        assert [p.shares for p in sim.positions] == [10, 5]
        assert [p.current_value for p in sim.positions] == [1500, 500]
        assert sim.positions[1].return_pct == pytest.approx(-50.0)
        assert sim.total_investment == 2000
        assert sim.total_value == 2000
        assert sim.total_return_pct == 0
        assert sim.jkse.current_value == pytest.approx(2200.0)
        assert sim.jkse.return_pct == pytest.approx(10.0)
        assert sim.alpha_vs_jkse == pytest.approx(-10.0)
        assert sim.lq45 is None
        assert sim.alpha_vs_lq45 == 0

    def test_empty_portfolio(self):
        sim = simulate([], IndexSnapshot(jkse=EMPTY, lq45=EMPTY))
        assert sim.total_investment == 0
        assert sim.positions == []

    def test_rejects_non_positive_investment(self, make_result):
        with pytest.raises(ValueError):
            simulate([make_result("AAA.JK", 100, 150)], IndexSnapshot(EMPTY, EMPTY), 0)


class TestRelativePerformance:
    def test_outperforming(self):
        assert relative_performance(10.0, 4.0) == (6.0, True)

    def test_underperforming(self):
        assert relative_performance(-2.0, 3.0) == (-5.0, False)

    def test_missing_index(self):
        assert relative_performance(10.0, None) == (0.0, False)
