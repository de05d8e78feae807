from datetime import date
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pandas as pd
import pytest

from src.domain.exceptions import ProviderPayloadError
from src.infrastructure.stock_data.yfinance_adapter import (
    YFinanceStockDataProvider,
    decode_history,
)

START, END = date(2025, 5, 1), date(2025, 5, 31)
NAN = float("nan")


def frame(rows, index, columns=("Open", "High", "Low", "Close", "Adj Close", "Volume")):
    idx = pd.DatetimeIndex(index).tz_localize("Asia/Jakarta")
    return pd.DataFrame(rows, index=idx, columns=list(columns))


class TestDecodeHistory:
    def test_empty_frame(self):
        series = decode_history(pd.DataFrame(), "NOPE.JK", START, END, "1d")
        assert len(series) == 0
        assert series.symbol == "NOPE.JK"

    def test_rows_become_points(self):
        df = frame(
            [[880, 905.5, 870, 900, 899, 12000], [900, 950, 890, 940, 939, 15000]],
            ["2025-05-02", "2025-05-05"],
        )
        series = decode_history(df, "TEBE.JK", START, END, "1d")

        assert [p.date for p in series] == [date(2025, 5, 2), date(2025, 5, 5)]
        first = series.points[0]
        assert (first.open, first.high, first.low, first.close) == (880, 905.5, 870, 900)
        assert first.adj_close == 899
        assert first.volume == 12000

    def test_sorts_drops_gaps_and_duplicates(self):
        df = frame(
            [
                [900, 950, 890, 940, 940, 1],
                [880, 905, 870, 900, 900, 2],
                [NAN, NAN, NAN, NAN, NAN, 0],
                [901, 955, 891, 945, 945, 3],
            ],
            ["2025-05-05", "2025-05-02", "2025-05-03", "2025-05-05"],
        )
        series = decode_history(df, "TEBE.JK", START, END, "1d")

        assert [p.date for p in series] == [date(2025, 5, 2), date(2025, 5, 5)]
        assert series.last.close == 945

    def test_adj_close_defaults_to_close(self):
        df = frame([[880, 905, 870, 900, 100]], ["2025-05-02"], ("Open", "High", "Low", "Close", "Volume"))
        series = decode_history(df, "TEBE.JK", START, END, "1d")
        assert series.points[0].adj_close == 900

    def test_missing_columns(self):
        df = frame([[880, 900]], ["2025-05-02"], ("Open", "Close"))
        with pytest.raises(ProviderPayloadError, match="High"):
            decode_history(df, "TEBE.JK", START, END, "1d")


class TestYFinanceStockDataProvider:
    @patch("src.infrastructure.stock_data.yfinance_adapter.yf.Ticker")
    def test_get_chart_includes_end_date(self, mock_ticker):
        mock_ticker.return_value.history.return_value = pd.DataFrame()

        YFinanceStockDataProvider().get_chart("^JKSE", START, END)

        mock_ticker.assert_called_once_with("^JKSE")
        mock_ticker.return_value.history.assert_called_once_with(
            start="2025-05-01", end="2025-06-01", interval="1d", auto_adjust=False, timeout=10.0
        )

    @patch("src.infrastructure.stock_data.yfinance_adapter.yf.Ticker")
    def test_get_chart_passes_request_timeout(self, mock_ticker):
        mock_ticker.return_value.history.return_value = pd.DataFrame()

        YFinanceStockDataProvider(timeout=2.5).get_chart("TEBE.JK", START, END)

        assert mock_ticker.return_value.history.call_args.kwargs["timeout"] == 2.5

    @patch("src.infrastructure.stock_data.yfinance_adapter.yf.Ticker")
    def test_get_quote_from_fast_info(self, mock_ticker):
        ticker = MagicMock()
        ticker.fast_info = SimpleNamespace(last_price=2210.0, previous_close=2190.0, currency="IDR")
        mock_ticker.return_value = ticker

        quote = YFinanceStockDataProvider().get_quote("TEBE.JK")

        assert quote.symbol == "TEBE.JK"
        assert quote.price == 2210.0
        assert quote.previous_close == 2190.0
        assert quote.currency == "IDR"

    @patch("src.infrastructure.stock_data.yfinance_adapter.yf.Ticker")
    def test_get_quote_falls_back_to_info(self, mock_ticker):
        ticker = MagicMock()
        ticker.fast_info = SimpleNamespace(last_price=float("nan"), previous_close=None)
        ticker.info = {"regularMarketPrice": 2200, "marketState": "CLOSED", "previousClose": 2150}
        mock_ticker.return_value = ticker

        quote = YFinanceStockDataProvider().get_quote("TEBE.JK")

        assert quote.price == 2200
        assert quote.previous_close == 2150
        assert quote.market_state == "CLOSED"
        assert quote.currency == "IDR"

    @patch("src.infrastructure.stock_data.yfinance_adapter.yf.Ticker")
    def test_get_quote_without_price(self, mock_ticker):
        ticker = MagicMock()
        ticker.fast_info = SimpleNamespace(last_price=None, previous_close=None)
        ticker.info = {}
        mock_ticker.return_value = ticker

        assert YFinanceStockDataProvider().get_quote("NOPE.JK").price is None
