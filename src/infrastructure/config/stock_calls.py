"""
Tracked calls: the built-in list, or a JSON file named by STOCK_CALLS_FILE.

File format: a JSON array of objects with camelCase keys
(id, ticker, companyName, sector, analyst, recommendation, confidence,
entryPrice, targetPrice, callDate, thesis, currentPrice).
"""

import json
from datetime import date
from pathlib import Path
from typing import Optional

from src.domain.entities.stock_call import StockCall
from src.domain.exceptions import InvalidCallError

DEFAULT_STOCK_CALLS = [
    StockCall(
        id="1",
        ticker="ANJT.JK",
        company_name="Austindo Nusantara Jaya",
        sector="Agro",
        analyst="John Doe",
        recommendation="BUY",
        confidence=8,
        entry_price=2200,
        target_price=5000,
        call_date=date(2025, 10, 1),
        thesis="akuisisi first resource",
    ),
    StockCall(
        id="2",
        ticker="TEBE.JK",
        company_name="PT Dana Brata Luhur Tbk",
        sector="Conglomerate",
        analyst="John Doe",
        recommendation="BUY",
        confidence=8,
        entry_price=800,
        target_price=3400,
        call_date=date(2025, 5, 1),
        thesis="akuisisi hj isam",
        current_price=2200,
    ),
    StockCall(
        id="3",
        ticker="MMLP.JK",
        company_name="Mega Manunggal Property",
        sector="Conglomerate",
        analyst="John Doe",
        recommendation="BUY",
        confidence=8,
        entry_price=570,
        target_price=2000,
        call_date=date(2025, 11, 1),
        thesis="akuisisi astra",
    ),
]


def parse_stock_call(raw: dict) -> StockCall:
    """Build a StockCall from one camelCase JSON object.

    Raises:
        InvalidCallError: on missing keys or values the domain rejects.
    """
    try:
        return StockCall(
            id=str(raw["id"]),
            ticker=raw["ticker"],
            company_name=raw.get("companyName", ""),
            sector=raw.get("sector", ""),
            analyst=raw.get("analyst", ""),
            recommendation=raw.get("recommendation", "BUY"),
            confidence=int(raw.get("confidence", 5)),
            entry_price=float(raw["entryPrice"]),
            target_price=float(raw.get("targetPrice", 0)),
            call_date=date.fromisoformat(raw["callDate"]),
            thesis=raw.get("thesis", ""),
            current_price=float(raw.get("currentPrice", 0)),
        )
    except InvalidCallError:
        raise
    except (KeyError, TypeError, ValueError) as exc:
        raise InvalidCallError(f"Invalid call entry {raw!r}: {exc}") from exc


def load_stock_calls(path: Optional[str] = None) -> list[StockCall]:
    """Calls from the JSON file at *path*, or the built-in list when *path* is None."""
    if path is None:
        return list(DEFAULT_STOCK_CALLS)
    entries = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(entries, list):
        raise InvalidCallError(f"{path}: expected a JSON array of calls")
    return [parse_stock_call(entry) for entry in entries]
