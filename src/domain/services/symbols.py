"""
Ticker → provider symbol mapping for a single exchange.

Rules, first match wins:
  1. any alias of the LQ45 index      → its canonical index symbol
  2. the bare composite index alias   → its canonical ``^`` symbol
  3. already prefixed or suffixed     → unchanged
  4. anything else                    → exchange suffix appended

Rule 3 is deliberately loose: a ``.`` anywhere in the ticker means "already
qualified", even when it is not this exchange's suffix.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ExchangeSymbols:
    suffix: str
    composite_alias: str
    composite_symbol: str
    lq45_aliases: frozenset[str]
    lq45_symbol: str
    index_prefix: str = "^"

    def normalize(self, raw_ticker: str) -> str:
        ticker = raw_ticker.strip()
        if ticker in self.lq45_aliases:
            return self.lq45_symbol
        if ticker == self.composite_alias:
            return self.composite_symbol
        if ticker.startswith(self.index_prefix) or "." in ticker:
            return ticker
        return f"{ticker}{self.suffix}"


IDX = ExchangeSymbols(
    suffix=".JK",
    composite_alias="JKSE",
    composite_symbol="^JKSE",
    lq45_aliases=frozenset({"LQ45", "LQ45.JK", "IDX:LQ45"}),
    lq45_symbol="^JKLQ45",
)


def normalize_symbol(raw_ticker: str) -> str:
    """Map *raw_ticker* to the symbol Yahoo Finance expects for IDX listings."""
    return IDX.normalize(raw_ticker)
