"""
Process configuration, read once from the environment at startup.
The entrypoint loads a local .env (python-dotenv) before calling Settings.from_env().
"""

import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from src.application.services.market_data_gateway import CHART_TTL_SECONDS, QUOTE_TTL_SECONDS
from src.application.services.retry import DEFAULT_DELAYS
from src.application.use_cases.build_portfolio_snapshot import DEFAULT_LOOKBACK_DAYS


def _positive_float(
    env: Mapping[str, str], name: str, default: Optional[float]
) -> Optional[float]:
    """Blank or unset values give *default*."""
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = float(raw)
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    lookback_days: int = DEFAULT_LOOKBACK_DAYS
    chart_cache_ttl: float = CHART_TTL_SECONDS
    quote_cache_ttl: float = QUOTE_TTL_SECONDS
    provider_timeout: float = 10.0
    retry_delays: tuple[float, ...] = DEFAULT_DELAYS
    snapshot_timeout: Optional[float] = None
    stock_calls_file: Optional[str] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *env* (``os.environ`` by default).

        Raises:
            ValueError: on any malformed or out-of-range value.
        """
        env = os.environ if env is None else env

        lookback = int(env.get("LOOKBACK_DAYS", DEFAULT_LOOKBACK_DAYS))
        if lookback <= 0:
            raise ValueError(f"LOOKBACK_DAYS must be positive, got {lookback}")

        raw_delays = env.get("RETRY_DELAYS")
        if raw_delays:
            delays = tuple(float(part) for part in raw_delays.split(",") if part.strip())
            if any(d < 0 for d in delays):
                raise ValueError(f"RETRY_DELAYS must be non-negative, got {raw_delays!r}")
        else:
            delays = DEFAULT_DELAYS

        return cls(
            lookback_days=lookback,
            chart_cache_ttl=_positive_float(env, "CHART_CACHE_TTL_SECONDS", CHART_TTL_SECONDS),
            quote_cache_ttl=_positive_float(env, "QUOTE_CACHE_TTL_SECONDS", QUOTE_TTL_SECONDS),
            provider_timeout=_positive_float(env, "PROVIDER_TIMEOUT_SECONDS", 10.0),
            retry_delays=delays,
            snapshot_timeout=_positive_float(env, "SNAPSHOT_TIMEOUT_SECONDS", None),
            stock_calls_file=env.get("STOCK_CALLS_FILE") or None,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
