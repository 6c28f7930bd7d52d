import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class AppConfig:
    polymarket_gamma_url: str = "https://gamma-api.polymarket.com"
    polymarket_clob_url: str = "https://clob.polymarket.com"
    kalshi_base_url: str = "https://api.elections.kalshi.com/trade-api/v2"
    http_timeout_seconds: float = 20.0
    kalshi_taker_fee_rate: float = 0.07
    log_level: str = "WARNING"


def _get_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid float for {name}: {raw}") from exc


def _get_str(name: str, default: str) -> str:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()


def load_config() -> AppConfig:
    load_dotenv()

    return AppConfig(
        polymarket_gamma_url=_get_str("POLYMARKET_GAMMA_URL", "https://gamma-api.polymarket.com"),
        polymarket_clob_url=_get_str("POLYMARKET_REST_URL", "https://clob.polymarket.com"),
        kalshi_base_url=_get_str(
            "KALSHI_BASE_URL", "https://api.elections.kalshi.com/trade-api/v2"
        ),
        http_timeout_seconds=_get_float("GAMESCAN_HTTP_TIMEOUT", 20.0),
        kalshi_taker_fee_rate=_get_float("KALSHI_TAKER_FEE_RATE", 0.07),
        log_level=_get_str("GAMESCAN_LOG_LEVEL", "WARNING").upper(),
    )
