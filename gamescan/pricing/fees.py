import math
from typing import Optional

from gamescan.models import KALSHI

KALSHI_TAKER_FEE_RATE = 0.07


def kalshi_fee(price: float, contracts: int = 1, rate: float = KALSHI_TAKER_FEE_RATE) -> float:
    """Kalshi taker fee: round_up_to_cent(rate * C * P * (1 - P))."""
    raw = rate * contracts * price * (1.0 - price)
    if raw <= 0:
        return 0.0
    # Drop float noise first so an exact cent amount is not bumped a cent higher.
    return math.ceil(round(raw * 100, 9)) / 100


def venue_fee(venue: str, price: float, rate: float = KALSHI_TAKER_FEE_RATE) -> Optional[float]:
    # Polymarket fees are not modelled; None keeps that visible in the report.
    if venue == KALSHI:
        return kalshi_fee(price, rate=rate)
    return None
