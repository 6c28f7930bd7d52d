from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

POLYMARKET = "polymarket"
KALSHI = "kalshi"

VENUE_LABELS = {
    POLYMARKET: "Polymarket",
    KALSHI: "Kalshi",
}

YES = "YES"
NO = "NO"


@dataclass(frozen=True)
class PolymarketMarket:
    market_id: str
    market_type: Optional[str]
    outcomes: Tuple[str, ...]
    token_ids: Tuple[str, ...]
    question: Optional[str] = None


@dataclass(frozen=True)
class KalshiMarket:
    ticker: str
    title: Optional[str] = None
    yes_sub_title: Optional[str] = None
    yes_ask: Optional[float] = None
    yes_bid: Optional[float] = None
    no_ask: Optional[float] = None
    no_bid: Optional[float] = None
    raw_json: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class VenueEvent:
    venue: str
    event_id: str
    title: Optional[str]
    markets: Tuple[Any, ...]


@dataclass(frozen=True)
class PriceQuote:
    venue: str
    side: str
    ask: float
    token_id: Optional[str] = None
    fee: Optional[float] = None

    @property
    def cost(self) -> float:
        return self.ask + (self.fee or 0.0)
