import logging
import math
from typing import Dict, Optional
from urllib.parse import quote

from gamescan.config import AppConfig
from gamescan.errors import DataShapeError
from gamescan.http_client import get_json_async
from gamescan.models import KALSHI, KalshiMarket, VenueEvent

logger = logging.getLogger(__name__)


async def fetch_event_with_markets(config: AppConfig, event_ticker: str) -> VenueEvent:
    url = config.kalshi_base_url.rstrip("/") + f"/events/{quote(event_ticker, safe='')}"
    data = await get_json_async(
        url,
        params={"with_nested_markets": "true"},
        timeout=config.http_timeout_seconds,
    )
    if not isinstance(data, dict):
        raise DataShapeError(f"Kalshi: unexpected event response for {event_ticker}")
    return parse_event(data, event_ticker)


def parse_event(data: Dict[str, object], event_ticker: str) -> VenueEvent:
    event = data.get("event")
    if not isinstance(event, dict):
        event = {}
    # Nested markets are on the event; older responses put them at the top level.
    raw_markets = event.get("markets") or data.get("markets") or []
    if not isinstance(raw_markets, list):
        raise DataShapeError(f"Kalshi: event markets is not a list for {event_ticker}")
    markets = [parse_market(item) for item in raw_markets if isinstance(item, dict)]
    if not markets:
        raise DataShapeError("Kalshi: no markets found in event response.")
    logger.debug("Kalshi event %s markets=%d", event_ticker, len(markets))
    title = event.get("title")
    return VenueEvent(
        venue=KALSHI,
        event_id=str(event.get("event_ticker") or event_ticker),
        title=str(title) if title else None,
        markets=tuple(markets),
    )


def parse_market(item: Dict[str, object]) -> KalshiMarket:
    return KalshiMarket(
        ticker=str(item.get("ticker") or ""),
        title=_optional_str(item.get("title")),
        yes_sub_title=_optional_str(item.get("yes_sub_title")),
        yes_ask=_parse_dollars(item.get("yes_ask_dollars")),
        yes_bid=_parse_dollars(item.get("yes_bid_dollars")),
        no_ask=_parse_dollars(item.get("no_ask_dollars")),
        no_bid=_parse_dollars(item.get("no_bid_dollars")),
        raw_json=item,
    )


def _optional_str(value: object) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _parse_dollars(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
