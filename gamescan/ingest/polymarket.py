import asyncio
import json
import logging
import math
from typing import Dict, Iterable, List, Optional
from urllib.parse import quote

from gamescan.config import AppConfig
from gamescan.errors import DataShapeError
from gamescan.http_client import get_json_async
from gamescan.models import POLYMARKET, PolymarketMarket, VenueEvent

logger = logging.getLogger(__name__)

MONEYLINE = "moneyline"


async def fetch_event_by_slug(config: AppConfig, slug: str) -> VenueEvent:
    url = config.polymarket_gamma_url.rstrip("/") + f"/events/slug/{quote(slug, safe='')}"
    data = await get_json_async(url, timeout=config.http_timeout_seconds)
    if not isinstance(data, dict):
        raise DataShapeError(f"Polymarket: unexpected event response for slug={slug}")
    return parse_event(data, slug)


def parse_event(data: Dict[str, object], slug: str) -> VenueEvent:
    raw_markets = data.get("markets") or []
    if not isinstance(raw_markets, list):
        raise DataShapeError(f"Polymarket: event markets is not a list for slug={slug}")
    markets = []
    for item in raw_markets:
        if not isinstance(item, dict):
            continue
        market_type = item.get("sportsMarketType")
        markets.append(
            PolymarketMarket(
                market_id=str(item.get("id") or ""),
                market_type=str(market_type) if market_type is not None else None,
                outcomes=tuple(_parse_json_list(item.get("outcomes"))),
                token_ids=tuple(_parse_json_list(item.get("clobTokenIds"))),
                question=_optional_str(item.get("question")),
            )
        )
    title = data.get("title")
    return VenueEvent(
        venue=POLYMARKET,
        event_id=str(data.get("slug") or slug),
        title=str(title) if title else None,
        markets=tuple(markets),
    )


def pick_moneyline_market(event: VenueEvent) -> PolymarketMarket:
    moneylines = [m for m in event.markets if m.market_type == MONEYLINE]
    if not moneylines:
        raise DataShapeError("Polymarket: no sportsMarketType=moneyline market in this event.")
    # Prefer the market whose question reads like a matchup; stable otherwise.
    moneylines.sort(key=lambda m: not _looks_like_matchup(m.question))
    return moneylines[0]


def moneyline_teams(market: PolymarketMarket) -> Dict[str, str]:
    """Map each of the two outcome labels to its CLOB token id."""
    if len(market.outcomes) != 2 or len(market.token_ids) != 2:
        raise DataShapeError(
            f"Polymarket: moneyline market does not have 2 outcomes/tokenIds. marketId={market.market_id}"
        )
    if market.outcomes[0] == market.outcomes[1]:
        raise DataShapeError(
            f"Polymarket: moneyline market has duplicate outcomes. marketId={market.market_id}"
        )
    return dict(zip(market.outcomes, market.token_ids))


async def fetch_best_ask(config: AppConfig, token_id: str) -> float:
    # The CLOB quotes the resting sell side for side=SELL, which is what a taker buys at.
    url = config.polymarket_clob_url.rstrip("/") + "/price"
    params = {"token_id": token_id, "side": "SELL"}
    data = await get_json_async(url, params=params, timeout=config.http_timeout_seconds)
    price = _parse_float(data.get("price")) if isinstance(data, dict) else None
    if price is None or not 0.0 <= price <= 1.0:
        raise DataShapeError(
            f"Polymarket: invalid price for token_id={token_id}: {json.dumps(data)}"
        )
    return price


class BestAskCache:
    """Best asks for one run, keyed by CLOB token id.

    A two-outcome market needs four logical quotes but only two requests:
    team A's NO is team B's YES token, so both lookups read the same entry.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config
        self._asks: Dict[str, float] = {}

    async def prefetch(self, token_ids: Iterable[str]) -> None:
        pending = [token_id for token_id in dict.fromkeys(token_ids) if token_id not in self._asks]
        if not pending:
            return
        logger.debug("Polymarket best asks: fetching %d tokens", len(pending))
        prices = await asyncio.gather(*(fetch_best_ask(self.config, token_id) for token_id in pending))
        self._asks.update(zip(pending, prices))

    def get(self, token_id: str) -> float:
        if token_id not in self._asks:
            raise KeyError(f"best ask not prefetched for token_id={token_id}")
        return self._asks[token_id]

    def __len__(self) -> int:
        return len(self._asks)


def _optional_str(value: object) -> Optional[str]:
    if value is None:
        return None
    return str(value)


def _looks_like_matchup(question: Optional[str]) -> bool:
    text = (question or "").lower()
    return " vs" in text or "vs." in text


def _parse_json_list(value: object) -> List[str]:
    if isinstance(value, list):
        return [str(v) for v in value]
    if isinstance(value, str):
        try:
            parsed = json.loads(value)
        except json.JSONDecodeError:
            return []
        if isinstance(parsed, list):
            return [str(v) for v in parsed]
    return []


def _parse_float(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number
