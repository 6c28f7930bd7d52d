import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from gamescan.config import AppConfig
from gamescan.ingest.kalshi import fetch_event_with_markets
from gamescan.ingest.polymarket import (
    BestAskCache,
    fetch_event_by_slug,
    moneyline_teams,
    pick_moneyline_market,
)
from gamescan.match.matcher import match_kalshi_prices
from gamescan.models import KALSHI, NO, POLYMARKET, YES, PolymarketMarket, PriceQuote, VenueEvent
from gamescan.pricing.arb import Combination, QuoteKey, build_combinations, select_best
from gamescan.pricing.fees import venue_fee
from gamescan.teams import DEFAULT_LEAGUE, league_hint_from_event_ticker

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    poly_event: VenueEvent
    kalshi_event: VenueEvent
    moneyline: PolymarketMarket
    teams: Tuple[str, str]
    token_by_team: Dict[str, str]
    quotes: Dict[QuoteKey, PriceQuote]
    combinations: List[Combination]
    best: Optional[Combination]
    league: str


async def scan_game(
    config: AppConfig,
    poly_slug: str,
    kalshi_event_ticker: str,
    league: Optional[str] = None,
) -> ScanResult:
    kalshi_event_ticker = kalshi_event_ticker.upper()
    league = league or league_hint_from_event_ticker(kalshi_event_ticker) or DEFAULT_LEAGUE

    poly_event = await fetch_event_by_slug(config, poly_slug)
    moneyline = pick_moneyline_market(poly_event)
    token_by_team = moneyline_teams(moneyline)
    team_a, team_b = moneyline.outcomes
    logger.info("Polymarket moneyline %s: %s vs %s", moneyline.market_id, team_a, team_b)

    asks = BestAskCache(config)
    await asks.prefetch(token_by_team.values())

    kalshi_event = await fetch_event_with_markets(config, kalshi_event_ticker)
    yes_by_team, no_by_team = match_kalshi_prices(
        kalshi_event.markets, [team_a, team_b], league=league
    )

    quotes = polymarket_quotes((team_a, team_b), token_by_team, asks)
    quotes.update(kalshi_quotes(yes_by_team, no_by_team, config.kalshi_taker_fee_rate))

    combinations = build_combinations((team_a, team_b), quotes)
    best = select_best(combinations)
    logger.info("Combinations: total=%d best=%s", len(combinations), best.name if best else None)
    return ScanResult(
        poly_event=poly_event,
        kalshi_event=kalshi_event,
        moneyline=moneyline,
        teams=(team_a, team_b),
        token_by_team=token_by_team,
        quotes=quotes,
        combinations=combinations,
        best=best,
        league=league,
    )


def polymarket_quotes(
    teams: Tuple[str, str],
    token_by_team: Dict[str, str],
    asks: BestAskCache,
) -> Dict[QuoteKey, PriceQuote]:
    # A team's NO is bought as the opponent's outcome token.
    quotes: Dict[QuoteKey, PriceQuote] = {}
    for team, opponent in (teams, teams[::-1]):
        for side, token_id in ((YES, token_by_team[team]), (NO, token_by_team[opponent])):
            ask = asks.get(token_id)
            quotes[(POLYMARKET, team, side)] = PriceQuote(
                venue=POLYMARKET,
                side=side,
                ask=ask,
                token_id=token_id,
                fee=venue_fee(POLYMARKET, ask),
            )
    return quotes


def kalshi_quotes(
    yes_by_team: Dict[str, float],
    no_by_team: Dict[str, float],
    fee_rate: float,
) -> Dict[QuoteKey, PriceQuote]:
    quotes: Dict[QuoteKey, PriceQuote] = {}
    for side, prices in ((YES, yes_by_team), (NO, no_by_team)):
        for team, ask in prices.items():
            quotes[(KALSHI, team, side)] = PriceQuote(
                venue=KALSHI,
                side=side,
                ask=ask,
                fee=venue_fee(KALSHI, ask, rate=fee_rate),
            )
    return quotes
