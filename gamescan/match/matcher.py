import logging
from typing import Dict, Iterable, List, Sequence, Set, Tuple

from gamescan.models import KalshiMarket
from gamescan.teams import DEFAULT_LEAGUE, build_aliases, canonicalize_team_name


logger = logging.getLogger(__name__)

_MIN_WORD_LEN = 3


def match_kalshi_prices(
    markets: Sequence[KalshiMarket],
    teams: Sequence[str],
    league: str = DEFAULT_LEAGUE,
) -> Tuple[Dict[str, float], Dict[str, float]]:
    """Kalshi YES/NO asks keyed by Polymarket team label.

    Each market is credited to the first team it matches; a team matched by
    several markets keeps the lowest ask per side.
    """
    alias_keys = {team: _alias_keys(team, league) for team in teams}
    yes_by_team: Dict[str, float] = {}
    no_by_team: Dict[str, float] = {}

    for market in markets:
        label = (market.yes_sub_title or "").strip()
        if not label:
            continue
        if market.yes_ask is None and market.no_ask is None:
            continue
        market_key = canonicalize_team_name(label)
        for team in teams:
            if not (_alias_match(market_key, alias_keys[team]) or _word_overlap(market_key, team)):
                continue
            logger.debug("Kalshi market %s (%s) -> %s", market.ticker, label, team)
            if market.yes_ask is not None:
                yes_by_team[team] = min(yes_by_team.get(team, market.yes_ask), market.yes_ask)
            if market.no_ask is not None:
                no_by_team[team] = min(no_by_team.get(team, market.no_ask), market.no_ask)
            break

    unmatched = [team for team in teams if team not in yes_by_team and team not in no_by_team]
    if unmatched:
        _log_unmatched(unmatched, markets)
    return yes_by_team, no_by_team


def _alias_keys(team: str, league: str) -> List[str]:
    keys: Dict[str, None] = {}
    for alias in build_aliases(team, league):
        key = canonicalize_team_name(alias)
        if key:
            keys.setdefault(key, None)
    return list(keys)


def _alias_match(market_key: str, alias_keys: Iterable[str]) -> bool:
    if not market_key:
        return False
    return any(
        market_key == alias_key or alias_key in market_key or market_key in alias_key
        for alias_key in alias_keys
    )


def _word_overlap(market_key: str, team: str) -> bool:
    return bool(_words(market_key) & _words(canonicalize_team_name(team)))


def _words(key: str) -> Set[str]:
    return {word for word in key.split() if len(word) >= _MIN_WORD_LEN}


def _log_unmatched(unmatched: List[str], markets: Sequence[KalshiMarket]) -> None:
    lines = [
        "Could not match some teams in Kalshi markets:",
        f"  Unmatched teams: {', '.join(unmatched)}",
        "  Available Kalshi markets:",
    ]
    for idx, market in enumerate(markets, start=1):
        lines.append(
            f'    {idx}. yes_sub_title: "{market.yes_sub_title}" '
            f"(YES: {_price_text(market.yes_ask)}, NO: {_price_text(market.no_ask)})"
        )
    logger.warning("\n".join(lines))


def _price_text(value) -> str:
    return "n/a" if value is None else f"{value:.4f}"
