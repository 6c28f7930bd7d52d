from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from gamescan.models import KALSHI, NO, POLYMARKET, VENUE_LABELS, YES, PriceQuote

# (venue, team, side) -> quote
QuoteKey = Tuple[str, str, str]

SIDES = (YES, NO)
VENUE_PAIRS = (
    (POLYMARKET, POLYMARKET),
    (KALSHI, KALSHI),
    (POLYMARKET, KALSHI),
    (KALSHI, POLYMARKET),
)


@dataclass(frozen=True)
class Combination:
    team_a: PriceQuote
    team_b: PriceQuote
    total_cost: float
    total_cost_with_fees: float

    @property
    def name(self) -> str:
        return " + ".join(
            f"{VENUE_LABELS.get(leg.venue, leg.venue)} {leg.side}" for leg in (self.team_a, self.team_b)
        )

    @property
    def is_cross_venue(self) -> bool:
        return self.team_a.venue != self.team_b.venue

    @property
    def edge(self) -> float:
        return 1.0 - self.total_cost

    @property
    def edge_after_fees(self) -> float:
        return 1.0 - self.total_cost_with_fees


def build_combinations(
    teams: Sequence[str],
    quotes: Dict[QuoteKey, PriceQuote],
) -> List[Combination]:
    """Every same-side hedge of the two teams whose legs are both priced.

    With exactly one winner, YES+YES and NO+NO each pay $1 whichever team
    wins. Mixed sides back the same outcome twice and are never produced.
    """
    team_a, team_b = teams
    combinations: List[Combination] = []
    for side in SIDES:
        for venue_a, venue_b in VENUE_PAIRS:
            leg_a = quotes.get((venue_a, team_a, side))
            leg_b = quotes.get((venue_b, team_b, side))
            if leg_a is None or leg_b is None:
                continue
            combinations.append(
                Combination(
                    team_a=leg_a,
                    team_b=leg_b,
                    total_cost=leg_a.ask + leg_b.ask,
                    total_cost_with_fees=leg_a.cost + leg_b.cost,
                )
            )
    return combinations


def cross_venue(combinations: Sequence[Combination]) -> List[Combination]:
    return [combo for combo in combinations if combo.is_cross_venue]


def select_best(combinations: Sequence[Combination]) -> Optional[Combination]:
    candidates = cross_venue(combinations)
    if not candidates:
        return None
    # min() keeps the first of equal costs.
    return min(candidates, key=lambda combo: combo.total_cost_with_fees)
