import unittest

from gamescan.models import KALSHI, NO, POLYMARKET, YES, PriceQuote
from gamescan.pricing.arb import build_combinations, cross_venue, select_best
from gamescan.pricing.fees import kalshi_fee

TEAMS = ("Packers", "Bears")


def _poly(team: str, side: str, ask: float, token_id: str):
    return (POLYMARKET, team, side), PriceQuote(POLYMARKET, side, ask, token_id=token_id)


def _kalshi(team: str, side: str, ask: float):
    return (KALSHI, team, side), PriceQuote(KALSHI, side, ask, fee=kalshi_fee(ask))


def _quotes(*entries):
    return dict(entries)


class CombinationTests(unittest.TestCase):
    def _packers_bears(self):
        # Polymarket T1=0.55, T2=0.42; a team's NO is the other team's token.
        return _quotes(
            _poly("Packers", YES, 0.55, "T1"),
            _poly("Bears", YES, 0.42, "T2"),
            _poly("Packers", NO, 0.42, "T2"),
            _poly("Bears", NO, 0.55, "T1"),
            _kalshi("Packers", YES, 0.52),
            _kalshi("Bears", YES, 0.40),
        )

    def test_never_mixes_sides(self) -> None:
        quotes = self._packers_bears()
        quotes.update(_quotes(_kalshi("Packers", NO, 0.49), _kalshi("Bears", NO, 0.61)))
        combinations = build_combinations(TEAMS, quotes)
        self.assertEqual(len(combinations), 8)
        for combo in combinations:
            self.assertEqual(combo.team_a.side, combo.team_b.side)

    def test_unpriced_legs_are_omitted(self) -> None:
        combinations = build_combinations(TEAMS, self._packers_bears())
        names = [combo.name for combo in combinations]
        self.assertEqual(
            names,
            [
                "Polymarket YES + Polymarket YES",
                "Kalshi YES + Kalshi YES",
                "Polymarket YES + Kalshi YES",
                "Kalshi YES + Polymarket YES",
                "Polymarket NO + Polymarket NO",
            ],
        )

    def test_selects_cheapest_cross_venue_after_fees(self) -> None:
        combinations = build_combinations(TEAMS, self._packers_bears())
        best = select_best(combinations)
        self.assertIsNotNone(best)
        self.assertEqual(best.name, "Kalshi YES + Polymarket YES")
        self.assertAlmostEqual(best.total_cost, 0.94)
        self.assertAlmostEqual(best.total_cost_with_fees, 0.96)
        self.assertAlmostEqual(best.edge, 0.06)
        self.assertAlmostEqual(best.edge_after_fees, 0.04)
        for combo in cross_venue(combinations):
            self.assertLessEqual(best.total_cost_with_fees, combo.total_cost_with_fees)

    def test_same_venue_combinations_are_not_selected(self) -> None:
        # Kalshi YES+YES is cheapest overall but stays out of the selection.
        combinations = build_combinations(TEAMS, self._packers_bears())
        kalshi_only = combinations[1]
        self.assertFalse(kalshi_only.is_cross_venue)
        self.assertLess(kalshi_only.total_cost, select_best(combinations).total_cost)

    def test_polymarket_legs_carry_no_fee(self) -> None:
        combo = build_combinations(TEAMS, self._packers_bears())[0]
        self.assertAlmostEqual(combo.total_cost, combo.total_cost_with_fees)
        self.assertIsNone(combo.team_a.fee)

    def test_tie_keeps_first_encountered(self) -> None:
        quotes = _quotes(
            _poly("Packers", YES, 0.50, "T1"),
            _poly("Bears", YES, 0.50, "T2"),
            _kalshi("Packers", YES, 0.50),
            _kalshi("Bears", YES, 0.50),
        )
        best = select_best(build_combinations(TEAMS, quotes))
        self.assertEqual(best.name, "Polymarket YES + Kalshi YES")

    def test_no_cross_venue_combination(self) -> None:
        quotes = _quotes(
            _poly("Packers", YES, 0.55, "T1"),
            _poly("Bears", YES, 0.42, "T2"),
        )
        combinations = build_combinations(TEAMS, quotes)
        self.assertEqual(len(combinations), 1)
        self.assertIsNone(select_best(combinations))
        self.assertIsNone(select_best([]))


if __name__ == "__main__":
    unittest.main()
