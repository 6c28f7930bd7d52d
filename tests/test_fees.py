import unittest

from gamescan.models import KALSHI, POLYMARKET
from gamescan.pricing.fees import kalshi_fee, venue_fee


class KalshiFeeTests(unittest.TestCase):
    def test_rounds_up_to_cent(self) -> None:
        # 0.07 * 0.25 = 0.0175 -> 0.02
        self.assertAlmostEqual(kalshi_fee(0.5), 0.02)
        self.assertAlmostEqual(kalshi_fee(0.3), 0.02)
        self.assertAlmostEqual(kalshi_fee(0.05), 0.01)

    def test_certain_prices_are_free(self) -> None:
        self.assertEqual(kalshi_fee(0.0, 1), 0.0)
        self.assertEqual(kalshi_fee(1.0, 1), 0.0)

    def test_scales_with_contracts(self) -> None:
        self.assertAlmostEqual(kalshi_fee(0.5, contracts=100), 1.75)
        self.assertAlmostEqual(kalshi_fee(0.4, contracts=10), 0.17)

    def test_custom_rate(self) -> None:
        self.assertAlmostEqual(kalshi_fee(0.5, rate=0.035), 0.01)


class VenueFeeTests(unittest.TestCase):
    def test_only_kalshi_is_charged(self) -> None:
        self.assertAlmostEqual(venue_fee(KALSHI, 0.5), 0.02)
        self.assertIsNone(venue_fee(POLYMARKET, 0.5))


if __name__ == "__main__":
    unittest.main()
