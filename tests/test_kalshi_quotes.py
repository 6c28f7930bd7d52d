import asyncio
import json
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from gamescan.config import AppConfig
from gamescan.errors import DataShapeError
from gamescan.ingest.kalshi import fetch_event_with_markets, parse_event, parse_market
from gamescan.models import KALSHI


FIXTURES = Path(__file__).resolve().parent / "fixtures"


class KalshiQuoteParseTests(unittest.TestCase):
    def test_dollar_strings(self) -> None:
        market = parse_market(
            {
                "ticker": "K-1",
                "yes_sub_title": "Green Bay",
                "yes_ask_dollars": "0.5200",
                "yes_bid_dollars": "0.5100",
                "no_ask_dollars": "",
                "no_bid_dollars": "abc",
            }
        )
        self.assertAlmostEqual(market.yes_ask, 0.52)
        self.assertAlmostEqual(market.yes_bid, 0.51)
        self.assertIsNone(market.no_ask)
        self.assertIsNone(market.no_bid)
        self.assertIsNone(market.title)

    def test_non_finite_price_is_missing(self) -> None:
        market = parse_market({"ticker": "K-1", "yes_ask_dollars": "inf", "no_ask_dollars": "nan"})
        self.assertIsNone(market.yes_ask)
        self.assertIsNone(market.no_ask)

    def test_nested_markets(self) -> None:
        data = json.loads((FIXTURES / "kalshi_event.json").read_text())
        event = parse_event(data, "KXNFLGAME-25DEC20GBCHI")
        self.assertEqual(event.venue, KALSHI)
        self.assertEqual(event.title, "Green Bay at Chicago")
        self.assertEqual([m.yes_sub_title for m in event.markets], ["Green Bay", "Chicago"])
        self.assertAlmostEqual(event.markets[1].no_ask, 0.61)

    def test_top_level_markets_fallback(self) -> None:
        data = {
            "event": {"event_ticker": "EVT", "title": "Game"},
            "markets": [{"ticker": "EVT-A", "yes_sub_title": "A", "yes_ask_dollars": "0.3"}],
        }
        event = parse_event(data, "EVT")
        self.assertEqual(len(event.markets), 1)
        self.assertEqual(event.markets[0].ticker, "EVT-A")

    def test_no_markets_is_fatal(self) -> None:
        with self.assertRaises(DataShapeError):
            parse_event({"event": {"event_ticker": "EVT", "markets": []}}, "EVT")

    def test_non_list_markets_is_fatal(self) -> None:
        for bad in ({"ticker": "EVT-A"}, 7):
            with self.assertRaises(DataShapeError):
                parse_event({"event": {"event_ticker": "EVT", "markets": bad}}, "EVT")

    def test_fetch_requests_nested_markets(self) -> None:
        data = json.loads((FIXTURES / "kalshi_event.json").read_text())
        mock_get = AsyncMock(return_value=data)
        with patch("gamescan.ingest.kalshi.get_json_async", mock_get):
            event = asyncio.run(fetch_event_with_markets(AppConfig(), "KXNFLGAME-25DEC20GBCHI"))
        self.assertEqual(event.event_id, "KXNFLGAME-25DEC20GBCHI")
        self.assertEqual(
            mock_get.call_args.args[0],
            "https://api.elections.kalshi.com/trade-api/v2/events/KXNFLGAME-25DEC20GBCHI",
        )
        self.assertEqual(mock_get.call_args.kwargs["params"], {"with_nested_markets": "true"})


if __name__ == "__main__":
    unittest.main()
