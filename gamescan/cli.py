import argparse
import asyncio
import logging
from typing import List, Optional

from gamescan.config import load_config
from gamescan.errors import ScanError
from gamescan.report import format_report
from gamescan.scan import scan_game
from gamescan.teams import known_leagues


logger = logging.getLogger(__name__)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gamescan",
        description="Compare one game's moneyline across Polymarket and Kalshi.",
    )
    parser.add_argument("poly_event_slug", help="Polymarket event slug")
    parser.add_argument("kalshi_event_ticker", help="Kalshi event ticker (case-insensitive)")
    parser.add_argument(
        "--league",
        choices=known_leagues(),
        default=None,
        help="Team alias table to use (default: from the Kalshi ticker, else nfl)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    log_format = "%(asctime)s %(levelname)s %(name)s %(message)s"
    try:
        config = load_config()
    except ValueError as exc:
        logging.basicConfig(level=logging.INFO, format=log_format)
        logger.error("Configuration error: %s", exc)
        return 1
    logging.basicConfig(level=logging.DEBUG if args.verbose else config.log_level, format=log_format)

    try:
        result = asyncio.run(
            scan_game(config, args.poly_event_slug, args.kalshi_event_ticker.upper(), league=args.league)
        )
    except ScanError as exc:
        logger.error("%s", exc)
        return 1

    print(format_report(result))
    return 0
