from typing import List, Optional

from gamescan.models import KALSHI, NO, POLYMARKET, VENUE_LABELS, YES, PriceQuote
from gamescan.pricing.arb import Combination, cross_venue
from gamescan.scan import ScanResult

BEST_MARKER = "⭐ BEST"


def format_report(result: ScanResult) -> str:
    if not result.combinations:
        return "No valid combinations found. Check if prices are available for both teams."
    crossing = cross_venue(result.combinations)
    if result.best is None:
        return "\n".join(
            [
                "No cross-market arbitrage opportunities found.",
                "All combinations use the same platform for both teams.",
            ]
        )

    lines: List[str] = [
        "=== Cross-platform arbitrage opportunities ===",
        f"Polymarket event: {result.poly_event.title or result.poly_event.event_id}",
        f"Kalshi event:     {result.kalshi_event.title or result.kalshi_event.event_id}",
        "",
    ]
    for tag, team in zip(("A", "B"), result.teams):
        lines.extend(_team_block(result, tag, team))

    lines.append("=== Cross-market combinations only ===")
    ranked = sorted(crossing, key=lambda combo: combo.total_cost_with_fees)
    for idx, combo in enumerate(ranked, start=1):
        marker = f" {BEST_MARKER}" if combo is result.best else ""
        lines.append(f"{idx}. {combo.name}{marker}")
        lines.append(f"   Team A: {_leg_summary(combo.team_a)}")
        lines.append(f"   Team B: {_leg_summary(combo.team_b)}")
        lines.append(f"   Total (pre-fee):   {combo.total_cost:.4f} (Edge: {combo.edge:.4f} {_mark(combo.edge)})")
        lines.append(
            f"   Total (with fees): {combo.total_cost_with_fees:.4f} "
            f"(Edge: {combo.edge_after_fees:.4f} {_mark(combo.edge_after_fees)})"
        )
        lines.append("")

    lines.extend(_best_block(result.best))
    lines.extend(
        [
            "",
            "NOTE:",
            "- Polymarket fees are not included; only Kalshi taker fees (1 contract) are applied.",
            "- Assumes contracts on both platforms are economically equivalent.",
            "- Sports cancellation/postponement rules can differ across platforms; verify before trading.",
            "- NO positions mean betting against that team winning.",
        ]
    )
    return "\n".join(lines)


def _team_block(result: ScanResult, tag: str, team: str) -> List[str]:
    lines = [f"[Team {tag}] {team}"]
    for venue in (POLYMARKET, KALSHI):
        for side in (YES, NO):
            quote = result.quotes.get((venue, team, side))
            if quote is None:
                continue
            label = f"{VENUE_LABELS[venue]} {side}:"
            text = f"  {label:<16}{quote.ask:.4f}"
            if quote.token_id:
                text += f" (token_id={quote.token_id})"
            lines.append(text)
    lines.append("")
    return lines


def _best_block(best: Combination) -> List[str]:
    lines = [
        "=== Best combination ===",
        f"Strategy: {best.name}",
    ]
    for tag, leg in (("A", best.team_a), ("B", best.team_b)):
        lines.append(f"  Team {tag}: {_venue(leg)} {leg.side} @ {leg.ask:.4f}")
        if leg.fee is not None:
            lines.append(f"    {_venue(leg)} fee (1 contract): ${leg.fee:.4f}")
        if leg.token_id:
            lines.append(f"    Token ID: {leg.token_id}")
    lines.extend(
        [
            f"Set cost (pre-fee):   {best.total_cost:.4f}",
            f"Set cost (with fees): {best.total_cost_with_fees:.4f}",
            f"Edge (pre-fee):       {best.edge:.4f} {_mark(best.edge)}",
            f"Edge (after fees):    {best.edge_after_fees:.4f} "
            f"{_mark(best.edge_after_fees, '(arbitrage opportunity)')}",
        ]
    )
    return lines


def _leg_summary(leg: PriceQuote) -> str:
    text = f"{_venue(leg)} {leg.side} @ {leg.ask:.4f}"
    if leg.fee is not None:
        text += f" (fee: ${leg.fee:.2f})"
    return text


def _venue(leg: PriceQuote) -> str:
    return VENUE_LABELS.get(leg.venue, leg.venue)


def _mark(edge: float, positive_note: Optional[str] = None) -> str:
    if edge > 0:
        return f"✅ {positive_note}" if positive_note else "✅"
    return "❌"
