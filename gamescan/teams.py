import json
import re
from pathlib import Path
from typing import Dict, List, Optional


_DATA_DIR = Path(__file__).resolve().parent / "data"
_LEAGUE_FILES = {
    "nfl": _DATA_DIR / "teams_nfl.json",
    "nba": _DATA_DIR / "teams_nba.json",
}

DEFAULT_LEAGUE = "nfl"

_ALIASES_BY_LEAGUE: Dict[str, Dict[str, List[str]]] = {}
for league, path in _LEAGUE_FILES.items():
    if not path.exists():
        raise FileNotFoundError(f"Missing team alias table: {path}")
    _ALIASES_BY_LEAGUE[league] = json.loads(path.read_text(encoding="utf-8"))

_SERIES_TO_LEAGUE = {
    "KXNFLGAME": "nfl",
    "KXNBAGAME": "nba",
}

_WORD_ABBREVIATIONS = (
    (re.compile(r"\bstate\b"), "st"),
    (re.compile(r"\buniversity\b"), "u"),
    (re.compile(r"\bcollege\b"), "c"),
)


def known_leagues() -> List[str]:
    return sorted(_ALIASES_BY_LEAGUE)


def canonicalize_team_name(text: Optional[str]) -> str:
    """Lowercase comparison key: no parentheticals, punctuation or long forms.

    "Florida (FL) State Univ." -> "florida st univ". Applying it twice yields
    the same string.
    """
    if not text:
        return ""
    value = str(text).lower()
    value = re.sub(r"\([^)]*\)", "", value)
    value = value.replace(".", "")
    value = re.sub(r"[^a-z0-9]+", " ", value)
    for pattern, replacement in _WORD_ABBREVIATIONS:
        value = pattern.sub(replacement, value)
    return re.sub(r"\s+", " ", value).strip()


def league_hint_from_event_ticker(event_ticker: Optional[str]) -> Optional[str]:
    if not event_ticker:
        return None
    series = str(event_ticker).upper().split("-", 1)[0]
    return _SERIES_TO_LEAGUE.get(series)


def league_aliases(team: str, league: Optional[str] = DEFAULT_LEAGUE) -> List[str]:
    table = _ALIASES_BY_LEAGUE.get((league or "").lower())
    if not table:
        return []
    if team in table:
        return list(table[team])
    key = canonicalize_team_name(team)
    for nickname, aliases in table.items():
        if canonicalize_team_name(nickname) == key:
            return list(aliases)
    return []


def build_aliases(team: Optional[str], league: Optional[str] = DEFAULT_LEAGUE) -> List[str]:
    """Spellings the exchange might use for a Polymarket outcome label."""
    base = str(team or "").strip()
    candidates = [base, base.replace(".", "")]
    candidates.extend(league_aliases(base, league))

    for short in ("St.", "St", "st.", "st"):
        candidates.append(re.sub(r"\bState\b", short, base))
    candidates.append(re.sub(r"\bSt\b\.?", "State", base))

    candidates.append(re.sub(r"\bUniversity\b", "U", base))
    candidates.append(re.sub(r"\bUniv\b\.?", "U", base))
    candidates.append(re.sub(r"\bU\b", "University", base))

    canonical = canonicalize_team_name(base)
    candidates.append(canonical)

    # Identity and canonical forms stay even when empty; other blanks are noise.
    variants: Dict[str, None] = {base: None}
    for candidate in candidates:
        if candidate:
            variants.setdefault(candidate, None)
    variants.setdefault(canonical, None)
    return list(variants)
