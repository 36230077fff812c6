"""Signal resolution from loosely structured source records.

Each resolver extracts one probability-like value from the record an adapter
handed over. When the record is absent, malformed or reports nothing usable,
the resolver substitutes the uninformative midpoint (0.5) and marks the
signal unresolved, so a missing source never pushes the blend either way.
The live signal is the exception: it has no default and its absence is an
error.
"""

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np

from edgefinder.odds.convert import implied_probability
from edgefinder.odds.edge import BookmakerLine, ReferenceBookSelector

logger = logging.getLogger(__name__)

MIDPOINT = 0.5

# Pace logistic: centred on a league pace of 2.5, squeezed into [0.45, 0.55]
PACE_CENTER = 2.5
PACE_SCALE = 0.1
PACE_FLOOR = 0.45


class SignalUnavailableError(ValueError):
    """Raised when a signal without a default is resolved from an unusable record."""


class SignalKind(str, Enum):
    """Probability sources that can feed a blend."""

    LIVE = "live"
    SEASON = "season"
    H2H = "h2h"
    MARKET = "market"
    PACE = "pace"


@dataclass(frozen=True)
class Signal:
    """A home-side probability from one source.

    resolved is False when value is the 0.5 default rather than real data.
    """

    kind: SignalKind
    value: float
    resolved: bool

    def __post_init__(self) -> None:
        if not 0.0 <= self.value <= 1.0:
            raise ValueError(f"{self.kind.value} signal must be in [0, 1], got {self.value}")


def _as_number(value: Any) -> float | None:
    """Coerce a record field to a finite float, or None if it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _default(kind: SignalKind, reason: str) -> Signal:
    logger.info(f"Degraded {kind.value} signal ({reason}), using {MIDPOINT}")
    return Signal(kind, MIDPOINT, resolved=False)


def resolve_market(
    lines: Sequence[BookmakerLine] | None,
    selector: ReferenceBookSelector,
) -> Signal:
    """Implied probability of the reference book's first listed (home) quote."""
    if not lines:
        return _default(SignalKind.MARKET, "no bookmaker lines")

    reference = selector.select(lines)
    if reference is None:
        return _default(SignalKind.MARKET, f"reference book absent ({selector!r})")
    if reference.home_odds is None:
        return _default(SignalKind.MARKET, f"{reference.bookmaker} has no quote")

    return Signal(SignalKind.MARKET, implied_probability(reference.home_odds), resolved=True)


def resolve_live(record: Mapping[str, Any] | None) -> Signal:
    """Home win probability from a live-context record, percent scaled to [0, 1].

    Raises:
        SignalUnavailableError: If the record is absent or the field is not a
            percentage in [0, 100]
    """
    if record is None:
        raise SignalUnavailableError("live signal requires a live-context record")

    percent = _as_number(record.get("home_win_probability"))
    if percent is None or not 0.0 <= percent <= 100.0:
        raise SignalUnavailableError(
            f"live-context home_win_probability is not a percentage: "
            f"{record.get('home_win_probability')!r}"
        )

    return Signal(SignalKind.LIVE, percent / 100.0, resolved=True)


def resolve_season(
    standings: Mapping[str, Any] | None,
    team_id: str | int,
) -> Signal:
    """Season win rate, wins / (wins + losses), for team_id in a standings record."""
    if standings is None:
        return _default(SignalKind.SEASON, "standings unavailable")

    wanted = str(team_id)
    for entry in standings.get("teams") or []:
        if str(entry.get("team_id")) != wanted:
            continue

        wins = _as_number(entry.get("wins"))
        losses = _as_number(entry.get("losses"))
        if wins is None or losses is None or wins < 0 or losses < 0:
            return _default(SignalKind.SEASON, f"non-numeric record for team {wanted}")
        if wins + losses == 0:
            return _default(SignalKind.SEASON, f"no games played by team {wanted}")

        return Signal(SignalKind.SEASON, wins / (wins + losses), resolved=True)

    return _default(SignalKind.SEASON, f"team {wanted} not in standings")


def resolve_h2h(record: Mapping[str, Any] | None) -> Signal:
    """Head-to-head rate, home_wins / (home_wins + away_wins)."""
    if record is None:
        return _default(SignalKind.H2H, "head-to-head record unavailable")

    home_wins = _as_number(record.get("home_wins"))
    away_wins = _as_number(record.get("away_wins"))
    if home_wins is None or away_wins is None or home_wins < 0 or away_wins < 0:
        return _default(SignalKind.H2H, "non-numeric head-to-head counts")
    if home_wins + away_wins == 0:
        return _default(SignalKind.H2H, "no head-to-head games")

    return Signal(SignalKind.H2H, home_wins / (home_wins + away_wins), resolved=True)


def pace_adjustment(pace_value: float) -> float:
    """Logistic squash of a league pace value into [0.45, 0.55]."""
    return float(1.0 / (1.0 + np.exp(-(pace_value - PACE_CENTER))) * PACE_SCALE + PACE_FLOOR)


def resolve_pace(record: Mapping[str, Any] | None) -> Signal:
    """Pace factor from a league pace record; None means the sport has no pace data."""
    if record is None:
        return _default(SignalKind.PACE, "pace unsupported or unavailable")

    pace_value = _as_number(record.get("pace_value"))
    if pace_value is None:
        return _default(SignalKind.PACE, "pace value missing")

    return Signal(SignalKind.PACE, pace_adjustment(pace_value), resolved=True)


def resolve(kind: SignalKind, record: Any, **context: Any) -> Signal:
    """Resolve a signal of the given kind.

    Args:
        kind: Which signal to resolve
        record: The source record (bookmaker lines for MARKET)
        **context: selector= for MARKET, team_id= for SEASON

    Returns:
        Signal carrying a real or defaulted value

    Raises:
        SignalUnavailableError: For LIVE without a usable record
        KeyError: If required context is missing
    """
    if kind == SignalKind.MARKET:
        return resolve_market(record, context["selector"])
    if kind == SignalKind.SEASON:
        return resolve_season(record, context["team_id"])
    if kind == SignalKind.LIVE:
        return resolve_live(record)
    if kind == SignalKind.H2H:
        return resolve_h2h(record)
    if kind == SignalKind.PACE:
        return resolve_pace(record)
    raise ValueError(f"Unknown signal kind: {kind}")
