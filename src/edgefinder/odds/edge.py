"""Per-bookmaker edge against a reference (sharp) book.

The reference book's implied probabilities are treated as the fair baseline.
Every other line for the same event, the reference included, is scored as
the percentage-point gap between that baseline and its own implied
probability. Partial lines are skipped; negative edges are kept.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass

from edgefinder.odds.convert import (
    OddsQuote,
    expected_value_percent,
    implied_probability,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BookmakerLine:
    """One bookmaker's two-way line for an event, quotes in source order (home, away)."""

    bookmaker: str
    quotes: tuple[OddsQuote, ...] = ()

    @property
    def home_odds(self) -> OddsQuote | None:
        return self.quotes[0] if len(self.quotes) > 0 else None

    @property
    def away_odds(self) -> OddsQuote | None:
        return self.quotes[1] if len(self.quotes) > 1 else None

    @property
    def is_complete(self) -> bool:
        """True when both sides are quoted."""
        return len(self.quotes) >= 2


@dataclass(frozen=True)
class OddsEvent:
    """All bookmaker lines for one scheduled event."""

    event_id: str
    sport: str
    home_team: str
    away_team: str
    commence_time: str
    lines: tuple[BookmakerLine, ...] = ()


@dataclass(frozen=True)
class EdgeResult:
    """Edge of one bookmaker's line against the reference book."""

    game_id: str
    bookmaker: str
    home_odds: OddsQuote
    away_odds: OddsQuote
    ev_home_percent: float
    ev_away_percent: float

    def to_dict(self) -> dict:
        return {
            "gameId": self.game_id,
            "bookmaker": self.bookmaker,
            "homeOdds": self.home_odds.value,
            "awayOdds": self.away_odds.value,
            "evHomePercent": self.ev_home_percent,
            "evAwayPercent": self.ev_away_percent,
        }


class ReferenceBookSelector(ABC):
    """Strategy for choosing the reference line among an event's lines."""

    @abstractmethod
    def select(self, lines: Sequence[BookmakerLine]) -> BookmakerLine | None:
        """
        Pick the reference line.

        Args:
            lines: All bookmaker lines for one event

        Returns:
            The reference line, or None if no line qualifies
        """
        pass


class NamedReferenceBook(ReferenceBookSelector):
    """Select the first line whose bookmaker name matches, ignoring case."""

    def __init__(self, name: str):
        if not name or not name.strip():
            raise ValueError("Reference book name must not be blank")
        self.name = name.strip()

    def select(self, lines: Sequence[BookmakerLine]) -> BookmakerLine | None:
        target = self.name.casefold()
        for line in lines:
            if line.bookmaker.casefold() == target:
                return line
        return None

    def __repr__(self) -> str:
        return f"NamedReferenceBook({self.name!r})"


def compute_edges(
    game_id: str,
    reference_line: BookmakerLine,
    lines: Sequence[BookmakerLine],
) -> list[EdgeResult]:
    """Compute every bookmaker's edge against the reference line.

    Args:
        game_id: Event identifier copied onto each result
        reference_line: Complete line of the reference book
        lines: All lines for the event, reference included

    Returns:
        One EdgeResult per complete line, in input order

    Raises:
        ValueError: If the reference line does not quote both sides

    Notes:
        - Reference implied probabilities are computed once
        - Lines with fewer than two quotes are skipped silently
        - No filtering or sorting by edge sign or size
    """
    if not reference_line.is_complete:
        raise ValueError(
            f"Reference line from {reference_line.bookmaker} must quote both sides"
        )

    imp_home = implied_probability(reference_line.home_odds)
    imp_away = implied_probability(reference_line.away_odds)

    results = []
    for line in lines:
        if not line.is_complete:
            continue

        results.append(
            EdgeResult(
                game_id=game_id,
                bookmaker=line.bookmaker,
                home_odds=line.home_odds,
                away_odds=line.away_odds,
                ev_home_percent=expected_value_percent(imp_home, line.home_odds),
                ev_away_percent=expected_value_percent(imp_away, line.away_odds),
            )
        )

    return results


def find_edges(
    game_id: str,
    lines: Sequence[BookmakerLine],
    selector: ReferenceBookSelector,
) -> list[EdgeResult]:
    """Select the reference line and compute edges; empty when there is no usable reference."""
    reference_line = selector.select(lines)
    if reference_line is None or not reference_line.is_complete:
        logger.info(f"No usable reference line for game {game_id} ({selector!r})")
        return []

    return compute_edges(game_id, reference_line, lines)
