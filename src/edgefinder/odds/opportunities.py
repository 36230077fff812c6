"""No-vig expected-value opportunities across sportsbooks.

Unlike the raw edge list, opportunities are scored against the reference
book's devigged (fair) prices and expressed relative to the book's implied
probability. Only sides at or above the threshold are reported.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal

from edgefinder.odds.convert import OddsQuote, implied_probability
from edgefinder.odds.devig import hold_percent, proportional_devig
from edgefinder.odds.edge import OddsEvent, ReferenceBookSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EVOpportunity:
    """A single side priced better than the fair (no-vig) reference price."""

    event_id: str
    sport: str
    home_team: str
    away_team: str
    commence_time: str
    side: Literal["home", "away"]
    bookmaker: str
    odds: float  # European decimal
    fair_odds: float  # European decimal, reference margin removed
    ev: float  # percent, relative to implied probability
    hold: float  # reference book margin, percent

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "sport": self.sport,
            "homeTeam": self.home_team,
            "awayTeam": self.away_team,
            "commenceTime": self.commence_time,
            "side": self.side,
            "bookmaker": self.bookmaker,
            "odds": self.odds,
            "fairOdds": self.fair_odds,
            "ev": self.ev,
            "hold": self.hold,
        }


def relative_ev_percent(fair_prob: float, quote: OddsQuote) -> float:
    """EV of a quote as a percentage of its own implied probability."""
    implied = implied_probability(quote)
    return ((fair_prob - implied) / implied) * 100


def find_ev_opportunities(
    events: Sequence[OddsEvent],
    selector: ReferenceBookSelector,
    threshold_percent: float,
) -> list[EVOpportunity]:
    """Scan events for sides priced above the reference book's fair price.

    Args:
        events: Events with their bookmaker lines
        selector: Picks the reference line per event
        threshold_percent: Minimum relative EV for a side to be reported

    Returns:
        Opportunities in event order, home side before away side per book

    Notes:
        - Events without a complete reference line are skipped
        - The reference line itself is never reported
        - Partial lines are skipped
    """
    opportunities: list[EVOpportunity] = []

    for event in events:
        reference = selector.select(event.lines)
        if reference is None or not reference.is_complete:
            logger.debug(f"Skipping event {event.event_id}: no reference line")
            continue

        reference_quotes = [reference.home_odds, reference.away_odds]
        fair_home, fair_away = proportional_devig(reference_quotes)
        hold = hold_percent(reference_quotes)

        for line in event.lines:
            if line is reference or not line.is_complete:
                continue

            for side, fair_prob, quote in (
                ("home", fair_home, line.home_odds),
                ("away", fair_away, line.away_odds),
            ):
                ev = relative_ev_percent(fair_prob, quote)
                if ev < threshold_percent:
                    continue

                opportunities.append(
                    EVOpportunity(
                        event_id=event.event_id,
                        sport=event.sport,
                        home_team=event.home_team,
                        away_team=event.away_team,
                        commence_time=event.commence_time,
                        side=side,
                        bookmaker=line.bookmaker,
                        odds=quote.to_decimal(),
                        fair_odds=1.0 / fair_prob,
                        ev=ev,
                        hold=hold,
                    )
                )

    logger.info(f"Found {len(opportunities)} EV opportunities across {len(events)} events")
    return opportunities
