"""Two-way arbitrage detection across bookmakers."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from itertools import combinations
from typing import Literal

from edgefinder.odds.convert import OddsQuote, implied_probability
from edgefinder.odds.edge import BookmakerLine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ArbitrageOpportunity:
    """Opposite sides at two books whose combined implied probability is below 1."""

    event_id: str
    book1: str
    book2: str
    odds1: float  # European decimal
    odds2: float  # European decimal
    side1: Literal["home", "away"]
    side2: Literal["home", "away"]
    profit: float  # guaranteed return, percent of total stake
    stake1_ratio: float
    stake2_ratio: float

    def to_dict(self) -> dict:
        return {
            "id": self.event_id,
            "book1": self.book1,
            "book2": self.book2,
            "odds1": self.odds1,
            "odds2": self.odds2,
            "side1": self.side1,
            "side2": self.side2,
            "profit": self.profit,
            "stake1Ratio": self.stake1_ratio,
            "stake2Ratio": self.stake2_ratio,
        }


def arbitrage_profit(quote1: OddsQuote, quote2: OddsQuote) -> tuple[float, float, float] | None:
    """Profit and stake split for backing both quotes.

    Args:
        quote1: Price for one side
        quote2: Price for the opposite side

    Returns:
        (profit_percent, stake1_ratio, stake2_ratio), or None when the combined
        implied probability is 1 or more (no arbitrage)
    """
    implied1 = implied_probability(quote1)
    implied2 = implied_probability(quote2)
    total = implied1 + implied2

    if total >= 1:
        return None

    profit = ((1 - total) / total) * 100
    return profit, implied1 / total, implied2 / total


def find_arbitrage(
    event_id: str,
    lines: Sequence[BookmakerLine],
    min_profit_percent: float,
) -> list[ArbitrageOpportunity]:
    """Check every pair of complete lines in both directions for an arbitrage.

    Args:
        event_id: Event identifier copied onto each result
        lines: Bookmaker lines for the event
        min_profit_percent: Minimum profit for a pair to be reported

    Returns:
        Arbitrage opportunities, pair order follows line order
    """
    complete = [line for line in lines if line.is_complete]
    found: list[ArbitrageOpportunity] = []

    for first, second in combinations(complete, 2):
        for side1, quote1, side2, quote2 in (
            ("home", first.home_odds, "away", second.away_odds),
            ("away", first.away_odds, "home", second.home_odds),
        ):
            arb = arbitrage_profit(quote1, quote2)
            if arb is None:
                continue

            profit, stake1, stake2 = arb
            if profit < min_profit_percent:
                continue

            found.append(
                ArbitrageOpportunity(
                    event_id=event_id,
                    book1=first.bookmaker,
                    book2=second.bookmaker,
                    odds1=quote1.to_decimal(),
                    odds2=quote2.to_decimal(),
                    side1=side1,
                    side2=side2,
                    profit=profit,
                    stake1_ratio=stake1,
                    stake2_ratio=stake2,
                )
            )

    if found:
        logger.info(f"Found {len(found)} arbitrage opportunities for event {event_id}")
    return found
