"""Margin removal for a reference book's market."""

from collections.abc import Sequence

from edgefinder.odds.convert import OddsQuote, implied_probability


def proportional_devig(quotes: Sequence[OddsQuote]) -> list[float]:
    """Fair probabilities for every side of a market, margin removed proportionally.

    Args:
        quotes: One quote per side of the market (two for a moneyline)

    Returns:
        Fair probabilities in side order, summing to 1.0

    Raises:
        ValueError: If no quotes are given

    Example:
        1.95 / 1.95 devigs to [0.5, 0.5]; 2.20 / 1.75 to roughly [0.443, 0.557].
    """
    if not quotes:
        raise ValueError("quotes cannot be empty")

    implied = [implied_probability(q) for q in quotes]
    overround = sum(implied)
    return [p / overround for p in implied]


def hold_percent(quotes: Sequence[OddsQuote]) -> float:
    """Bookmaker margin of a market in percent (1.95 / 1.95 holds about 2.56%)."""
    if not quotes:
        raise ValueError("quotes cannot be empty")

    return (sum(implied_probability(q) for q in quotes) - 1.0) * 100
