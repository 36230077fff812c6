"""Odds format conversion and implied probability.

Pure functions only: no I/O, no logging. American and decimal prices are
carried as immutable OddsQuote values that are validated when constructed,
so everything downstream of a quote can assume it is well formed.
"""

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum


class InvalidOddsError(ValueError):
    """Raised for American odds of zero, decimal odds <= 1.0, or non-finite odds."""


class OddsFormat(str, Enum):
    """Price notation of a quote."""

    AMERICAN = "american"
    DECIMAL = "decimal"


@dataclass(frozen=True)
class OddsQuote:
    """A single bookmaker price in American or decimal notation."""

    format: OddsFormat
    value: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.value):
            raise InvalidOddsError(f"Odds must be finite, got {self.value}")
        if self.format == OddsFormat.AMERICAN and self.value == 0:
            raise InvalidOddsError("American odds cannot be 0")
        if self.format == OddsFormat.DECIMAL and self.value <= 1.0:
            raise InvalidOddsError(f"Decimal odds must be > 1.0, got {self.value}")

    @classmethod
    def american(cls, value: float) -> "OddsQuote":
        return cls(OddsFormat.AMERICAN, float(value))

    @classmethod
    def decimal(cls, value: float) -> "OddsQuote":
        return cls(OddsFormat.DECIMAL, float(value))

    def to_decimal(self) -> float:
        """Return the price as European decimal odds (> 1.0)."""
        if self.format == OddsFormat.DECIMAL:
            return self.value
        return american_to_decimal(self.value)


def american_to_decimal(american: float) -> float:
    """
    Convert American odds to European decimal format.

    Args:
        american: American odds (e.g., +150, -110)

    Returns:
        European decimal odds (> 1.0)

    Raises:
        InvalidOddsError: If american odds is 0
    """
    if american == 0:
        raise InvalidOddsError("American odds cannot be 0")

    if american > 0:
        return (american / 100) + 1
    return (100 / abs(american)) + 1


def implied_probability(quote: OddsQuote) -> float:
    """Implied probability of a quote, margin included.

    Args:
        quote: Validated bookmaker price

    Returns:
        Probability in (0, 1]

    Examples:
        >>> implied_probability(OddsQuote.decimal(2.0))
        0.5
        >>> implied_probability(OddsQuote.american(-110))  # 110 / 210
        0.5238095238095238
    """
    if quote.format == OddsFormat.DECIMAL:
        return 1.0 / quote.value

    american = quote.value
    if american > 0:
        return 100.0 / (american + 100.0)
    if american < 0:
        return -american / (100.0 - american)
    raise InvalidOddsError("American odds cannot be 0")


def expected_value_percent(true_prob: float, quote: OddsQuote) -> float:
    """Percentage-point gap between a true probability and a quote's implied probability.

    Not clamped: a negative result is a valid (unfavourable) edge.
    """
    return (true_prob - implied_probability(quote)) * 100


_FOUR_PLACES = Decimal("0.0001")
_WHOLE = Decimal("1")


def ratio_to_american_odds_label(made: int, attempts: int) -> str:
    """Convert a made/attempt ratio to an American odds label.

    Args:
        made: Successful outcomes (hits, games with a hit, ...)
        attempts: Opportunities (at-bats, games, ...)

    Returns:
        "-" when the sample is empty or the ratio is zero, "EVEN" when the
        implied decimal odds are <= 1, "+NNN" for decimal odds >= 2 and
        "-NNN" otherwise.

    Notes:
        - Probability and decimal odds are both rounded to 4 places, half-up
        - Final integer rounding is half-up as well, so 0.5 yields "+100"
    """
    if attempts <= 0:
        return "-"

    probability = (Decimal(made) / Decimal(attempts)).quantize(
        _FOUR_PLACES, rounding=ROUND_HALF_UP
    )
    if probability == 0:
        return "-"

    decimal_odds = (Decimal(1) / probability).quantize(
        _FOUR_PLACES, rounding=ROUND_HALF_UP
    )
    if decimal_odds <= 1:
        return "EVEN"

    diff = decimal_odds - 1
    if decimal_odds >= 2:
        positive = (diff * 100).quantize(_WHOLE, rounding=ROUND_HALF_UP)
        return f"+{positive}"

    negative = (Decimal(100) / diff).quantize(_WHOLE, rounding=ROUND_HALF_UP)
    return f"-{negative}"
