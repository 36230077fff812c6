"""Odds conversion, reference-book edges, devig, EV scanning and arbitrage."""

from edgefinder.odds.arbitrage import ArbitrageOpportunity, find_arbitrage
from edgefinder.odds.convert import (
    InvalidOddsError,
    OddsFormat,
    OddsQuote,
    american_to_decimal,
    expected_value_percent,
    implied_probability,
    ratio_to_american_odds_label,
)
from edgefinder.odds.devig import hold_percent, proportional_devig
from edgefinder.odds.edge import (
    BookmakerLine,
    EdgeResult,
    NamedReferenceBook,
    OddsEvent,
    ReferenceBookSelector,
    compute_edges,
    find_edges,
)
from edgefinder.odds.opportunities import EVOpportunity, find_ev_opportunities

__all__ = [
    "InvalidOddsError",
    "OddsFormat",
    "OddsQuote",
    "american_to_decimal",
    "expected_value_percent",
    "implied_probability",
    "ratio_to_american_odds_label",
    "BookmakerLine",
    "OddsEvent",
    "EdgeResult",
    "ReferenceBookSelector",
    "NamedReferenceBook",
    "compute_edges",
    "find_edges",
    "proportional_devig",
    "hold_percent",
    "EVOpportunity",
    "find_ev_opportunities",
    "ArbitrageOpportunity",
    "find_arbitrage",
]
