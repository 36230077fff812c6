"""Win-probability computations over already-fetched source records.

Pure orchestration: resolve each signal the profile needs, then blend.
Fetching the records is the caller's job.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from edgefinder.odds.edge import BookmakerLine, ReferenceBookSelector
from edgefinder.probability.blend import (
    LIVE_CONTEXT_PROFILE,
    MARKET_CONTEXT_PROFILE,
    BlendedProbability,
    blend,
)
from edgefinder.probability.signals import (
    resolve_h2h,
    resolve_live,
    resolve_market,
    resolve_pace,
    resolve_season,
)

logger = logging.getLogger(__name__)


def live_context_probability(
    live_record: Mapping[str, Any],
    standings: Mapping[str, Any] | None,
    home_team_id: str | int,
    pace_record: Mapping[str, Any] | None,
) -> BlendedProbability:
    """Blend live win probability (70%), season win rate (25%) and pace (5%).

    Raises:
        SignalUnavailableError: If the live-context record is unusable
    """
    result = blend(
        LIVE_CONTEXT_PROFILE,
        [
            resolve_live(live_record),
            resolve_season(standings, home_team_id),
            resolve_pace(pace_record),
        ],
    )
    _log_result(result)
    return result


def market_context_probability(
    lines: Sequence[BookmakerLine] | None,
    selector: ReferenceBookSelector,
    standings: Mapping[str, Any] | None,
    home_team_id: str | int,
    h2h_record: Mapping[str, Any] | None,
) -> BlendedProbability:
    """Blend reference-book probability (50%), season win rate (30%) and head-to-head (20%)."""
    result = blend(
        MARKET_CONTEXT_PROFILE,
        [
            resolve_market(lines, selector),
            resolve_season(standings, home_team_id),
            resolve_h2h(h2h_record),
        ],
    )
    _log_result(result)
    return result


def _log_result(result: BlendedProbability) -> None:
    degraded = [k.value for k in result.degraded_kinds]
    if degraded:
        logger.warning(
            f"{result.profile} blend home={result.home_prob:.4f} computed with defaulted signals: {degraded}"
        )
    else:
        logger.debug(f"{result.profile} blend home={result.home_prob:.4f}")
