"""Player prop lines derived from season and game-log ratios.

Pure functions that turn a player's season stat line and game log into
American odds labels. No network or state dependencies.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from edgefinder.odds.convert import ratio_to_american_odds_label


@dataclass(frozen=True)
class PropLine:
    """One prop: a made/attempt ratio and its odds label."""

    label: str
    made: int
    att: int
    odds: str

    def to_dict(self) -> dict:
        return {"label": self.label, "made": self.made, "att": self.att, "odds": self.odds}


def stat_value(stats: Mapping[str, Any] | None, key: str) -> int:
    """Integer stat from a loosely typed stat line; missing or non-numeric is 0."""
    if not stats:
        return 0
    value = stats.get(key)
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    try:
        return int(str(value))
    except (TypeError, ValueError):
        return 0


def games_with_stat(game_log: Sequence[Mapping[str, Any]], key: str) -> int:
    """Number of game-log entries where the stat is positive."""
    return sum(1 for game in game_log if stat_value(game, key) > 0)


def _prop(label: str, made: int, att: int) -> PropLine:
    return PropLine(label, made, att, ratio_to_american_odds_label(made, att))


def compute_props(
    season_stats: Mapping[str, Any] | None,
    game_log: Sequence[Mapping[str, Any]],
) -> list[PropLine]:
    """Compute the standard prop lines for a hitter.

    Args:
        season_stats: Season aggregate stat line (hits, atBats, baseOnBalls, ...)
        game_log: One stat line per game played

    Returns:
        Eight PropLine entries in display order

    Notes:
        - OBP uses (H + BB) / (AB + BB + K)
        - Per-game props divide by the number of game-log entries
    """
    hits = stat_value(season_stats, "hits")
    at_bats = stat_value(season_stats, "atBats")
    walks = stat_value(season_stats, "baseOnBalls")
    strike_outs = stat_value(season_stats, "strikeOuts")
    runs = stat_value(season_stats, "runs")
    rbi = stat_value(season_stats, "rbi")
    errors = stat_value(season_stats, "errors")

    total_games = len(game_log)

    return [
        _prop("Hits/AB", hits, at_bats),
        _prop("OBP", hits + walks, at_bats + walks + strike_outs),
        _prop("RBI/Game", rbi, total_games),
        _prop("Runs/Game", runs, total_games),
        _prop("Walks/Game", walks, total_games),
        _prop("K's/Game", strike_outs, total_games),
        _prop("Errors/Game", errors, total_games),
        _prop("Games w/Hit", games_with_stat(game_log, "hits"), total_games),
    ]
