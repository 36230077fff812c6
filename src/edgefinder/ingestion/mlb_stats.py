"""MLB Stats API provider: schedule lookup, live context, standings, pace and player stats."""

import logging
from typing import Any

from edgefinder.config import get_config
from edgefinder.ingestion.base import (
    GameNotFoundError,
    StatsProvider,
    UpstreamError,
    fetch_json,
)

logger = logging.getLogger(__name__)

# Standings change at most once a game; pace once a day
STANDINGS_CACHE_TTL_SECONDS = 900
PACE_CACHE_TTL_SECONDS = 3600

# American League, National League
MLB_LEAGUE_IDS = "103,104"


def find_game_in_schedule(payload: dict[str, Any], home: str, away: str) -> str | None:
    """
    Find a gamePk in a hydrated schedule by home and away team names.

    Names are compared case-insensitively; the first match wins.

    Returns:
        gamePk as a string, or None if no game matches
    """
    dates = payload.get("dates") or []
    if not dates:
        return None

    home_key = home.casefold()
    away_key = away.casefold()
    for game in dates[0].get("games") or []:
        teams = game.get("teams") or {}
        home_name = ((teams.get("home") or {}).get("team") or {}).get("name", "")
        away_name = ((teams.get("away") or {}).get("team") or {}).get("name", "")
        if home_name.casefold() == home_key and away_name.casefold() == away_key:
            return str(game.get("gamePk"))

    return None


def parse_context_metrics(payload: dict[str, Any]) -> dict[str, Any]:
    """Live-context record from a /game/{pk}/contextMetrics payload."""
    return {"home_win_probability": payload.get("homeWinProbability")}


def parse_home_team_id(payload: dict[str, Any]) -> str | None:
    """Home team id from a /game/{pk}/boxscore payload."""
    team_id = (((payload.get("teams") or {}).get("home") or {}).get("team") or {}).get("id")
    return str(team_id) if team_id is not None else None


def parse_mlb_standings(payload: dict[str, Any]) -> dict[str, Any]:
    """Flatten division records from a /standings payload into the canonical standings record."""
    teams = []
    for record in payload.get("records") or []:
        for team_record in record.get("teamRecords") or []:
            team_id = (team_record.get("team") or {}).get("id")
            if team_id is None:
                continue
            teams.append(
                {
                    "team_id": str(team_id),
                    "wins": team_record.get("wins"),
                    "losses": team_record.get("losses"),
                }
            )
    return {"teams": teams}


def parse_game_pace(payload: dict[str, Any]) -> dict[str, Any] | None:
    """Pace record from a /gamePace payload, or None when no league pace is reported."""
    leagues = payload.get("leagues") or []
    if not leagues:
        return None

    pace = (leagues[0].get("pace") or {}).get("value")
    if pace is None:
        return None
    return {"pace_value": pace}


def first_split_stats(payload: dict[str, Any]) -> list[dict[str, Any]]:
    """Stat lines of the first stats group in a /people/{id}/stats payload."""
    stats = payload.get("stats") or []
    if not stats:
        return []
    return [split.get("stat") or {} for split in stats[0].get("splits") or []]


class MlbStatsProvider(StatsProvider):
    """Stats provider backed by statsapi.mlb.com (no credentials required)."""

    def _url(self, path: str) -> str:
        return f"{get_config().mlb_stats_api_base_url}{path}"

    async def find_game_pk(self, game_date: str, home: str, away: str) -> str:
        """
        Find the gamePk for a matchup on a date.

        Args:
            game_date: Date as YYYY-MM-DD
            home: Home team name, e.g. "New York Yankees"
            away: Away team name

        Raises:
            GameNotFoundError: If no game on that date matches both names
            UpstreamError: If the schedule request fails
        """
        payload = await fetch_json(
            self._url("/schedule"),
            params={"date": game_date, "sportId": "1", "hydrate": "teams"},
        )
        game_pk = find_game_in_schedule(payload, home, away)
        if game_pk is None:
            logger.error(f"Could not find gamePk for {home} vs {away} on {game_date}")
            raise GameNotFoundError(f"No game found for {home} vs {away} on {game_date}")
        return game_pk

    async def fetch_live_context(self, game_pk: str) -> dict[str, Any]:
        payload = await fetch_json(
            self._url(f"/game/{game_pk}/contextMetrics"),
            ttl_seconds=0,
        )
        return parse_context_metrics(payload)

    async def fetch_home_team_id(self, game_pk: str) -> str:
        payload = await fetch_json(self._url(f"/game/{game_pk}/boxscore"), ttl_seconds=0)
        team_id = parse_home_team_id(payload)
        if team_id is None:
            raise UpstreamError(f"Boxscore for game {game_pk} has no home team")
        return team_id

    async def fetch_standings(self, season: int) -> dict[str, Any]:
        payload = await fetch_json(
            self._url("/standings"),
            params={"leagueId": MLB_LEAGUE_IDS, "season": str(season)},
            ttl_seconds=STANDINGS_CACHE_TTL_SECONDS,
        )
        return parse_mlb_standings(payload)

    async def fetch_pace(self, season: int) -> dict[str, Any] | None:
        """
        Fetch league pace for a season.

        Conservative fallback: an unsupported or failing pace endpoint yields
        None, which the pace signal treats as "no data".
        """
        try:
            payload = await fetch_json(
                self._url("/gamePace"),
                params={"season": str(season)},
                ttl_seconds=PACE_CACHE_TTL_SECONDS,
            )
        except UpstreamError as e:
            logger.warning(f"Pace unavailable for season {season}: {e}")
            return None
        return parse_game_pace(payload)

    async def fetch_player_stats(self, player_id: int, season: int) -> dict[str, Any]:
        payload = await fetch_json(
            self._url(f"/people/{player_id}/stats"),
            params={"stats": "season", "season": str(season), "gameType": "R"},
        )
        splits = first_split_stats(payload)
        return splits[0] if splits else {}

    async def fetch_game_log(self, player_id: int, season: int) -> list[dict[str, Any]]:
        payload = await fetch_json(
            self._url(f"/people/{player_id}/stats"),
            params={"stats": "gameLog", "season": str(season), "gameType": "R"},
        )
        return first_split_stats(payload)
