"""Sportradar provider: pre-match bookmaker odds, event summary, standings and head-to-head."""

import logging
from typing import Any

from edgefinder.config import get_config
from edgefinder.ingestion.base import (
    EventSummary,
    MarketDataProvider,
    UpstreamError,
    fetch_json,
    leading_quotes,
)
from edgefinder.odds.edge import BookmakerLine

logger = logging.getLogger(__name__)


def parse_sportradar_bookmakers(payload: dict[str, Any]) -> list[BookmakerLine]:
    """Bookmaker lines from an odds-comparison bookmakers.json payload (first bet per book)."""
    lines = []
    for book in (payload.get("data") or {}).get("bookmakers") or []:
        name = str(book.get("name", ""))
        bets = book.get("bets") or []
        values = (bets[0].get("values") or []) if bets else []
        quotes = leading_quotes([v.get("decimal") for v in values], name)
        lines.append(BookmakerLine(bookmaker=name, quotes=quotes))
    return lines


def parse_event_summary(event_id: str, payload: dict[str, Any]) -> EventSummary | None:
    """Season id and home team id from a game summary; the first competitor is home."""
    sport_event = (payload.get("data") or {}).get("sport_event") or {}
    season_id = (sport_event.get("season") or {}).get("id")
    competitors = sport_event.get("competitors") or []
    if not season_id or not competitors or not competitors[0].get("id"):
        return None
    return EventSummary(
        event_id=event_id,
        season_id=str(season_id),
        home_team_id=str(competitors[0]["id"]),
    )


def parse_sportradar_standings(payload: dict[str, Any]) -> dict[str, Any]:
    """Canonical standings record from a season standings.json payload."""
    teams = [
        {
            "team_id": str(record.get("team_id")),
            "wins": record.get("wins"),
            "losses": record.get("losses"),
        }
        for record in (payload.get("data") or {}).get("records") or []
        if record.get("team_id") is not None
    ]
    return {"teams": teams}


def parse_sportradar_h2h(payload: dict[str, Any]) -> dict[str, Any]:
    """Canonical head-to-head record from an h2h.json payload."""
    data = payload.get("data") or {}
    return {"home_wins": data.get("home_wins"), "away_wins": data.get("away_wins")}


class SportradarProvider(MarketDataProvider):
    """Market data provider backed by Sportradar (Api-Key header)."""

    def _request(self, path: str) -> tuple[str, dict[str, str]]:
        config = get_config()
        api_key = config.sportradar_api_key.get_secret_value()
        if not api_key:
            raise UpstreamError("sportradar_api_key not configured")
        return f"https://{config.sportradar_host}{path}", {"Api-Key": api_key}

    def _mlb_path(self, path: str) -> str:
        return f"/mlb/{get_config().sportradar_mlb_version}{path}"

    async def fetch_event_summary(self, event_id: str) -> EventSummary:
        url, headers = self._request(self._mlb_path(f"/games/{event_id}/summary.json"))
        payload = await fetch_json(url, headers=headers, ttl_seconds=0)
        summary = parse_event_summary(event_id, payload)
        if summary is None:
            raise UpstreamError(f"Summary for event {event_id} lacks season or competitors")
        return summary

    async def fetch_bookmaker_lines(self, event_id: str) -> list[BookmakerLine]:
        version = get_config().sportradar_odds_version
        url, headers = self._request(
            f"/oddscomparison/{version}/prematch/{event_id}/bookmakers.json"
        )
        payload = await fetch_json(url, headers=headers)
        lines = parse_sportradar_bookmakers(payload)
        logger.info(f"Fetched {len(lines)} bookmaker lines for event {event_id}")
        return lines

    async def fetch_standings(self, season_id: str) -> dict[str, Any]:
        url, headers = self._request(self._mlb_path(f"/seasons/{season_id}/standings.json"))
        return parse_sportradar_standings(await fetch_json(url, headers=headers))

    async def fetch_h2h(self, event_id: str) -> dict[str, Any]:
        url, headers = self._request(self._mlb_path(f"/games/{event_id}/h2h.json"))
        return parse_sportradar_h2h(await fetch_json(url, headers=headers))
