"""The Odds API provider (upcoming events with moneylines across books)."""

import logging
from typing import Any

from edgefinder.config import get_config
from edgefinder.ingestion.base import EventOddsProvider, fetch_json, leading_quotes
from edgefinder.odds.edge import BookmakerLine, OddsEvent

logger = logging.getLogger(__name__)

SPORT_KEYS = {
    "NFL": "americanfootball_nfl",
    "NBA": "basketball_nba",
    "MLB": "baseball_mlb",
    "NHL": "icehockey_nhl",
}


def _moneyline_prices(outcomes: list[dict[str, Any]], home: str, away: str) -> list[Any]:
    """(home, away) prices from h2h outcomes, matched by team name.

    An outcome is never used for both sides. When only one team is named, the
    other side takes the remaining outcome of a two-way market; otherwise the
    pairing is ambiguous and no prices are returned. With no names matching,
    outcomes are read positionally.
    """
    names = [outcome.get("name") for outcome in outcomes]
    home_idx = names.index(home) if home in names else None
    away_idx = names.index(away) if away in names else None

    if home_idx is None and away_idx is None:
        home_idx, away_idx = 0, 1
    elif (home_idx is None or away_idx is None) and len(outcomes) != 2:
        return []
    elif home_idx is None:
        home_idx = 1 - away_idx
    elif away_idx is None:
        away_idx = 1 - home_idx
    elif home_idx == away_idx:
        return []

    return [outcomes[i].get("price") for i in (home_idx, away_idx) if i < len(outcomes)]


def parse_odds_api_events(payload: list[dict[str, Any]], sport: str) -> list[OddsEvent]:
    """
    Convert a The Odds API /odds response (decimal format, h2h market) into events.

    Args:
        payload: Decoded response body (a bare list of events)
        sport: Sport code recorded on each event

    Returns:
        List of OddsEvent records; bookmakers without an h2h market get an empty line
    """
    events = []
    for game in payload or []:
        home_team = game.get("home_team", "")
        away_team = game.get("away_team", "")

        lines = []
        for bookmaker in game.get("bookmakers") or []:
            name = bookmaker.get("title") or bookmaker.get("key") or ""
            markets = bookmaker.get("markets") or []
            outcomes = (markets[0].get("outcomes") or []) if markets else []
            if not outcomes:
                lines.append(BookmakerLine(bookmaker=name))
                continue

            raw_prices = _moneyline_prices(outcomes, home_team, away_team)
            if not raw_prices:
                logger.warning(f"Cannot pair {name} outcomes with {home_team} vs {away_team}")
            lines.append(BookmakerLine(bookmaker=name, quotes=leading_quotes(raw_prices, name)))

        events.append(
            OddsEvent(
                event_id=str(game.get("id", "")),
                sport=game.get("sport_title") or sport,
                home_team=home_team,
                away_team=away_team,
                commence_time=game.get("commence_time", ""),
                lines=tuple(lines),
            )
        )

    return events


class TheOddsApiProvider(EventOddsProvider):
    """Event odds provider backed by The Odds API v4."""

    async def fetch_events(self, sport: str) -> list[OddsEvent]:
        """
        Fetch upcoming events for a sport.

        Returns an empty list when no API key is configured.

        Raises:
            ValueError: If the sport is not supported
            UpstreamError: If the request fails
        """
        sport = sport.upper()
        sport_key = SPORT_KEYS.get(sport)
        if sport_key is None:
            raise ValueError(f"Unsupported sport '{sport}'")

        config = get_config()
        api_key = config.odds_api_key.get_secret_value()
        if not api_key:
            logger.warning("odds_api_key not configured, returning empty events")
            return []

        payload = await fetch_json(
            f"{config.odds_api_base_url}/sports/{sport_key}/odds",
            params={
                "apiKey": api_key,
                "regions": "us",
                "markets": "h2h",
                "oddsFormat": "decimal",
            },
        )
        events = parse_odds_api_events(payload, sport)
        logger.info(f"Fetched {len(events)} {sport} events from The Odds API")
        return events
