"""API-Sports odds provider (per-game bookmaker moneylines)."""

import logging
from typing import Any

from edgefinder.config import get_config
from edgefinder.ingestion.base import OddsProvider, fetch_json, leading_quotes
from edgefinder.odds.edge import BookmakerLine

logger = logging.getLogger(__name__)


def parse_apisports_odds(payload: dict[str, Any]) -> list[BookmakerLine]:
    """
    Convert an API-Sports /odds response into bookmaker lines.

    Only the first bet of each bookmaker (the moneyline) is read. Prices
    arrive as decimal strings.

    Args:
        payload: Decoded response body

    Returns:
        Lines in source order, possibly partial; empty if there is no response
    """
    response = payload.get("response") or []
    if not response:
        return []

    lines = []
    for book in response[0].get("bookmakers") or []:
        name = str(book.get("name", ""))
        bets = book.get("bets") or []
        values = (bets[0].get("values") or []) if bets else []
        quotes = leading_quotes([v.get("odd") for v in values], name)
        lines.append(BookmakerLine(bookmaker=name, quotes=quotes))

    return lines


class ApiSportsOddsProvider(OddsProvider):
    """Odds provider backed by the API-Sports /odds endpoint."""

    async def fetch_lines(self, game_id: str) -> list[BookmakerLine]:
        """
        Fetch every bookmaker's moneyline for a game.

        Returns an empty list when no API key is configured.

        Raises:
            UpstreamError: If the request fails
        """
        config = get_config()
        api_key = config.apisports_key.get_secret_value()
        if not api_key:
            logger.warning("apisports_key not configured, returning empty odds")
            return []

        payload = await fetch_json(
            f"https://{config.apisports_host}/odds",
            params={"game": str(game_id)},
            headers={"x-apisports-key": api_key},
        )
        lines = parse_apisports_odds(payload)
        logger.info(f"Fetched {len(lines)} bookmaker lines for game {game_id}")
        return lines
