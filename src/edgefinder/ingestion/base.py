"""Abstract provider interfaces, canonical records and the shared HTTP fetch helper.

Providers own all network I/O and hand the core plain records:

- odds: list[BookmakerLine] (quotes in home, away order)
- live context: {"home_win_probability": float}  (percent)
- standings: {"teams": [{"team_id": str, "wins": number, "losses": number}]}
- head-to-head: {"home_wins": int, "away_wins": int}
- pace: {"pace_value": float}
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import aiohttp

from edgefinder.config import get_config
from edgefinder.ingestion.cache import cache_key, get_cache
from edgefinder.odds.convert import InvalidOddsError, OddsQuote
from edgefinder.odds.edge import BookmakerLine, OddsEvent

logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    """An upstream data source failed (transport error or non-200 status)."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class GameNotFoundError(LookupError):
    """No scheduled game matches the requested teams and date."""


@dataclass
class EventSummary:
    """Identifiers needed to look up season context for an event."""

    event_id: str
    season_id: str
    home_team_id: str


# Abstract base classes
class OddsProvider(ABC):
    """Per-game bookmaker lines."""

    @abstractmethod
    async def fetch_lines(self, game_id: str) -> list[BookmakerLine]:
        """
        Fetch every bookmaker's moneyline for a game.

        Args:
            game_id: Game identifier

        Returns:
            Lines in source order; partial lines are kept for the core to skip
        """
        pass


class EventOddsProvider(ABC):
    """All upcoming events for a sport with their bookmaker lines."""

    @abstractmethod
    async def fetch_events(self, sport: str) -> list[OddsEvent]:
        """
        Fetch upcoming events with moneyline odds.

        Args:
            sport: Sport code, e.g. "MLB"

        Returns:
            List of OddsEvent records
        """
        pass


class StatsProvider(ABC):
    """League statistics: schedule, live context, standings, pace and player stats."""

    @abstractmethod
    async def find_game_pk(self, game_date: str, home: str, away: str) -> str:
        """Find the game identifier for a matchup; raises GameNotFoundError."""
        pass

    @abstractmethod
    async def fetch_live_context(self, game_pk: str) -> dict[str, Any]:
        """Fetch the live-context record for a game."""
        pass

    @abstractmethod
    async def fetch_home_team_id(self, game_pk: str) -> str:
        """Fetch the home team identifier for a game."""
        pass

    @abstractmethod
    async def fetch_standings(self, season: int) -> dict[str, Any]:
        """Fetch the standings record for a season."""
        pass

    @abstractmethod
    async def fetch_pace(self, season: int) -> dict[str, Any] | None:
        """Fetch the league pace record, or None when the sport has no pace data."""
        pass

    @abstractmethod
    async def fetch_player_stats(self, player_id: int, season: int) -> dict[str, Any]:
        """Fetch a player's season aggregate stat line."""
        pass

    @abstractmethod
    async def fetch_game_log(self, player_id: int, season: int) -> list[dict[str, Any]]:
        """Fetch a player's per-game stat lines."""
        pass


class MarketDataProvider(ABC):
    """Pre-match market and context data keyed by event."""

    @abstractmethod
    async def fetch_event_summary(self, event_id: str) -> EventSummary:
        pass

    @abstractmethod
    async def fetch_bookmaker_lines(self, event_id: str) -> list[BookmakerLine]:
        pass

    @abstractmethod
    async def fetch_standings(self, season_id: str) -> dict[str, Any]:
        pass

    @abstractmethod
    async def fetch_h2h(self, event_id: str) -> dict[str, Any]:
        pass


# Shared helper functions
async def fetch_json(
    url: str,
    *,
    params: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
    ttl_seconds: int | None = None,
) -> Any:
    """
    GET a JSON document with timeout, retry and TTL caching.

    Transport errors and timeouts are retried with linear backoff (1s, 2s, ...);
    expired cache entries are pruned whenever a new payload is stored;
    a non-200 status fails immediately.

    Args:
        url: Absolute URL
        params: Query parameters
        headers: Request headers (credentials are not part of the cache key)
        ttl_seconds: Cache TTL; None uses the configured default, 0 bypasses the cache

    Returns:
        Decoded JSON payload

    Raises:
        UpstreamError: On non-200 status or when all attempts fail
    """
    config = get_config()
    cache = get_cache()
    key = cache_key(url, params)
    ttl = config.cache_ttl_seconds if ttl_seconds is None else ttl_seconds

    if ttl > 0:
        cached = cache.get(key)
        if cached is not None:
            logger.debug(f"Cache hit for {url}")
            return cached

    timeout = aiohttp.ClientTimeout(total=config.http_timeout_seconds)
    attempts = config.http_retries + 1
    last_error: Exception | None = None

    for attempt in range(attempts):
        try:
            async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
                async with session.get(url, params=params) as resp:
                    if resp.status != 200:
                        raise UpstreamError(
                            f"{url} returned status {resp.status}", status=resp.status
                        )
                    try:
                        payload = await resp.json(content_type=None)
                    except ValueError as e:
                        raise UpstreamError(f"{url} returned invalid JSON") from e
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            last_error = e
            logger.warning(f"Request to {url} failed (attempt {attempt + 1}/{attempts}): {e}")
            if attempt < attempts - 1:
                await asyncio.sleep(attempt + 1)
            continue

        if ttl > 0:
            pruned = cache.prune_expired()
            if pruned:
                logger.debug(f"Pruned {pruned} expired cache entries")
        cache.set(key, payload, ttl)
        return payload

    raise UpstreamError(f"Request to {url} failed after {attempts} attempts") from last_error


def parse_decimal_quote(raw: Any, bookmaker: str) -> OddsQuote | None:
    """
    Parse an upstream decimal price (number or numeric string).

    Args:
        raw: Price value, e.g. "1.91" or 2.05
        bookmaker: Bookmaker name, for the warning

    Returns:
        OddsQuote, or None if the price is missing, unparsable or <= 1.0
    """
    try:
        price = float(raw)
    except (TypeError, ValueError):
        logger.warning(f"Dropping quote from {bookmaker}: unparsable price {raw!r}")
        return None

    try:
        return OddsQuote.decimal(price)
    except InvalidOddsError as e:
        logger.warning(f"Dropping quote from {bookmaker}: {e}")
        return None


def leading_quotes(raw_prices: list[Any], bookmaker: str) -> tuple[OddsQuote, ...]:
    """Valid (home, away) quotes up to the first bad price.

    Parsing stops at the first bad price so an away price is never promoted
    into the home slot.
    """
    quotes: list[OddsQuote] = []
    for raw in raw_prices[:2]:
        quote = parse_decimal_quote(raw, bookmaker)
        if quote is None:
            break
        quotes.append(quote)
    return tuple(quotes)
