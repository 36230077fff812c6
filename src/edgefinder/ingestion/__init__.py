"""Provider-agnostic data ingestion interfaces and adapters."""

from edgefinder.ingestion.apisports import ApiSportsOddsProvider
from edgefinder.ingestion.base import (
    EventOddsProvider,
    EventSummary,
    GameNotFoundError,
    MarketDataProvider,
    OddsProvider,
    StatsProvider,
    UpstreamError,
    fetch_json,
)
from edgefinder.ingestion.cache import Cache, CacheEntry, get_cache
from edgefinder.ingestion.mlb_stats import MlbStatsProvider
from edgefinder.ingestion.sportradar import SportradarProvider
from edgefinder.ingestion.the_odds_api import TheOddsApiProvider

__all__ = [
    # ABCs
    "OddsProvider",
    "EventOddsProvider",
    "StatsProvider",
    "MarketDataProvider",
    # Records and errors
    "EventSummary",
    "UpstreamError",
    "GameNotFoundError",
    # HTTP
    "fetch_json",
    "Cache",
    "CacheEntry",
    "get_cache",
    # Concrete implementations
    "ApiSportsOddsProvider",
    "TheOddsApiProvider",
    "MlbStatsProvider",
    "SportradarProvider",
]
