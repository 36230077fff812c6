"""aiohttp web API over the odds and probability core."""

import asyncio
import json
import logging
from collections.abc import Awaitable
from typing import Any, Optional, TypeVar

from aiohttp import web

from edgefinder.api.formatter import error_body, format_blended
from edgefinder.config import get_config
from edgefinder.ingestion import (
    ApiSportsOddsProvider,
    EventOddsProvider,
    GameNotFoundError,
    MarketDataProvider,
    MlbStatsProvider,
    OddsProvider,
    SportradarProvider,
    StatsProvider,
    TheOddsApiProvider,
    UpstreamError,
)
from edgefinder.odds import (
    InvalidOddsError,
    NamedReferenceBook,
    find_arbitrage,
    find_edges,
    find_ev_opportunities,
)
from edgefinder.probability import (
    SignalUnavailableError,
    live_context_probability,
    market_context_probability,
)
from edgefinder.props import compute_props

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _error(message: str, status: int) -> web.Response:
    return web.json_response(error_body(message, status), status=status)


def _require_query(request: web.Request, name: str) -> str:
    value = request.query.get(name, "").strip()
    if not value:
        raise web.HTTPBadRequest(
            text=json.dumps(error_body(f"Missing query parameter '{name}'", 400)),
            content_type="application/json",
        )
    return value


def _selector() -> NamedReferenceBook:
    return NamedReferenceBook(get_config().reference_book)


async def _optional(coro: Awaitable[T], what: str) -> Optional[T]:
    """Await an upstream call whose failure only degrades a signal."""
    try:
        return await coro
    except UpstreamError as e:
        logger.warning(f"{what} unavailable, continuing without it: {e}")
        return None


@web.middleware
async def error_middleware(request: web.Request, handler) -> web.StreamResponse:
    """Translate domain and upstream errors into JSON error responses."""
    try:
        return await handler(request)
    except web.HTTPException:
        raise
    except GameNotFoundError as e:
        return _error(str(e), 404)
    except (InvalidOddsError, SignalUnavailableError) as e:
        return _error(str(e), 422)
    except UpstreamError as e:
        logger.warning(f"Upstream failure serving {request.path}: {e}")
        return _error(str(e), 502)
    except Exception as e:
        logger.error(f"Unhandled error serving {request.path}: {e}", exc_info=True)
        return _error("Internal server error", 500)


async def health(request: web.Request) -> web.Response:
    return web.json_response({"status": "ok"})


async def expected_value(request: web.Request) -> web.Response:
    """Handle GET /api/expected-value?gameId=.

    Returns the EV of every complete bookmaker line against the reference book.
    An empty list means the reference book has no usable line for the game.
    """
    game_id = _require_query(request, "gameId")
    provider: OddsProvider = request.app["odds_provider"]

    lines = await provider.fetch_lines(game_id)
    edges = find_edges(game_id, lines, _selector())
    return web.json_response([edge.to_dict() for edge in edges])


async def arbitrage(request: web.Request) -> web.Response:
    """Handle GET /api/arbitrage?gameId=."""
    game_id = _require_query(request, "gameId")
    provider: OddsProvider = request.app["odds_provider"]

    lines = await provider.fetch_lines(game_id)
    opportunities = find_arbitrage(game_id, lines, get_config().min_arb_percent)
    return web.json_response([opp.to_dict() for opp in opportunities])


async def ev_opportunities(request: web.Request) -> web.Response:
    """Handle GET /api/ev-opportunities/{sport}."""
    sport = request.match_info["sport"]
    provider: EventOddsProvider = request.app["event_odds_provider"]

    try:
        events = await provider.fetch_events(sport)
    except ValueError as e:
        return _error(str(e), 400)

    opportunities = find_ev_opportunities(
        events, _selector(), get_config().ev_threshold_percent
    )
    return web.json_response([opp.to_dict() for opp in opportunities])


async def win_probability(request: web.Request) -> web.Response:
    """Handle GET /api/win-probability?eventId=.

    Blends the reference-book price with season win rate and head-to-head
    record. The event summary is required; every other source degrades to
    its default when unavailable.
    """
    event_id = _require_query(request, "eventId")
    provider: MarketDataProvider = request.app["market_provider"]

    summary = await provider.fetch_event_summary(event_id)
    lines, standings, h2h = await asyncio.gather(
        _optional(provider.fetch_bookmaker_lines(event_id), "Bookmaker lines"),
        _optional(provider.fetch_standings(summary.season_id), "Standings"),
        _optional(provider.fetch_h2h(event_id), "Head-to-head"),
    )

    result = market_context_probability(
        lines, _selector(), standings, summary.home_team_id, h2h
    )
    body = format_blended(result)
    body["eventId"] = event_id
    return web.json_response(body)


def _season_for(game_date: str) -> int:
    try:
        return int(game_date[:4])
    except ValueError:
        return get_config().season


async def multi_factor_win_probability(request: web.Request) -> web.Response:
    """Handle POST /api/multi-factor-win-probability.

    Body: {"date": "YYYY-MM-DD", "home": team name, "away": team name}.
    Live context is required (422 when unusable); standings and pace degrade.
    """
    try:
        payload: Any = await request.json()
    except json.JSONDecodeError:
        return _error("Request body must be JSON", 400)

    if not isinstance(payload, dict):
        return _error("Request body must be a JSON object", 400)

    missing = [k for k in ("date", "home", "away") if not str(payload.get(k) or "").strip()]
    if missing:
        return _error(f"Missing fields: {', '.join(missing)}", 400)

    game_date = str(payload["date"]).strip()
    provider: StatsProvider = request.app["stats_provider"]
    season = _season_for(game_date)

    game_pk = await provider.find_game_pk(
        game_date, str(payload["home"]).strip(), str(payload["away"]).strip()
    )
    live, home_team_id, standings, pace = await asyncio.gather(
        provider.fetch_live_context(game_pk),
        provider.fetch_home_team_id(game_pk),
        _optional(provider.fetch_standings(season), "Standings"),
        _optional(provider.fetch_pace(season), "Pace"),
    )

    result = live_context_probability(live, standings, home_team_id, pace)
    body = format_blended(result)
    body["gamePk"] = game_pk
    return web.json_response(body)


async def player_props(request: web.Request) -> web.Response:
    """Handle GET /api/props?playerId=[&season=]."""
    raw_player_id = _require_query(request, "playerId")
    raw_season = request.query.get("season")
    try:
        player_id = int(raw_player_id)
        season = int(raw_season) if raw_season else get_config().season
    except ValueError:
        return _error("playerId and season must be integers", 400)

    provider: StatsProvider = request.app["stats_provider"]
    season_stats, game_log = await asyncio.gather(
        provider.fetch_player_stats(player_id, season),
        provider.fetch_game_log(player_id, season),
    )

    props = compute_props(season_stats, game_log)
    return web.json_response(
        {
            "playerId": player_id,
            "season": season,
            "gamesPlayed": len(game_log),
            "props": [prop.to_dict() for prop in props],
        }
    )


async def create_app(
    odds_provider: Optional[OddsProvider] = None,
    event_odds_provider: Optional[EventOddsProvider] = None,
    stats_provider: Optional[StatsProvider] = None,
    market_provider: Optional[MarketDataProvider] = None,
) -> web.Application:
    """Create aiohttp application with API routes.

    Args:
        odds_provider: Per-game bookmaker lines (default: API-Sports)
        event_odds_provider: Upcoming events by sport (default: The Odds API)
        stats_provider: Schedule, live context and player stats (default: MLB Stats API)
        market_provider: Pre-match market context (default: Sportradar)

    Returns:
        Configured aiohttp Application
    """
    app = web.Application(middlewares=[error_middleware])

    app["odds_provider"] = odds_provider if odds_provider is not None else ApiSportsOddsProvider()
    app["event_odds_provider"] = (
        event_odds_provider if event_odds_provider is not None else TheOddsApiProvider()
    )
    app["stats_provider"] = stats_provider if stats_provider is not None else MlbStatsProvider()
    app["market_provider"] = (
        market_provider if market_provider is not None else SportradarProvider()
    )

    app.router.add_get("/health", health)
    app.router.add_get("/api/expected-value", expected_value)
    app.router.add_get("/api/arbitrage", arbitrage)
    app.router.add_get("/api/ev-opportunities/{sport}", ev_opportunities)
    app.router.add_get("/api/win-probability", win_probability)
    app.router.add_post("/api/multi-factor-win-probability", multi_factor_win_probability)
    app.router.add_get("/api/props", player_props)

    return app


async def run_server(shutdown_event: Optional[asyncio.Event] = None) -> None:
    """Run API server until shutdown signal.

    Args:
        shutdown_event: Optional event to signal shutdown
    """
    config = get_config()
    app = await create_app()

    runner = web.AppRunner(app)
    await runner.setup()

    site = web.TCPSite(runner, config.server_host, config.server_port)
    await site.start()

    logger.info(
        f"API server listening on {config.server_host}:{config.server_port} "
        f"(env={config.env}, reference_book={config.reference_book})"
    )

    if shutdown_event:
        await shutdown_event.wait()
    else:
        await asyncio.Event().wait()

    logger.info("Shutting down API server...")
    await runner.cleanup()

