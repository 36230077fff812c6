"""HTTP API: aiohttp routes and JSON rendering."""

from edgefinder.api.formatter import format_blended, format_percent
from edgefinder.api.server import create_app, run_server

__all__ = ["create_app", "run_server", "format_blended", "format_percent"]
