"""Application entry point."""

import asyncio
import logging
import signal
import sys

from edgefinder.api import run_server
from edgefinder.config import get_config


async def serve() -> None:
    """
    Serve the API until SIGTERM/SIGINT.

    Raises:
        SystemExit: On configuration errors or if the server fails to start
    """
    logger = logging.getLogger(__name__)

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, shutdown_event.set)

    try:
        await run_server(shutdown_event=shutdown_event)
    except OSError as e:
        logger.error(f"Server failed to start: {e}")
        raise SystemExit(1) from e

    logger.info("Application shutdown complete")


def main() -> None:
    """Main entry point with logging configuration."""
    config = get_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.info(f"Configuration loaded: env={config.env}")

    try:
        asyncio.run(serve())
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        sys.exit(0)
    except SystemExit:
        raise
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
