"""Serve the Crab API with uvicorn.

Usage::

    python -m crab_api

Host, port and database are taken from ``crab_api.app.core.config``
(``HOST``, ``PORT`` and ``DATABASE_URL`` environment variables).
The process exits with a non-zero status if startup fails, for
example when the database cannot be reached.
"""

import asyncio
import logging
import sys

from uvicorn import Config, Server

from crab_api.app.core.config import settings


logger = logging.getLogger(__name__)

# Same exit status uvicorn.run() uses when the application fails to start.
STARTUP_FAILURE = 3


async def serve() -> bool:
    """Run the server until it is stopped; return whether it started."""
    config = Config(
        app="crab_api.app.main:app",
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    await server.serve()
    return server.started


def main() -> None:
    try:
        started = asyncio.run(serve())
    except KeyboardInterrupt:
        return
    if not started:
        logger.critical("Crab API failed to start")
        sys.exit(STARTUP_FAILURE)


if __name__ == "__main__":
    main()
