"""
Main entrypoint for the Crab API.

This module assembles the FastAPI application.  ``create_app`` sets
up logging, includes the routers and registers a lifespan handler
that owns the connection pool: before the first request the pool is
created and the schema script is run, after the last one the pool is
closed.  The application is instantiated at import time as ``app``,
so it can be served with::

    uvicorn crab_api.app.main:app

If the pool cannot be created or the schema cannot be applied the
lifespan handler raises and the server exits without serving.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI

from .api.router import router
from .core.config import Settings, settings
from .core.db import StorageError, create_pool, init_db
from .core.logging_config import setup_logging


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use instead of the module-level ``settings``
        instance.  Tests pass their own database URL this way.

    Returns
    -------
    FastAPI
        A configured application.  The pool is available as
        ``app.state.pool`` once startup has completed.
    """
    app_settings = app_settings or settings
    setup_logging(app_settings.log_level, app_settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        pool = await create_pool(app_settings)
        try:
            await init_db(pool)
        except StorageError:
            await pool.close()
            raise
        app.state.pool = pool
        try:
            yield
        finally:
            await pool.close()

    app = FastAPI(
        title=app_settings.project_name,
        version=app_settings.api_version,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.include_router(router)
    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
