"""
Database pool creation and schema initialisation.

This module builds the connection pool shared by all requests
(``create_pool``), runs the schema script before the server accepts
traffic (``init_db``) and exposes the pool to route handlers through
the ``get_pool`` FastAPI dependency.

Two backends are supported, selected by the scheme of
``settings.database_url``:

* ``postgresql://`` – an ``asyncpg`` pool;
* ``sqlite:///<path>`` – the aiosqlite pool from ``sqlite_pool``,
  used for local development and tests.

Both expose ``acquire()`` / ``fetch()`` / ``execute()``, so services
write one set of SQL statements.  Driver failures are converted into
``StorageError`` at the service boundary.
"""

import asyncio
import logging
import sqlite3
from typing import Union

import asyncpg
from fastapi import Request

from .config import Settings
from .sqlite_pool import SQLitePool


logger = logging.getLogger(__name__)

Pool = Union[asyncpg.Pool, SQLitePool]

POSTGRES_SCHEMES = ("postgresql://", "postgres://")
SQLITE_SCHEME = "sqlite:///"

POSTGRES_INIT_SCRIPT = """
CREATE TABLE IF NOT EXISTS crabs (
    id SERIAL PRIMARY KEY,
    name TEXT NOT NULL,
    age SMALLINT NOT NULL,
    height DOUBLE PRECISION NOT NULL
);
"""

# AUTOINCREMENT keeps SQLite from reusing the id of a deleted row.
SQLITE_INIT_SCRIPT = """
CREATE TABLE IF NOT EXISTS crabs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    age INTEGER NOT NULL,
    height REAL NOT NULL
);
"""

# Everything a driver may raise while acquiring a connection or
# running a statement.
DATABASE_ERRORS = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    sqlite3.Error,
    OSError,
    asyncio.TimeoutError,
)


class StorageError(Exception):
    """A connection could not be acquired or a statement failed."""


async def create_pool(settings: Settings) -> Pool:
    """Create the connection pool described by ``settings.database_url``.

    Raises ``ValueError`` for an unknown URL scheme and ``StorageError``
    if the PostgreSQL server cannot be reached.
    """
    url = settings.database_url
    if url.startswith(POSTGRES_SCHEMES):
        logger.info(
            "Creating PostgreSQL pool (min_size=%s, max_size=%s)",
            settings.pool_min_size,
            settings.pool_max_size,
        )
        try:
            return await asyncpg.create_pool(
                dsn=url,
                min_size=settings.pool_min_size,
                max_size=settings.pool_max_size,
            )
        except DATABASE_ERRORS as exc:
            logger.critical("Could not connect to the database: %s", exc)
            raise StorageError(str(exc)) from exc
    if url.startswith(SQLITE_SCHEME):
        path = url[len(SQLITE_SCHEME):]
        logger.info("Creating SQLite pool for %s (max_size=%s)", path, settings.pool_max_size)
        return SQLitePool(path, max_size=settings.pool_max_size)
    raise ValueError(f"Unsupported database URL: {url!r}")


def get_init_script(pool: Pool) -> str:
    """Return the schema script matching the pool's SQL dialect."""
    if isinstance(pool, SQLitePool):
        return SQLITE_INIT_SCRIPT
    return POSTGRES_INIT_SCRIPT


async def init_db(pool: Pool) -> None:
    """Create the ``crabs`` table if it does not exist.

    Runs once before the server starts serving.  Any failure is fatal:
    it is logged and re-raised as ``StorageError`` so that startup
    aborts.
    """
    try:
        async with pool.acquire() as conn:
            await conn.execute(get_init_script(pool))
    except DATABASE_ERRORS as exc:
        logger.critical("Database initialization failed: %s", exc)
        raise StorageError(str(exc)) from exc
    logger.info("Database schema is ready")


def get_pool(request: Request) -> Pool:
    """FastAPI dependency returning the pool created at startup.

    Tests substitute another pool through ``app.dependency_overrides``.
    """
    return request.app.state.pool
