"""
A bounded connection pool for SQLite built on ``aiosqlite``.

The pool mirrors the small part of asyncpg's API the service relies
on: ``pool.acquire()`` is an async context manager yielding a
connection with ``fetch`` and ``execute`` coroutines, and
``pool.close()`` releases every connection.  Queries are written with
PostgreSQL ``$n`` placeholders and rewritten to SQLite's numbered
``?n`` parameters, so the service layer issues the same SQL text
against either backend.

Connections are opened lazily, reused once released and never exceed
``max_size``.  A ``":memory:"`` database is limited to a single
connection, otherwise every connection would see its own empty
database.
"""

import asyncio
import logging
import re
import sqlite3
from contextlib import asynccontextmanager
from typing import AsyncIterator, List

import aiosqlite


logger = logging.getLogger(__name__)

_PLACEHOLDER = re.compile(r"\$(\d+)")


def translate_placeholders(query: str) -> str:
    """Rewrite ``$1, $2`` placeholders into SQLite's ``?1, ?2``."""
    return _PLACEHOLDER.sub(r"?\1", query)


class SQLiteConnection:
    """Pooled aiosqlite connection with an asyncpg-like interface."""

    def __init__(self, connection: aiosqlite.Connection) -> None:
        self._connection = connection

    async def fetch(self, query: str, *args) -> List[sqlite3.Row]:
        """Run a query and return all rows."""
        rows = await self._connection.execute_fetchall(translate_placeholders(query), args)
        return list(rows)

    async def execute(self, query: str, *args) -> None:
        """Run a statement and commit it.

        Without arguments the text is run as a script, which allows
        several ``;``-separated statements just like asyncpg's simple
        query protocol.
        """
        if not args:
            await self._connection.executescript(query)
            return
        try:
            await self._connection.execute(translate_placeholders(query), args)
            await self._connection.commit()
        except BaseException:
            await self._connection.rollback()
            raise


class SQLitePool:
    """Fixed-size pool of aiosqlite connections."""

    def __init__(self, database: str, max_size: int = 10) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if database == ":memory:":
            max_size = 1
        self.database = database
        self.max_size = max_size
        self._idle: List[aiosqlite.Connection] = []
        self._slots = asyncio.Semaphore(max_size)
        self._opened = 0
        self._closed = False

    @property
    def size(self) -> int:
        """Number of connections opened so far."""
        return self._opened

    async def _connect(self) -> aiosqlite.Connection:
        connection = await aiosqlite.connect(self.database)
        connection.row_factory = aiosqlite.Row
        self._opened += 1
        logger.debug("Opened SQLite connection %s to %s", self._opened, self.database)
        return connection

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[SQLiteConnection]:
        """Borrow a connection, waiting while all ``max_size`` are in use."""
        if self._closed:
            raise sqlite3.ProgrammingError("Connection pool is closed")
        async with self._slots:
            connection = self._idle.pop() if self._idle else await self._connect()
            try:
                yield SQLiteConnection(connection)
            finally:
                # A borrower interrupted mid-statement must not hand back
                # an open write transaction.
                if connection.in_transaction:
                    await connection.rollback()
                if self._closed:
                    await connection.close()
                else:
                    self._idle.append(connection)

    async def close(self) -> None:
        """Close idle connections; busy ones are closed when released."""
        self._closed = True
        while self._idle:
            await self._idle.pop().close()
