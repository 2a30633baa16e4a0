"""
Service layer for crabs.

Each operation borrows one connection from the pool, runs exactly one
parameterised statement and gives the connection back, whether the
statement succeeded or not.  There are no transactions spanning
several statements and no retries: a driver error is logged and
re-raised as ``StorageError`` carrying the driver's message.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from crab_api.app.core.db import DATABASE_ERRORS, Pool, StorageError
from crab_api.app.schemas.crab import CrabCreate, CrabRead


logger = logging.getLogger(__name__)


class CrabService:
    """Service class for listing and creating crabs."""

    @classmethod
    async def list_crabs(cls, pool: Pool) -> List[CrabRead]:
        """Return every crab in the order the database yields them."""
        try:
            async with pool.acquire() as conn:
                rows = await conn.fetch("SELECT id, name, age, height FROM crabs")
        except DATABASE_ERRORS as exc:
            logger.error("Failed to list crabs: %s", exc)
            raise StorageError(str(exc)) from exc
        return [cls._row_to_crab_read(row) for row in rows]

    @classmethod
    async def create_crab(cls, pool: Pool, data: CrabCreate) -> None:
        """Insert a new crab; the database assigns its ``id``."""
        try:
            async with pool.acquire() as conn:
                await conn.execute(
                    "INSERT INTO crabs (name, age, height) VALUES ($1, $2, $3)",
                    data.name,
                    data.age,
                    data.height,
                )
        except DATABASE_ERRORS as exc:
            logger.error("Failed to create crab %r: %s", data.name, exc)
            raise StorageError(str(exc)) from exc
        logger.info("Created crab %r", data.name)

    @staticmethod
    def _row_to_crab_read(row: Mapping[str, Any]) -> CrabRead:
        """Convert a database row (asyncpg ``Record`` or ``sqlite3.Row``)."""
        return CrabRead(
            id=row["id"],
            name=row["name"],
            age=row["age"],
            height=row["height"],
        )
