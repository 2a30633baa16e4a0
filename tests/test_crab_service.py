"""Tests for ``CrabService`` with substituted pools."""

import asyncio
import sqlite3
from contextlib import asynccontextmanager

import pytest

from crab_api.app.core.db import StorageError
from crab_api.app.schemas.crab import CrabCreate, CrabRead
from crab_api.app.services.crab_service import CrabService


class BrokenConnection:
    async def fetch(self, query, *args):
        raise sqlite3.OperationalError("database is locked")

    async def execute(self, query, *args):
        raise sqlite3.OperationalError("database is locked")


class BrokenStatementPool:
    """Acquisition works, every statement fails."""

    def __init__(self):
        self.released = 0

    @asynccontextmanager
    async def acquire(self):
        try:
            yield BrokenConnection()
        finally:
            self.released += 1


def test_row_to_crab_read_uses_column_names():
    row = {"height": 0.1, "age": 5, "id": 7, "name": "Ferris"}
    assert CrabService._row_to_crab_read(row) == CrabRead(id=7, name="Ferris", age=5, height=0.1)


def test_statement_failure_raises_storage_error_and_releases():
    pool = BrokenStatementPool()
    crab = CrabCreate(name="Ferris", age=5, height=0.1)

    with pytest.raises(StorageError, match="database is locked"):
        asyncio.run(CrabService.list_crabs(pool))
    with pytest.raises(StorageError, match="database is locked"):
        asyncio.run(CrabService.create_crab(pool, crab))
    assert pool.released == 2


def test_acquire_failure_raises_storage_error(unreachable_pool):
    with pytest.raises(StorageError, match="Connect call failed"):
        asyncio.run(CrabService.list_crabs(unreachable_pool))
