"""
pytest configuration and fixtures.

Every test gets its own SQLite database file under ``tmp_path``; the
application is started through ``TestClient`` so the lifespan handler
creates the pool and the schema exactly as in production.
"""

from contextlib import asynccontextmanager
from typing import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from crab_api.app.core.config import Settings
from crab_api.app.main import create_app


class UnreachablePool:
    """Pool whose every acquisition fails like a refused TCP connection."""

    @asynccontextmanager
    async def acquire(self):
        raise ConnectionRefusedError(111, "Connect call failed ('127.0.0.1', 5432)")
        yield  # pragma: no cover

    async def close(self) -> None:
        pass


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a fresh SQLite database."""
    return Settings(database_url=f"sqlite:///{tmp_path / 'crabs.db'}", pool_max_size=4)


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    return create_app(settings)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def ferris() -> dict:
    """A valid crab payload."""
    return {"name": "Ferris", "age": 5, "height": 0.1}


@pytest.fixture
def unreachable_pool() -> UnreachablePool:
    return UnreachablePool()
