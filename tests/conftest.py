"""
Anekazoo Animals API - Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── mock_db_session:      Mock async session (no real DB needed)
    ├── mock_session_factory: Callable returning mock_db_session as a context manager
    ├── sqlite_engine:        In-memory SQLite engine with the animals table created
    ├── sql_store:            SQLAnimalStore on sqlite_engine
    ├── memory_store:         InMemoryAnimalStore (dict-backed AnimalStore)
    ├── test_client:          HTTPX AsyncClient against an app using memory_store
    └── sql_client:           HTTPX AsyncClient against an app using sql_store
"""

import itertools
import os
from typing import Dict, List
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time, so the environment is prepared first
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from anekazoo.database import bootstrap_schema, build_session_factory
from anekazoo.exceptions import ConflictError, NotFoundError
from anekazoo.main import create_app
from anekazoo.schemas.animal import AnimalResponse
from anekazoo.services.animal_store import SQLAnimalStore
from anekazoo.services.store_base import AnimalStore


class InMemoryAnimalStore(AnimalStore):
    """Dict-backed AnimalStore with the same outcome contract as SQLAnimalStore."""

    def __init__(self):
        self.rows: Dict[int, AnimalResponse] = {}
        self._ids = itertools.count(1)
        self.healthy = True

    async def insert(self, name: str, class_: str, legs: int) -> AnimalResponse:
        if any(row.name == name for row in self.rows.values()):
            raise ConflictError(context={"name": name})
        animal = AnimalResponse(id=next(self._ids), name=name, class_=class_, legs=legs)
        self.rows[animal.id] = animal
        return animal

    async def fetch_all(self) -> List[AnimalResponse]:
        return list(self.rows.values())

    async def fetch_by_id(self, animal_id: int) -> AnimalResponse:
        if animal_id not in self.rows:
            raise NotFoundError(resource_id=animal_id)
        return self.rows[animal_id]

    async def update(self, animal_id: int, name: str, class_: str, legs: int) -> None:
        if animal_id not in self.rows:
            raise NotFoundError(resource_id=animal_id)
        self.rows[animal_id] = AnimalResponse(id=animal_id, name=name, class_=class_, legs=legs)

    async def delete(self, animal_id: int) -> None:
        if self.rows.pop(animal_id, None) is None:
            raise NotFoundError(resource_id=animal_id)

    async def ping(self) -> bool:
        return self.healthy


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def mock_session_factory(mock_db_session):
    """Stands in for async_sessionmaker: `async with factory() as session`."""
    mock_db_session.__aenter__.return_value = mock_db_session
    mock_db_session.__aexit__.return_value = False
    return MagicMock(return_value=mock_db_session)


@pytest_asyncio.fixture
async def sqlite_engine():
    """
    In-memory SQLite engine with the animals table bootstrapped.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    await bootstrap_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_store(sqlite_engine):
    return SQLAnimalStore(build_session_factory(sqlite_engine))


@pytest.fixture
def memory_store():
    return InMemoryAnimalStore()


@pytest.fixture
def lion():
    """Request body used across API tests."""
    return {"name": "Lion", "class": "Mammal", "legs": 4}


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def test_client(memory_store):
    """
    Async HTTP client for an app serving memory_store.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/animals")
    """
    app = create_app(store=memory_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def sql_client(sql_store):
    """Async HTTP client for an app serving the SQLite-backed SQLAnimalStore."""
    app = create_app(store=sql_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
