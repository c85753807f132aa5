"""Pytest fixtures for the identity backend."""

from collections.abc import AsyncIterator, Iterator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from api.deps import get_db
from app import create_app
from db import build_engine, create_tables
from services.events import EventBroadcaster

TEST_CHANNEL_CAPACITY = 16


@pytest_asyncio.fixture()
async def test_engine(tmp_path: Path) -> AsyncIterator[AsyncEngine]:
    """Create a fresh file-backed SQLite database with all tables."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'identity-test.db'}")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_maker(test_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Return a session factory bound to the test engine."""
    return async_sessionmaker(test_engine, expire_on_commit=False)


@pytest.fixture()
def broadcaster() -> Iterator[EventBroadcaster]:
    hub = EventBroadcaster(channel_capacity=TEST_CHANNEL_CAPACITY)
    yield hub
    hub.close()


@pytest.fixture()
def app(session_maker, broadcaster: EventBroadcaster) -> Iterator[FastAPI]:
    """Create the FastAPI app with a test database dependency override."""
    application = create_app(broadcaster=broadcaster)

    async def override_get_db() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_db] = override_get_db
    yield application


@pytest_asyncio.fixture()
async def async_client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    """Return an HTTPX async client bound to the FastAPI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture()
async def db_session(session_maker) -> AsyncIterator[AsyncSession]:
    """Provide a raw database session to tests."""
    async with session_maker() as session:
        yield session
