"""API test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session
    - db_manager patched for code that bypasses get_db (readiness probe)
    - In-process logs and the user store are reset around every test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
    - httpx AsyncClient + ASGITransport: lifespan does not run, fixtures own setup
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

import quickref.infrastructure.database as db_module
from quickref.config import get_settings
from quickref.core.event_log import lifecycle_log, notification_log, resource_log
from quickref.core.security import seed_users, user_store
from quickref.db.base import Base
from quickref.infrastructure.database import DatabaseSessionManager, get_db
from quickref.main import app


@pytest.fixture(autouse=True)
def reset_in_process_state():
    for log in (lifecycle_log, notification_log, resource_log):
        log.clear()
    user_store.clear()
    yield
    user_store.clear()


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
def seeded_users():
    """alice (active) and bob (disabled), passwords from default settings."""
    settings = get_settings()
    seed_users(user_store, settings.demo_users, settings.disabled_users)
    return settings.demo_users
