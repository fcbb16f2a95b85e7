"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file (separate connections per
      session, so revision conflicts behave as they do against a real server)
    - get_db dependency overridden to use the test engine
    - db_manager patched: background activity writes bypass get_db
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from taskboard.db.base import Base
from taskboard.infrastructure.database import get_db, DatabaseSessionManager
from taskboard.models.project import Project
from taskboard.services.project_store import ProjectStore
import taskboard.infrastructure.database as db_module
from taskboard.main import app


@pytest.fixture
async def test_engine(tmp_path):
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'taskboard.db'}", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
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
def session_manager(test_engine, test_session_factory):
    """DatabaseSessionManager bound to the test engine."""
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
def store(test_db):
    return ProjectStore(test_db, max_attempts=3, timeout_seconds=5.0)


@pytest.fixture
def read_project(test_session_factory):
    """Read a project through a brand-new session (what another client would see)."""
    async def _read(project_id):
        async with test_session_factory() as session:
            return await session.get(Project, project_id)
    return _read


@pytest.fixture
async def client(test_session_factory, session_manager):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with session_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    db_module.db_manager = session_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
