"""Fixtures for SQLite-backed integration tests."""

from pathlib import Path

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from quill.config import Config, DatabaseConfig
from quill.infrastructure.persistence.database import create_db_engine, create_session_factory
from quill.infrastructure.persistence.seed import ensure_access_control_seed
from quill.infrastructure.persistence.tables import metadata


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path):
    """Per-test engine on a fresh SQLite file with the seeded role graph."""
    config = Config(database=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'quill.db'}"))
    engine = create_db_engine(config)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    await ensure_access_control_seed(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(sqlite_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_session_factory(sqlite_engine)


@pytest_asyncio.fixture
async def session(session_factory: async_sessionmaker[AsyncSession]):
    async with session_factory() as session:
        yield session
        await session.rollback()
