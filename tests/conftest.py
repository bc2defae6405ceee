"""Shared pytest fixtures for all test suites."""

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from legalmind.config import Settings
from legalmind.db.cases import create_case
from legalmind.db.models import Base
from legalmind.memory.collections import InMemoryCollectionStore


@pytest_asyncio.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create in-memory async engine shared by every session in a test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session(test_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create async session bound to the in-memory engine."""
    async with AsyncSession(test_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def case_id(session: AsyncSession) -> str:
    """Create a case and return its ID."""
    case = await create_case(session, title="Smith v. Jones", case_id="case-1")
    return case.id


@pytest.fixture
def store() -> InMemoryCollectionStore:
    """Empty in-memory collection store."""
    return InMemoryCollectionStore()


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings pointing all local storage at a temp directory."""
    return Settings(
        database_url="sqlite+aiosqlite:///:memory:",
        data_dir=str(tmp_path),
        collections_dir=str(tmp_path / "vectors"),
        evidence_dir=str(tmp_path / "evidence"),
        generation_timeout_seconds=1.0,
    )
