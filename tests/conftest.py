"""Shared fixtures: default exercise/policy and an in-memory SQLite database."""

import os

# Must be set before liftlog.core.config is first imported (settings are cached)
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_LEVEL", "INFO")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from liftlog.db.base import Base
from liftlog.db.session import get_db
from liftlog.main import app
from liftlog.models import *  # noqa: F401, F403 - register all models
from liftlog.services.progression_types import ExerciseConfig, ProgressionPolicy
from tests.factories import EXERCISE_ID


@pytest.fixture
def exercise() -> ExerciseConfig:
    return ExerciseConfig(id=EXERCISE_ID, rep_range_min=8, rep_range_max=12)


@pytest.fixture
def policy() -> ProgressionPolicy:
    return ProgressionPolicy(weight_jump_lb=5.0)


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_maker):
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()
