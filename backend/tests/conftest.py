"""Shared fixtures.

Point settings at an in-memory SQLite database before anything imports the
package, so the module-level engine never needs a Postgres server.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "console")

from datetime import datetime
from typing import Any, AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from fitness_tracking.core.database import Base, get_db
from fitness_tracking.core.errors import NotFound
from fitness_tracking.main import app
from fitness_tracking.services.analytics import WorkoutSnapshot


class FakeWorkoutStore:
    """In-memory stand-in for WorkoutStore."""

    def __init__(self, workouts_by_user: dict[int, list[WorkoutSnapshot]] | None = None):
        self.workouts_by_user = workouts_by_user or {}
        self.calls = 0

    async def user_exists(self, user_id: int) -> bool:
        return user_id in self.workouts_by_user

    async def list_workouts_for_user(self, user_id: int) -> list[WorkoutSnapshot]:
        self.calls += 1
        if user_id not in self.workouts_by_user:
            raise NotFound("User", user_id)
        return list(self.workouts_by_user[user_id])


@pytest.fixture
def make_workout() -> Callable[..., WorkoutSnapshot]:
    """Factory for fully populated snapshots; override any field by keyword."""
    counter = {"next_id": 1}

    def _make(**overrides: Any) -> WorkoutSnapshot:
        fields: dict[str, Any] = {
            "workout_id": counter["next_id"],
            "workout_type": "run",
            "timestamp": datetime(2024, 1, 2, 7, 0),
            "duration_minutes": 30.0,
            "calories_burned": 300.0,
            "average_heart_rate": 140.0,
            "max_heart_rate": 180.0,
            "resting_heart_rate": 60.0,
            "temperature": 18.0,
            "hours_slept": 7.0,
            "stress_level": 3.0,
        }
        fields.update(overrides)
        counter["next_id"] += 1
        return WorkoutSnapshot(**fields)

    return _make


@pytest.fixture
def fake_store() -> FakeWorkoutStore:
    return FakeWorkoutStore()


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Fresh in-memory database per test."""
    import fitness_tracking.models  # noqa: F401

    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client bound to the app, with get_db using the test database."""

    async def _get_test_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client
    app.dependency_overrides.clear()
