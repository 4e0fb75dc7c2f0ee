"""
Shared fixtures: in-memory SQLite repositories and a composer wired to them.
"""

from datetime import datetime, timezone

import pytest
import pytest_asyncio

from dayplan.infrastructure.local.activity_repository import SqliteActivityRepository
from dayplan.infrastructure.local.goal_library import SqliteGoalLibrary
from dayplan.infrastructure.local.habit_registry import SqliteHabitRegistry
from dayplan.infrastructure.local.plan_repository import SqliteDailyPlanRepository
from dayplan.services.daily_plan_composer import DailyPlanComposer
from dayplan.services.schedule_allocator import ScheduleAllocator
from dayplan.services.time_grid import TimeGrid

FIXED_NOW = datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc)


@pytest_asyncio.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory database."""
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
    from sqlalchemy.orm import sessionmaker

    from dayplan.infrastructure.local.database import Base

    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def goal_library(session_factory):
    return SqliteGoalLibrary(session_factory)


@pytest.fixture
def habit_registry(session_factory):
    return SqliteHabitRegistry(session_factory)


@pytest.fixture
def activity_repo(session_factory):
    return SqliteActivityRepository(session_factory)


@pytest.fixture
def plan_repo(session_factory):
    return SqliteDailyPlanRepository(session_factory)


@pytest.fixture
def grid():
    """06:00-22:00 in UTC on a 15-minute grid."""
    return TimeGrid(start_hour=6, end_hour=22, slot_minutes=15, timezone="UTC")


@pytest.fixture
def allocator(grid):
    return ScheduleAllocator(grid, default_duration_minutes=60)


@pytest.fixture
def composer(plan_repo, goal_library, habit_registry, activity_repo, allocator):
    return DailyPlanComposer(
        plan_repo=plan_repo,
        goal_library=goal_library,
        habit_registry=habit_registry,
        activity_repo=activity_repo,
        allocator=allocator,
        clock=lambda: FIXED_NOW,
    )
