"""
Dependency injection for API endpoints.

This module provides FastAPI dependencies that wire the SQLite repositories
and the planning services together.
"""

import asyncio
from datetime import date
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from dayplan.core.config import Settings, get_settings
from dayplan.interfaces.activity_repository import IActivityRepository
from dayplan.interfaces.goal_library import IGoalLibrary
from dayplan.interfaces.habit_registry import IHabitRegistry
from dayplan.interfaces.plan_repository import IDailyPlanRepository
from dayplan.services.daily_plan_composer import DailyPlanComposer
from dayplan.services.progress_aggregator import ProgressAggregator
from dayplan.services.schedule_allocator import ScheduleAllocator
from dayplan.services.time_grid import TimeGrid


# ===========================================
# Repository Dependencies
# ===========================================


@lru_cache()
def get_goal_library() -> IGoalLibrary:
    """Get goal library instance."""
    from dayplan.infrastructure.local.goal_library import SqliteGoalLibrary
    return SqliteGoalLibrary()


@lru_cache()
def get_habit_registry() -> IHabitRegistry:
    """Get habit registry instance."""
    from dayplan.infrastructure.local.habit_registry import SqliteHabitRegistry
    return SqliteHabitRegistry()


@lru_cache()
def get_activity_repository() -> IActivityRepository:
    """Get productive activity repository instance."""
    from dayplan.infrastructure.local.activity_repository import SqliteActivityRepository
    return SqliteActivityRepository()


@lru_cache()
def get_plan_repository() -> IDailyPlanRepository:
    """Get daily plan repository instance."""
    from dayplan.infrastructure.local.plan_repository import SqliteDailyPlanRepository
    return SqliteDailyPlanRepository()


# ===========================================
# Service Dependencies
# ===========================================


@lru_cache()
def get_plan_locks() -> dict[date, asyncio.Lock]:
    """Per-date locks shared by every composer of the process."""
    return {}


@lru_cache()
def get_time_grid() -> TimeGrid:
    """Schedule-builder grid (fine granularity)."""
    return TimeGrid.from_settings(get_settings())


@lru_cache()
def get_timeline_grid() -> TimeGrid:
    """Day timeline grid (coarse granularity)."""
    settings = get_settings()
    return TimeGrid.from_settings(settings, settings.TIMELINE_SLOT_MINUTES)


@lru_cache()
def get_allocator() -> ScheduleAllocator:
    settings = get_settings()
    return ScheduleAllocator(
        get_time_grid(),
        default_duration_minutes=settings.DEFAULT_DURATION_MINUTES,
    )


def get_aggregator() -> ProgressAggregator:
    return ProgressAggregator()


def get_composer(
    plan_repo: IDailyPlanRepository = Depends(get_plan_repository),
    goal_library: IGoalLibrary = Depends(get_goal_library),
    habit_registry: IHabitRegistry = Depends(get_habit_registry),
    activity_repo: IActivityRepository = Depends(get_activity_repository),
    allocator: ScheduleAllocator = Depends(get_allocator),
    locks: dict[date, asyncio.Lock] = Depends(get_plan_locks),
) -> DailyPlanComposer:
    """Get a DailyPlanComposer bound to the injected repositories."""
    return DailyPlanComposer(
        plan_repo=plan_repo,
        goal_library=goal_library,
        habit_registry=habit_registry,
        activity_repo=activity_repo,
        allocator=allocator,
        locks=locks,
    )


# ===========================================
# Type Aliases for Dependency Injection
# ===========================================

AppSettings = Annotated[Settings, Depends(get_settings)]
GoalLibrary = Annotated[IGoalLibrary, Depends(get_goal_library)]
HabitRegistry = Annotated[IHabitRegistry, Depends(get_habit_registry)]
ActivityRepo = Annotated[IActivityRepository, Depends(get_activity_repository)]
PlanRepo = Annotated[IDailyPlanRepository, Depends(get_plan_repository)]
TimelineGrid = Annotated[TimeGrid, Depends(get_timeline_grid)]
Aggregator = Annotated[ProgressAggregator, Depends(get_aggregator)]
Composer = Annotated[DailyPlanComposer, Depends(get_composer)]
