"""
Unit tests for the statistics endpoints.
"""

from datetime import date, timedelta
from uuid import uuid4

import pytest
from fastapi import HTTPException

from dayplan.api import stats as stats_api
from dayplan.core.config import get_settings
from dayplan.models.goal import LibraryGoalCreate
from dayplan.models.habit import HabitCreate
from dayplan.services.progress_aggregator import ProgressAggregator

MONDAY = date(2026, 3, 2)


@pytest.fixture
def aggregator():
    return ProgressAggregator()


async def _plan_with_progress(composer, goal_library, day: date, done: int, total: int) -> None:
    goals = [
        await goal_library.create(LibraryGoalCreate(title=f"Goal {day} {i}"))
        for i in range(total)
    ]
    for goal in goals:
        await composer.add_library_goal_to_date(goal.id, day)
    for goal in goals[:done]:
        await composer.toggle_item(day, goal.id)


@pytest.mark.asyncio
async def test_day_progress_does_not_create_plan(plan_repo, aggregator):
    result = await stats_api.get_day_progress(MONDAY, plan_repo, aggregator)

    assert result.has_plan is False
    assert await plan_repo.load(MONDAY) is None


@pytest.mark.asyncio
async def test_week_progress(composer, goal_library, plan_repo, aggregator):
    await _plan_with_progress(composer, goal_library, MONDAY, done=1, total=2)
    await _plan_with_progress(composer, goal_library, MONDAY + timedelta(days=2), done=1, total=1)

    week = await stats_api.get_week_progress(
        plan_repo,
        aggregator,
        get_settings(),
        reference_date=MONDAY + timedelta(days=4),
        week_start=0,
    )

    assert week.start_date == MONDAY
    assert week.planned_days == 2
    assert week.average == 0.75


@pytest.mark.asyncio
async def test_rolling_weeks(composer, goal_library, plan_repo, aggregator):
    today = MONDAY + timedelta(days=20)
    await _plan_with_progress(composer, goal_library, today, done=1, total=1)

    weeks = await stats_api.get_rolling_weeks(
        plan_repo, aggregator, get_settings(), weeks=3, today=today
    )

    assert len(weeks) == 3
    assert weeks[-1].average == 1.0
    assert weeks[0].planned_days == 0


@pytest.mark.asyncio
async def test_overall_progress(composer, goal_library, plan_repo, aggregator):
    await _plan_with_progress(composer, goal_library, MONDAY, done=0, total=1)
    await _plan_with_progress(composer, goal_library, MONDAY + timedelta(days=1), done=1, total=1)

    result = await stats_api.get_overall_progress(
        plan_repo,
        aggregator,
        get_settings(),
        start_date=MONDAY,
        end_date=MONDAY + timedelta(days=6),
    )

    assert result.planned_days == 2
    assert result.average == 0.5


@pytest.mark.asyncio
async def test_habit_streak(habit_registry, aggregator):
    habit = await habit_registry.create(HabitCreate(title="Meditate"))
    for offset in (0, 1, 2):
        await habit_registry.record_habit_entry(habit.id, MONDAY - timedelta(days=offset), True)

    result = await stats_api.get_habit_streak(
        habit.id, habit_registry, aggregator, get_settings(), reference_date=MONDAY
    )

    assert result.streak == 3


@pytest.mark.asyncio
async def test_habit_streak_unknown_habit(habit_registry, aggregator):
    with pytest.raises(HTTPException) as exc_info:
        await stats_api.get_habit_streak(
            uuid4(), habit_registry, aggregator, get_settings(), reference_date=MONDAY
        )

    assert exc_info.value.status_code == 404
