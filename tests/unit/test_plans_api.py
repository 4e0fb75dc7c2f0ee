"""
Unit tests for the plan endpoints.

Handlers are called directly with real services where persistence matters,
and through TestClient with a mocked composer for the HTTP mapping.
"""

from datetime import date, datetime, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from dayplan.api import plans as plans_api
from dayplan.api.deps import get_composer
from dayplan.core.exceptions import InvalidIntervalError
from dayplan.models.enums import ScheduleStatus
from dayplan.models.goal import LibraryGoalCreate
from dayplan.models.habit import HabitCreate
from dayplan.models.plan import (
    DailyPlan,
    GoalSource,
    PlanItem,
    ScheduledTime,
    ScheduleOutcome,
    ScheduleRequest,
    TimeSlot,
)
from dayplan.services.time_grid import TimeGrid

TODAY = date(2026, 3, 2)


@pytest.fixture
def client():
    from main import app

    yield TestClient(app)
    app.dependency_overrides.clear()


def _report() -> PlanItem:
    goal_id = uuid4()
    return PlanItem(
        id=goal_id,
        title="Write report",
        scheduled_time=ScheduledTime(
            start=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
            end=datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc),
        ),
        created_at=datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc),
        source=GoalSource(goal_id=goal_id),
    )


@pytest.mark.asyncio
async def test_toggle_habit_records_entry(composer, habit_registry):
    habit = await habit_registry.create(HabitCreate(title="Meditate"))
    plan = await plans_api.get_plan(TODAY, composer)
    item_id = plan.goals[0].id

    toggled = await plans_api.toggle_item(TODAY, item_id, composer, habit_registry)

    entry = await habit_registry.get_entry(habit.id, TODAY)
    assert toggled.goals[0].completed is True
    assert entry is not None
    assert entry.completed is True

    await plans_api.toggle_item(TODAY, item_id, composer, habit_registry)
    assert (await habit_registry.get_entry(habit.id, TODAY)).completed is False


@pytest.mark.asyncio
async def test_toggle_goal_does_not_record_entries(composer, goal_library, habit_registry):
    goal = await goal_library.create(LibraryGoalCreate(title="Write report"))
    await composer.add_library_goal_to_date(goal.id, TODAY)

    await plans_api.toggle_item(TODAY, goal.id, composer, habit_registry)

    assert await habit_registry.list_entries() == []


@pytest.mark.asyncio
async def test_toggle_unknown_item_is_404(composer, habit_registry):
    with pytest.raises(HTTPException) as exc_info:
        await plans_api.toggle_item(TODAY, uuid4(), composer, habit_registry)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_schedule_conflict_is_409(composer, goal_library):
    report = await goal_library.create(LibraryGoalCreate(title="Write report"))
    call = await goal_library.create(LibraryGoalCreate(title="Call client"))
    await composer.add_library_goal_to_date(
        report.id,
        TODAY,
        schedule=ScheduleRequest(slot=TimeSlot(hour=9, minute=0), duration_minutes=60),
    )
    await composer.add_library_goal_to_date(call.id, TODAY)

    with pytest.raises(HTTPException) as exc_info:
        await plans_api.schedule_item(
            TODAY,
            call.id,
            ScheduleRequest(slot=TimeSlot(hour=9, minute=30), duration_minutes=30),
            composer,
        )

    assert exc_info.value.status_code == 409
    conflicts = exc_info.value.detail["conflicts"]
    assert [item["title"] for item in conflicts] == ["Write report"]


@pytest.mark.asyncio
async def test_add_unknown_goal_is_404(composer):
    with pytest.raises(HTTPException) as exc_info:
        await plans_api.add_goal(TODAY, plans_api.AddGoalRequest(goal_id=uuid4()), composer)

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_list_plans_rejects_reversed_range(composer):
    with pytest.raises(HTTPException) as exc_info:
        await plans_api.list_plans(composer, start_date=TODAY, end_date=date(2026, 3, 1))

    assert exc_info.value.status_code == 422


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_conflict_response_body(client):
    report = _report()
    plan = DailyPlan(plan_date=TODAY, goals=[report])
    composer = AsyncMock()
    composer.schedule_item.return_value = ScheduleOutcome(
        status=ScheduleStatus.CONFLICT,
        item_id=uuid4(),
        conflicts=[report],
        message="Time overlaps with other scheduled items",
        plan=plan,
    )
    client.app.dependency_overrides[get_composer] = lambda: composer

    response = client.put(
        f"/api/plans/{TODAY.isoformat()}/items/{uuid4()}/schedule",
        json={"slot": {"hour": 9, "minute": 30}, "duration_minutes": 30},
    )

    assert response.status_code == 409
    body = response.json()["detail"]
    assert body["conflicts"][0]["id"] == str(report.id)
    assert body["message"] == "Time overlaps with other scheduled items"


def test_invalid_interval_is_422(client):
    composer = AsyncMock()
    composer.schedule_item.side_effect = InvalidIntervalError("duration must be positive, got 0")
    client.app.dependency_overrides[get_composer] = lambda: composer

    response = client.put(
        f"/api/plans/{TODAY.isoformat()}/items/{uuid4()}/schedule",
        json={"slot": {"hour": 9, "minute": 0}, "duration_minutes": 0},
    )

    assert response.status_code == 422
    assert "duration must be positive" in response.json()["detail"]


def test_committed_outcome_is_returned(client):
    plan = DailyPlan(plan_date=TODAY)
    composer = AsyncMock()
    composer.clear_item_schedule.return_value = ScheduleOutcome(
        status=ScheduleStatus.COMMITTED, item_id=uuid4(), plan=plan
    )
    client.app.dependency_overrides[get_composer] = lambda: composer

    response = client.delete(f"/api/plans/{TODAY.isoformat()}/items/{uuid4()}/schedule")

    assert response.status_code == 200
    assert response.json()["status"] == "committed"


@pytest.mark.asyncio
async def test_timeline_rows_list_overlapping_items(composer, goal_library):
    report = await goal_library.create(LibraryGoalCreate(title="Write report"))
    await composer.add_library_goal_to_date(
        report.id,
        TODAY,
        schedule=ScheduleRequest(slot=TimeSlot(hour=9, minute=15), duration_minutes=60),
    )
    grid = TimeGrid(start_hour=6, end_hour=22, slot_minutes=30)

    rows = await plans_api.get_timeline(TODAY, composer, grid)

    assert len(rows) == 32
    busy = [row.slot.label for row in rows if row.item_ids]
    assert busy == ["09:00", "09:30", "10:00"]
    assert rows[6].item_ids == [report.id]


@pytest.mark.asyncio
async def test_duration_suggestions_carry_default(composer, goal_library):
    report = await goal_library.create(LibraryGoalCreate(title="Write report"))
    await composer.add_library_goal_to_date(report.id, TODAY)

    suggestions = await plans_api.get_duration_suggestions(TODAY, report.id, composer)

    assert suggestions.durations == [30, 60, 90, 120]
    assert suggestions.default == 60


@pytest.mark.asyncio
async def test_add_automatic_goal_with_schedule_is_201_scheduled(composer, goal_library):
    water = await goal_library.create(LibraryGoalCreate(title="Drink water", is_automatic=True))

    outcome = await plans_api.add_goal(
        TODAY,
        plans_api.AddGoalRequest(
            goal_id=water.id,
            schedule=ScheduleRequest(slot=TimeSlot(hour=9, minute=0), duration_minutes=30),
        ),
        composer,
    )

    assert outcome.committed
    assert outcome.plan.find_item(outcome.item_id).scheduled_time is not None
