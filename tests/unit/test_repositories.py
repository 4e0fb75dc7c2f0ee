"""
Unit tests for the SQLite repositories.
"""

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from dayplan.core.exceptions import NotFoundError
from dayplan.models.activity import ProductiveActivityCreate, ProductiveActivityUpdate
from dayplan.models.enums import ActivityCategory, HabitCategory
from dayplan.models.goal import LibraryGoalCreate, LibraryGoalUpdate
from dayplan.models.habit import HABIT_CATEGORY_COLORS, HabitCreate, HabitUpdate
from dayplan.models.plan import (
    ActivitySource,
    DailyPlan,
    GoalSource,
    HabitSource,
    PlanItem,
    ScheduledTime,
)


# ===========================================
# Goal library
# ===========================================


@pytest.mark.asyncio
async def test_create_and_get_goal(goal_library):
    created = await goal_library.create(
        LibraryGoalCreate(title="Drink water", is_automatic=True, has_timer=False)
    )

    fetched = await goal_library.get(created.id)

    assert fetched is not None
    assert fetched.title == "Drink water"
    assert fetched.is_automatic is True
    assert fetched.created_at.tzinfo is not None


@pytest.mark.asyncio
async def test_list_automatic_goals(goal_library):
    water = await goal_library.create(LibraryGoalCreate(title="Drink water", is_automatic=True))
    await goal_library.create(LibraryGoalCreate(title="Fix bike"))

    automatic = await goal_library.list_automatic()
    everything = await goal_library.list()

    assert [goal.id for goal in automatic] == [water.id]
    assert len(everything) == 2


@pytest.mark.asyncio
async def test_update_goal(goal_library):
    goal = await goal_library.create(LibraryGoalCreate(title="Stretch"))

    updated = await goal_library.update(goal.id, LibraryGoalUpdate(is_automatic=True))

    assert updated.is_automatic is True
    assert updated.title == "Stretch"


@pytest.mark.asyncio
async def test_update_missing_goal_raises(goal_library):
    with pytest.raises(NotFoundError):
        await goal_library.update(uuid4(), LibraryGoalUpdate(title="Nope"))


@pytest.mark.asyncio
async def test_delete_goal(goal_library):
    goal = await goal_library.create(LibraryGoalCreate(title="Stretch"))

    assert await goal_library.delete(goal.id) is True
    assert await goal_library.get(goal.id) is None
    assert await goal_library.delete(goal.id) is False


# ===========================================
# Habit registry
# ===========================================


@pytest.mark.asyncio
async def test_habit_gets_category_color(habit_registry):
    habit = await habit_registry.create(
        HabitCreate(title="Meditate", category=HabitCategory.MINDFULNESS)
    )

    assert habit.color == HABIT_CATEGORY_COLORS[HabitCategory.MINDFULNESS]
    assert habit.is_active is True


@pytest.mark.asyncio
async def test_list_active_habits(habit_registry):
    active = await habit_registry.create(HabitCreate(title="Meditate"))
    paused = await habit_registry.create(HabitCreate(title="Journal"))
    await habit_registry.update(paused.id, HabitUpdate(is_active=False))

    result = await habit_registry.list_active()

    assert [habit.id for habit in result] == [active.id]
    assert len(await habit_registry.list()) == 2


@pytest.mark.asyncio
async def test_record_habit_entry_twice_updates(habit_registry):
    habit = await habit_registry.create(HabitCreate(title="Push-ups", target_count=20, unit="reps"))
    day = date(2026, 3, 2)

    await habit_registry.record_habit_entry(habit.id, day, True, count=10)
    second = await habit_registry.record_habit_entry(habit.id, day, False)

    entries = await habit_registry.list_entries(habit_id=habit.id)
    assert len(entries) == 1
    assert second.completed is False
    assert second.count == 10


@pytest.mark.asyncio
async def test_list_entries_by_range(habit_registry):
    habit = await habit_registry.create(HabitCreate(title="Meditate"))
    for day in (1, 2, 3, 4):
        await habit_registry.record_habit_entry(habit.id, date(2026, 3, day), True)

    entries = await habit_registry.list_entries(
        habit_id=habit.id, start_date=date(2026, 3, 2), end_date=date(2026, 3, 3)
    )

    assert [entry.entry_date for entry in entries] == [date(2026, 3, 2), date(2026, 3, 3)]


@pytest.mark.asyncio
async def test_record_entry_for_missing_habit_raises(habit_registry):
    with pytest.raises(NotFoundError):
        await habit_registry.record_habit_entry(uuid4(), date(2026, 3, 2), True)


@pytest.mark.asyncio
async def test_delete_habit_removes_entries(habit_registry):
    habit = await habit_registry.create(HabitCreate(title="Meditate"))
    await habit_registry.record_habit_entry(habit.id, date(2026, 3, 2), True)

    assert await habit_registry.delete(habit.id) is True

    assert await habit_registry.get(habit.id) is None
    assert await habit_registry.list_entries(habit_id=habit.id) == []


# ===========================================
# Activities
# ===========================================


@pytest.mark.asyncio
async def test_activity_crud(activity_repo):
    activity = await activity_repo.create(
        ProductiveActivityCreate(
            name="Sketching",
            category=ActivityCategory.CREATIVE,
            estimated_duration=45,
        )
    )
    assert activity.estimated_duration == 45

    await activity_repo.update(activity.id, ProductiveActivityUpdate(is_active=False))

    assert await activity_repo.list_active() == []
    assert len(await activity_repo.list()) == 1


@pytest.mark.asyncio
async def test_update_missing_activity_raises(activity_repo):
    with pytest.raises(NotFoundError):
        await activity_repo.update(uuid4(), ProductiveActivityUpdate(name="Nope"))


# ===========================================
# Daily plans
# ===========================================


def _items() -> list[PlanItem]:
    created = datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc)
    goal_id = uuid4()
    return [
        PlanItem(
            id=goal_id,
            title="Write report",
            scheduled_time=ScheduledTime(
                start=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc),
                end=datetime(2026, 3, 2, 10, 0, tzinfo=timezone.utc),
            ),
            created_at=created,
            source=GoalSource(goal_id=goal_id),
        ),
        PlanItem(
            id=uuid4(),
            title="Meditate",
            completed=True,
            color="#3B82F6",
            created_at=created,
            source=HabitSource(habit_id=uuid4()),
        ),
        PlanItem(
            id=uuid4(),
            title="Sketching",
            category="creative",
            created_at=created,
            source=ActivitySource(activity_id=uuid4()),
        ),
    ]


@pytest.mark.asyncio
async def test_plan_round_trip(plan_repo):
    items = _items()
    plan = DailyPlan(plan_date=date(2026, 3, 2), goals=items, habits_completed=1, total_habits=1)

    await plan_repo.save(plan)
    loaded = await plan_repo.load(date(2026, 3, 2))

    assert loaded is not None
    assert loaded.goals == items
    assert isinstance(loaded.goals[1].source, HabitSource)
    assert loaded.goals[0].scheduled_time.start.tzinfo is not None
    assert loaded.total_habits == 1
    assert loaded.updated_at is not None


@pytest.mark.asyncio
async def test_load_missing_plan_is_none(plan_repo):
    assert await plan_repo.load(date(2026, 3, 2)) is None


@pytest.mark.asyncio
async def test_save_upserts_by_date(plan_repo):
    day = date(2026, 3, 2)
    items = _items()
    await plan_repo.save(DailyPlan(plan_date=day, goals=items))

    await plan_repo.save(DailyPlan(plan_date=day, goals=items[:1]))

    plans = await plan_repo.list_by_range(day, day)
    assert len(plans) == 1
    assert len(plans[0].goals) == 1


@pytest.mark.asyncio
async def test_list_plans_by_range(plan_repo):
    for day in (1, 3, 5, 8):
        await plan_repo.save(DailyPlan(plan_date=date(2026, 3, day)))

    plans = await plan_repo.list_by_range(date(2026, 3, 2), date(2026, 3, 7))

    assert [plan.plan_date for plan in plans] == [date(2026, 3, 3), date(2026, 3, 5)]


@pytest.mark.asyncio
async def test_delete_plan(plan_repo):
    await plan_repo.save(DailyPlan(plan_date=date(2026, 3, 2)))

    assert await plan_repo.delete(date(2026, 3, 2)) is True
    assert await plan_repo.load(date(2026, 3, 2)) is None
    assert await plan_repo.delete(date(2026, 3, 2)) is False
