"""
Unit tests for RecurrencePropagator.
"""

from datetime import date, datetime, timezone
from uuid import uuid4

import pytest

from dayplan.models.enums import HabitCategory, ItemKind
from dayplan.models.goal import LibraryGoal
from dayplan.models.habit import Habit
from dayplan.models.plan import (
    AutomaticGoalSource,
    DailyPlan,
    GoalSource,
    HabitSource,
    PlanItem,
)
from dayplan.services.recurrence_propagator import RecurrencePropagator, instance_id

DAY = date(2026, 3, 2)
NOW = datetime(2026, 3, 2, 7, 0, tzinfo=timezone.utc)


def _goal(title: str, is_automatic: bool = True) -> LibraryGoal:
    return LibraryGoal(
        id=uuid4(),
        title=title,
        is_automatic=is_automatic,
        created_at=NOW,
        updated_at=NOW,
    )


def _habit(title: str, is_active: bool = True) -> Habit:
    return Habit(
        id=uuid4(),
        title=title,
        category=HabitCategory.MINDFULNESS,
        color="#3B82F6",
        is_active=is_active,
        created_at=NOW,
        updated_at=NOW,
    )


@pytest.fixture
def propagator():
    return RecurrencePropagator()


def test_propagate_adds_automatic_goals_and_active_habits(propagator) -> None:
    water = _goal("Drink water")
    meditate = _habit("Meditate")

    plan, added = propagator.propagate(DailyPlan(plan_date=DAY), [water], [meditate], now=NOW)

    assert len(added) == 2
    goal_item, habit_item = plan.goals
    assert goal_item.title == "Drink water"
    assert goal_item.completed is False
    assert goal_item.is_automatic is True
    assert goal_item.source == AutomaticGoalSource(goal_id=water.id)
    assert goal_item.id == instance_id(ItemKind.AUTOMATIC, water.id, DAY)
    assert habit_item.is_habit is True
    assert habit_item.source == HabitSource(habit_id=meditate.id)
    assert habit_item.color == "#3B82F6"
    assert habit_item.category == "mindfulness"


def test_propagate_is_idempotent(propagator) -> None:
    water = _goal("Drink water")
    meditate = _habit("Meditate")
    first, _ = propagator.propagate(DailyPlan(plan_date=DAY), [water], [meditate], now=NOW)

    second, added = propagator.propagate(first, [water], [meditate], now=NOW)

    assert added == []
    assert second == first


def test_non_automatic_goals_and_inactive_habits_are_skipped(propagator) -> None:
    plan, added = propagator.propagate(
        DailyPlan(plan_date=DAY),
        [_goal("Someday", is_automatic=False)],
        [_habit("Paused", is_active=False)],
        now=NOW,
    )

    assert added == []
    assert plan.goals == []


def test_existing_instances_keep_their_state(propagator) -> None:
    water = _goal("Drink water")
    plan, _ = propagator.propagate(DailyPlan(plan_date=DAY), [water], [], now=NOW)
    done = plan.goals[0].model_copy(update={"completed": True})
    plan = plan.replace_item(done)

    result, added = propagator.propagate(plan, [water], [], now=NOW)

    assert added == []
    assert result.goals[0].completed is True


def test_goal_added_by_hand_is_not_duplicated(propagator) -> None:
    water = _goal("Drink water")
    manual = PlanItem(
        id=water.id,
        title=water.title,
        created_at=NOW,
        source=GoalSource(goal_id=water.id),
    )

    plan, added = propagator.propagate(
        DailyPlan(plan_date=DAY, goals=[manual]), [water], [], now=NOW
    )

    assert added == []
    assert len(plan.goals) == 1


def test_new_items_are_appended_after_existing_ones(propagator) -> None:
    manual_id = uuid4()
    manual = PlanItem(
        id=manual_id,
        title="Groceries",
        created_at=NOW,
        source=GoalSource(goal_id=manual_id),
    )

    plan, _ = propagator.propagate(
        DailyPlan(plan_date=DAY, goals=[manual]), [_goal("Drink water")], [], now=NOW
    )

    assert [item.title for item in plan.goals] == ["Groceries", "Drink water"]


def test_instance_ids_are_per_source_and_date() -> None:
    source_id = uuid4()

    assert instance_id(ItemKind.HABIT, source_id, DAY) == instance_id(ItemKind.HABIT, source_id, DAY)
    assert instance_id(ItemKind.HABIT, source_id, DAY) != instance_id(
        ItemKind.HABIT, source_id, date(2026, 3, 3)
    )
    assert instance_id(ItemKind.HABIT, source_id, DAY) != instance_id(
        ItemKind.AUTOMATIC, source_id, DAY
    )
