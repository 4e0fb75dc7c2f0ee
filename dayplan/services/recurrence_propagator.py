"""
Recurrence propagation.

Makes sure a day's plan holds one instance of every automatic library goal
and one instance per active habit. Propagation only ever adds items.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable
from uuid import NAMESPACE_URL, UUID, uuid5

from dayplan.core.logger import setup_logger
from dayplan.models.enums import ItemKind
from dayplan.models.goal import LibraryGoal
from dayplan.models.habit import Habit
from dayplan.models.plan import AutomaticGoalSource, DailyPlan, HabitSource, PlanItem

logger = setup_logger(__name__)

# Namespace for per-day instance ids
INSTANCE_NAMESPACE = uuid5(NAMESPACE_URL, "dayplan/instances")


def instance_id(kind: ItemKind, source_id: UUID, plan_date: date) -> UUID:
    """Deterministic id of a propagated instance for a date."""
    return uuid5(INSTANCE_NAMESPACE, f"{kind.value}:{source_id}:{plan_date.isoformat()}")


class RecurrencePropagator:
    """Instantiates automatic goals and active habits onto day plans."""

    def instantiate_automatic_goal(
        self, goal: LibraryGoal, plan_date: date, now: datetime
    ) -> PlanItem:
        return PlanItem(
            id=instance_id(ItemKind.AUTOMATIC, goal.id, plan_date),
            title=goal.title,
            description=goal.description,
            completed=False,
            is_automatic=True,
            has_timer=goal.has_timer,
            created_at=now,
            source=AutomaticGoalSource(goal_id=goal.id),
        )

    def instantiate_habit(self, habit: Habit, plan_date: date, now: datetime) -> PlanItem:
        return PlanItem(
            id=instance_id(ItemKind.HABIT, habit.id, plan_date),
            title=habit.title,
            description=habit.description,
            completed=False,
            category=habit.category.value,
            color=habit.color,
            created_at=now,
            source=HabitSource(habit_id=habit.id),
        )

    def propagate(
        self,
        plan: DailyPlan,
        automatic_goals: Iterable[LibraryGoal],
        active_habits: Iterable[Habit],
        now: datetime,
    ) -> tuple[DailyPlan, list[PlanItem]]:
        """
        Add missing automatic-goal and habit instances to a plan.

        Existing items are kept as they are, including their schedule and
        completion state. Calling this again with the same inputs adds nothing.

        Args:
            plan: Plan to complete
            automatic_goals: Library goals flagged automatic, read at call time
            active_habits: Active habits, read at call time; inactive ones are skipped
            now: Creation timestamp for new instances

        Returns:
            The (possibly new) plan and the items that were added
        """
        present = {item.source_key() for item in plan.goals}
        added: list[PlanItem] = []

        for goal in automatic_goals:
            if not goal.is_automatic:
                continue
            key = ("goal", goal.id)
            if key in present:
                continue
            added.append(self.instantiate_automatic_goal(goal, plan.plan_date, now))
            present.add(key)

        for habit in active_habits:
            if not habit.is_active:
                continue
            key = ("habit", habit.id)
            if key in present:
                continue
            added.append(self.instantiate_habit(habit, plan.plan_date, now))
            present.add(key)

        if not added:
            return plan, []

        logger.info(f"Propagated {len(added)} recurring item(s) onto plan {plan.plan_date}")
        return plan.model_copy(update={"goals": [*plan.goals, *added]}), added
