"""
Daily plan composition service.

Read path and mutation surface for day plans. Plans are created lazily,
completed with recurring items on every access, and saved after each change.
"""

from __future__ import annotations

import asyncio
from datetime import date, datetime
from typing import Callable, Optional
from uuid import UUID, uuid4

from dayplan.core.exceptions import NotFoundError
from dayplan.core.logger import setup_logger
from dayplan.interfaces.activity_repository import IActivityRepository
from dayplan.interfaces.goal_library import IGoalLibrary
from dayplan.interfaces.habit_registry import IHabitRegistry
from dayplan.interfaces.plan_repository import IDailyPlanRepository
from dayplan.models.enums import ScheduleStatus
from dayplan.models.plan import (
    ActivitySource,
    DailyPlan,
    FreeSlot,
    GoalSource,
    PlanItem,
    ScheduleOutcome,
    ScheduleRequest,
    TimeSlot,
)
from dayplan.services.duration_advisor import DurationAdvisor
from dayplan.services.progress_aggregator import ProgressAggregator
from dayplan.services.recurrence_propagator import RecurrencePropagator
from dayplan.services.schedule_allocator import ScheduleAllocator
from dayplan.utils.datetime_utils import now_utc

logger = setup_logger(__name__)


class DailyPlanComposer:
    """
    Aggregate root for day plans.

    Every mutation loads the composed plan, computes a new plan, recomputes
    its derived fields and saves it in a single repository call. The
    load-to-save sequence runs under a per-date lock, so concurrent
    mutations of one day apply one after the other. Composers built per
    request share the lock table passed in as ``locks``.
    """

    def __init__(
        self,
        plan_repo: IDailyPlanRepository,
        goal_library: IGoalLibrary,
        habit_registry: IHabitRegistry,
        activity_repo: IActivityRepository,
        allocator: ScheduleAllocator,
        propagator: Optional[RecurrencePropagator] = None,
        aggregator: Optional[ProgressAggregator] = None,
        advisor: Optional[DurationAdvisor] = None,
        clock: Callable[[], datetime] = now_utc,
        locks: Optional[dict[date, asyncio.Lock]] = None,
    ):
        self._plan_repo = plan_repo
        self._goal_library = goal_library
        self._habit_registry = habit_registry
        self._activity_repo = activity_repo
        self._allocator = allocator
        self._propagator = propagator or RecurrencePropagator()
        self._aggregator = aggregator or ProgressAggregator()
        self._advisor = advisor or DurationAdvisor(
            default_minutes=allocator.default_duration_minutes
        )
        self._clock = clock
        self._locks = locks if locks is not None else {}

    def _lock(self, plan_date: date) -> asyncio.Lock:
        lock = self._locks.get(plan_date)
        if lock is None:
            lock = self._locks[plan_date] = asyncio.Lock()
        return lock

    async def _save(self, plan: DailyPlan) -> DailyPlan:
        return await self._plan_repo.save(self._aggregator.apply(plan))

    # ===========================================
    # Read path
    # ===========================================

    async def get_plan(self, plan_date: date) -> Optional[DailyPlan]:
        """Stored plan for a date without creating or propagating anything."""
        return await self._plan_repo.load(plan_date)

    async def get_or_create(self, plan_date: date) -> DailyPlan:
        """
        Complete plan for a date.

        Creates the plan when missing and adds any automatic goals and active
        habits it lacks, using the library state at call time. Saves only
        when something changed, so repeated calls return equal plans.
        """
        async with self._lock(plan_date):
            return await self._compose(plan_date)

    async def _compose(self, plan_date: date) -> DailyPlan:
        # Caller holds the date lock
        plan = await self._plan_repo.load(plan_date)
        is_new = plan is None
        if plan is None:
            plan = DailyPlan(plan_date=plan_date)

        automatic_goals = await self._goal_library.list_automatic()
        active_habits = await self._habit_registry.list_active()
        plan, added = self._propagator.propagate(
            plan, automatic_goals, active_habits, now=self._clock()
        )

        if is_new or added:
            if is_new:
                logger.info(f"Created plan for {plan_date} with {len(plan.goals)} item(s)")
            return await self._save(plan)
        return plan

    async def list_plans(self, start_date: date, end_date: date) -> list[DailyPlan]:
        """Stored plans in an inclusive range. Days never composed are absent."""
        return await self._plan_repo.list_by_range(start_date, end_date)

    # ===========================================
    # Adding items
    # ===========================================

    async def _insert(
        self,
        plan: DailyPlan,
        item: PlanItem,
        schedule: Optional[ScheduleRequest],
    ) -> ScheduleOutcome:
        with_item = plan.model_copy(update={"goals": [*plan.goals, item]})

        if schedule is None:
            saved = await self._save(with_item)
            return ScheduleOutcome(
                status=ScheduleStatus.COMMITTED, item_id=item.id, plan=saved
            )

        outcome = self._allocator.schedule(
            with_item,
            item.id,
            schedule.slot,
            schedule.duration_minutes,
            confirm=schedule.confirm,
        )
        if not outcome.committed:
            # Nothing is added when the requested time is not accepted
            return outcome.model_copy(update={"plan": plan})
        saved = await self._save(outcome.plan)
        return outcome.model_copy(update={"plan": saved})

    async def add_library_goal_to_date(
        self,
        goal_id: UUID,
        plan_date: date,
        schedule: Optional[ScheduleRequest] = None,
    ) -> ScheduleOutcome:
        """
        Add a library goal to a date, optionally scheduled.

        A goal already in the plan (added earlier or propagated as automatic)
        is not added twice; a schedule request then applies to the item
        already there.

        Raises:
            NotFoundError: Unknown library goal
            InvalidIntervalError: Invalid schedule request
        """
        goal = await self._goal_library.get(goal_id)
        if goal is None:
            raise NotFoundError(f"LibraryGoal {goal_id} not found")

        async with self._lock(plan_date):
            plan = await self._compose(plan_date)
            existing = next(
                (item for item in plan.goals if item.source_key() == ("goal", goal.id)),
                None,
            )
            if existing is not None:
                logger.info(f"Goal '{goal.title}' already in plan for {plan_date}")
                if schedule is not None:
                    return await self._commit(
                        self._allocator.schedule(
                            plan,
                            existing.id,
                            schedule.slot,
                            schedule.duration_minutes,
                            confirm=schedule.confirm,
                        )
                    )
                return ScheduleOutcome(
                    status=ScheduleStatus.COMMITTED,
                    item_id=existing.id,
                    scheduled_time=existing.scheduled_time,
                    message="Goal already in plan",
                    plan=plan,
                )

            item = PlanItem(
                id=goal.id,
                title=goal.title,
                description=goal.description,
                completed=False,
                is_automatic=goal.is_automatic,
                has_timer=goal.has_timer,
                created_at=self._clock(),
                source=GoalSource(goal_id=goal.id),
            )
            return await self._insert(plan, item, schedule)

    async def add_activity_to_date(
        self,
        activity_id: UUID,
        plan_date: date,
        schedule: Optional[ScheduleRequest] = None,
    ) -> ScheduleOutcome:
        """
        Add a fresh instance of an activity to a date, optionally scheduled.

        Raises:
            NotFoundError: Unknown or inactive activity
            InvalidIntervalError: Invalid schedule request
        """
        activity = await self._activity_repo.get(activity_id)
        if activity is None or not activity.is_active:
            raise NotFoundError(f"ProductiveActivity {activity_id} not found")

        item = PlanItem(
            id=uuid4(),
            title=activity.name,
            description=activity.description,
            completed=False,
            category=activity.category.value,
            created_at=self._clock(),
            source=ActivitySource(activity_id=activity.id),
        )
        async with self._lock(plan_date):
            plan = await self._compose(plan_date)
            return await self._insert(plan, item, schedule)

    # ===========================================
    # Scheduling
    # ===========================================

    async def _commit(self, outcome: ScheduleOutcome) -> ScheduleOutcome:
        if not outcome.committed:
            return outcome
        saved = await self._save(outcome.plan)
        return outcome.model_copy(update={"plan": saved})

    async def schedule_item(
        self,
        plan_date: date,
        item_id: UUID,
        slot: TimeSlot,
        duration_minutes: int,
        confirm: bool = False,
    ) -> ScheduleOutcome:
        async with self._lock(plan_date):
            plan = await self._compose(plan_date)
            return await self._commit(
                self._allocator.schedule(plan, item_id, slot, duration_minutes, confirm=confirm)
            )

    async def reschedule_item(
        self,
        plan_date: date,
        item_id: UUID,
        slot: TimeSlot,
        confirm: bool = False,
    ) -> ScheduleOutcome:
        async with self._lock(plan_date):
            plan = await self._compose(plan_date)
            return await self._commit(
                self._allocator.reschedule(plan, item_id, slot, confirm=confirm)
            )

    async def drag_item(
        self,
        plan_date: date,
        item_id: UUID,
        pointer_time: datetime,
        confirm: bool = False,
    ) -> ScheduleOutcome:
        """One drag sample; only a confirmed or conflict-free position is saved."""
        async with self._lock(plan_date):
            plan = await self._compose(plan_date)
            return await self._commit(
                self._allocator.drag(plan, item_id, pointer_time, confirm=confirm)
            )

    async def clear_item_schedule(self, plan_date: date, item_id: UUID) -> ScheduleOutcome:
        async with self._lock(plan_date):
            plan = await self._compose(plan_date)
            return await self._commit(self._allocator.clear(plan, item_id))

    async def suggest_free_slots(
        self,
        plan_date: date,
        duration_minutes: int,
        max_results: int,
        exclude_item_id: Optional[UUID] = None,
    ) -> list[FreeSlot]:
        plan = await self.get_or_create(plan_date)
        return self._allocator.suggest_free_slots(
            plan, duration_minutes, max_results, exclude_item_id=exclude_item_id
        )

    async def suggest_durations(self, plan_date: date, item_id: UUID) -> list[int]:
        """
        Duration options for an item of the plan.

        Raises:
            NotFoundError: Item not in the plan
        """
        item, estimated = await self._duration_inputs(plan_date, item_id)
        return self._advisor.suggest(item.title, item.description, estimated)

    async def default_duration(self, plan_date: date, item_id: UUID) -> int:
        """
        Duration to pre-select for an item: its own or estimated length
        when known, else the configured default when offered, else the top
        suggestion.

        Raises:
            NotFoundError: Item not in the plan
        """
        item, estimated = await self._duration_inputs(plan_date, item_id)
        return self._advisor.default_minutes(item.title, item.description, estimated)

    async def _duration_inputs(
        self, plan_date: date, item_id: UUID
    ) -> tuple[PlanItem, Optional[int]]:
        plan = await self.get_or_create(plan_date)
        item = plan.find_item(item_id)
        if item is None:
            raise NotFoundError(f"Item {item_id} not found in plan for {plan_date}")

        estimated: Optional[int] = item.duration_minutes
        source = item.source
        if estimated is None and isinstance(source, ActivitySource):
            activity = await self._activity_repo.get(source.activity_id)
            estimated = activity.estimated_duration if activity else None
        return item, estimated

    # ===========================================
    # Completion and removal
    # ===========================================

    async def toggle_item(self, plan_date: date, item_id: UUID) -> DailyPlan:
        """
        Flip an item's completion state.

        Raises:
            NotFoundError: Item not in the plan
        """
        async with self._lock(plan_date):
            plan = await self._compose(plan_date)
            item = plan.find_item(item_id)
            if item is None:
                raise NotFoundError(f"Item {item_id} not found in plan for {plan_date}")
            updated = item.model_copy(update={"completed": not item.completed})
            return await self._save(plan.replace_item(updated))

    async def remove_item(self, plan_date: date, item_id: UUID) -> DailyPlan:
        """
        Remove an item from a plan.

        Automatic goals and active habits come back on the next composition,
        as fresh instances.

        Raises:
            NotFoundError: Item not in the plan
        """
        async with self._lock(plan_date):
            plan = await self._plan_repo.load(plan_date)
            if plan is None or plan.find_item(item_id) is None:
                raise NotFoundError(f"Item {item_id} not found in plan for {plan_date}")
            goals = [item for item in plan.goals if item.id != item_id]
            return await self._save(plan.model_copy(update={"goals": goals}))
