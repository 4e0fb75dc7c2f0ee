"""
Schedule allocator.

The single place where an item's scheduled time is set, moved or cleared.
Every operation takes a plan and returns a ``ScheduleOutcome`` carrying a new
plan; the input plan is never mutated, so a failed or cancelled operation
cannot leave a plan half-updated.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from dayplan.core.exceptions import InvalidIntervalError
from dayplan.core.logger import setup_logger
from dayplan.models.enums import ScheduleStatus
from dayplan.models.plan import (
    DailyPlan,
    FreeSlot,
    PlanItem,
    ScheduledTime,
    ScheduleOutcome,
    TimeSlot,
)
from dayplan.services.conflict_detector import find_conflicts
from dayplan.services.time_grid import TimeGrid

logger = setup_logger(__name__)


class ScheduleAllocator:
    """
    Places, moves and clears item schedules within a day plan.

    Conflicts are never resolved silently: without ``confirm`` a conflicting
    placement returns a ``conflict`` outcome and the unchanged plan; with
    ``confirm`` it is committed and flagged as ``overridden``.
    """

    def __init__(self, grid: TimeGrid, default_duration_minutes: int = 60):
        if default_duration_minutes <= 0:
            raise InvalidIntervalError("default duration must be positive")
        self.grid = grid
        self.default_duration_minutes = default_duration_minutes

    def build_interval(self, plan: DailyPlan, slot: TimeSlot, duration_minutes: int) -> ScheduledTime:
        """Interval starting at a grid slot on the plan's date."""
        if duration_minutes <= 0:
            raise InvalidIntervalError(
                f"duration must be positive, got {duration_minutes}",
                details={"duration_minutes": duration_minutes},
            )
        start = self.grid.to_timestamp(plan.plan_date, slot)
        return ScheduledTime(start=start, end=start + timedelta(minutes=duration_minutes))

    def _not_found(self, plan: DailyPlan, item_id: UUID, action: str) -> ScheduleOutcome:
        logger.warning(f"Cannot {action}: item {item_id} not in plan for {plan.plan_date}")
        return ScheduleOutcome(
            status=ScheduleStatus.ITEM_NOT_FOUND,
            item_id=item_id,
            message=f"Item {item_id} not found in plan for {plan.plan_date}",
            plan=plan,
        )

    def _place(
        self,
        plan: DailyPlan,
        item: PlanItem,
        interval: ScheduledTime,
        confirm: bool,
    ) -> ScheduleOutcome:
        conflicts = find_conflicts(interval, plan.goals, exclude_item_id=item.id)
        if conflicts and not confirm:
            logger.info(
                f"Conflict scheduling '{item.title}' at {interval.start.isoformat()}: "
                f"{len(conflicts)} overlapping item(s)"
            )
            return ScheduleOutcome(
                status=ScheduleStatus.CONFLICT,
                item_id=item.id,
                scheduled_time=interval,
                conflicts=conflicts,
                message="Time overlaps with other scheduled items",
                plan=plan,
            )

        if conflicts:
            logger.info(
                f"Scheduling '{item.title}' anyway despite {len(conflicts)} conflict(s)"
            )
        updated_item = item.model_copy(update={"scheduled_time": interval})
        return ScheduleOutcome(
            status=ScheduleStatus.COMMITTED,
            item_id=item.id,
            scheduled_time=interval,
            conflicts=conflicts,
            overridden=bool(conflicts),
            plan=plan.replace_item(updated_item),
        )

    def schedule(
        self,
        plan: DailyPlan,
        item_id: UUID,
        slot: TimeSlot,
        duration_minutes: int,
        confirm: bool = False,
    ) -> ScheduleOutcome:
        """
        Schedule an item at a slot for a duration.

        Raises:
            InvalidIntervalError: Non-positive duration or slot off the grid
        """
        interval = self.build_interval(plan, slot, duration_minutes)
        item = plan.find_item(item_id)
        if item is None:
            return self._not_found(plan, item_id, "schedule")
        return self._place(plan, item, interval, confirm)

    def reschedule(
        self,
        plan: DailyPlan,
        item_id: UUID,
        slot: TimeSlot,
        confirm: bool = False,
    ) -> ScheduleOutcome:
        """
        Move an item to a new slot, keeping its duration.

        An item that was never scheduled gets the default duration.
        """
        item = plan.find_item(item_id)
        if item is None:
            return self._not_found(plan, item_id, "reschedule")
        duration = item.duration_minutes or self.default_duration_minutes
        interval = self.build_interval(plan, slot, duration)
        return self._place(plan, item, interval, confirm)

    def drag(
        self,
        plan: DailyPlan,
        item_id: UUID,
        pointer_time: datetime,
        confirm: bool = False,
    ) -> ScheduleOutcome:
        """
        Handle one pointer sample of a drag gesture.

        The pointer position is snapped to the nearest slot and treated as a
        reschedule candidate. The same position always yields the same outcome.
        """
        slot = self.grid.snap(pointer_time)
        return self.reschedule(plan, item_id, slot, confirm=confirm)

    def clear(self, plan: DailyPlan, item_id: UUID) -> ScheduleOutcome:
        """Unschedule an item. The item stays in the plan."""
        item = plan.find_item(item_id)
        if item is None:
            return self._not_found(plan, item_id, "clear schedule")
        updated_item = item.model_copy(update={"scheduled_time": None})
        return ScheduleOutcome(
            status=ScheduleStatus.COMMITTED,
            item_id=item.id,
            plan=plan.replace_item(updated_item),
        )

    def suggest_free_slots(
        self,
        plan: DailyPlan,
        duration_minutes: int,
        max_results: int,
        exclude_item_id: Optional[UUID] = None,
    ) -> list[FreeSlot]:
        """
        Earliest slots where an item of the given length fits without conflict.

        Only intervals that end by the end of the grid range are offered.
        """
        if duration_minutes <= 0:
            raise InvalidIntervalError(f"duration must be positive, got {duration_minutes}")
        if max_results <= 0:
            return []

        day_end = self.grid.end_of_day(plan.plan_date)
        free: list[FreeSlot] = []
        for slot in self.grid.slots_for(plan.plan_date):
            interval = self.build_interval(plan, slot, duration_minutes)
            if interval.end > day_end:
                break
            if find_conflicts(interval, plan.goals, exclude_item_id=exclude_item_id):
                continue
            free.append(FreeSlot(slot=slot, start=interval.start, end=interval.end))
            if len(free) >= max_results:
                break
        return free
