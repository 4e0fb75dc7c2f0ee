"""
Daily plan API endpoints.

Thin layer over DailyPlanComposer. Scheduling outcomes map to HTTP status
codes: a conflict is a 409 carrying the overlapping items, an unknown item a 404.
"""

from datetime import date, datetime, timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from pydantic import BaseModel, Field

from dayplan.api.deps import AppSettings, Composer, HabitRegistry, TimelineGrid
from dayplan.core.exceptions import NotFoundError, PlannerError, ValidationError
from dayplan.core.logger import setup_logger
from dayplan.models.enums import ScheduleStatus
from dayplan.models.plan import (
    DailyPlan,
    FreeSlot,
    HabitSource,
    ScheduledTime,
    ScheduleOutcome,
    ScheduleRequest,
    TimeSlot,
)
from dayplan.services.conflict_detector import find_conflicts

logger = setup_logger(__name__)

router = APIRouter()


class AddGoalRequest(BaseModel):
    """Add a library goal to a day."""
    goal_id: UUID
    schedule: Optional[ScheduleRequest] = None


class AddActivityRequest(BaseModel):
    """Add a productive activity instance to a day."""
    activity_id: UUID
    schedule: Optional[ScheduleRequest] = None


class RescheduleRequest(BaseModel):
    slot: TimeSlot
    confirm: bool = False


class DragRequest(BaseModel):
    """One pointer sample of a drag gesture."""
    pointer_time: datetime
    confirm: bool = False


class DurationSuggestions(BaseModel):
    item_id: UUID
    durations: list[int] = Field(default_factory=list)
    default: int = Field(..., description="Pre-selected duration (minutes)")


class TimelineSlot(BaseModel):
    """One row of the day timeline and the scheduled items overlapping it."""
    slot: TimeSlot
    start: datetime
    end: datetime
    item_ids: list[UUID] = Field(default_factory=list)


def _planner_http_error(exc: PlannerError) -> HTTPException:
    if isinstance(exc, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    if isinstance(exc, ValidationError):
        return HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
        )
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))


def _check_outcome(outcome: ScheduleOutcome) -> ScheduleOutcome:
    """Raise for outcomes that were not committed."""
    if outcome.status == ScheduleStatus.CONFLICT:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": outcome.message,
                "item_id": str(outcome.item_id),
                "scheduled_time": outcome.scheduled_time.model_dump(mode="json")
                if outcome.scheduled_time
                else None,
                "conflicts": [item.model_dump(mode="json") for item in outcome.conflicts],
            },
        )
    if outcome.status == ScheduleStatus.ITEM_NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=outcome.message)
    return outcome


# ===========================================
# Plans
# ===========================================


@router.get("", response_model=list[DailyPlan])
async def list_plans(
    composer: Composer,
    start_date: date = Query(..., description="First day (inclusive)"),
    end_date: date = Query(..., description="Last day (inclusive)"),
) -> list[DailyPlan]:
    """List stored plans in a date range. Days never opened are not listed."""
    if end_date < start_date:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date",
        )
    return await composer.list_plans(start_date, end_date)


@router.get("/{plan_date}", response_model=DailyPlan)
async def get_plan(plan_date: date, composer: Composer) -> DailyPlan:
    """Get the plan for a date, creating and completing it as needed."""
    return await composer.get_or_create(plan_date)


@router.post("/{plan_date}/goals", response_model=ScheduleOutcome, status_code=status.HTTP_201_CREATED)
async def add_goal(
    plan_date: date,
    payload: AddGoalRequest,
    composer: Composer,
) -> ScheduleOutcome:
    """Add a library goal to the plan, optionally at a time."""
    try:
        outcome = await composer.add_library_goal_to_date(
            payload.goal_id, plan_date, schedule=payload.schedule
        )
    except PlannerError as exc:
        raise _planner_http_error(exc) from exc
    return _check_outcome(outcome)


@router.post(
    "/{plan_date}/activities",
    response_model=ScheduleOutcome,
    status_code=status.HTTP_201_CREATED,
)
async def add_activity(
    plan_date: date,
    payload: AddActivityRequest,
    composer: Composer,
) -> ScheduleOutcome:
    """Add a productive activity to the plan, optionally at a time."""
    try:
        outcome = await composer.add_activity_to_date(
            payload.activity_id, plan_date, schedule=payload.schedule
        )
    except PlannerError as exc:
        raise _planner_http_error(exc) from exc
    return _check_outcome(outcome)


@router.get("/{plan_date}/free-slots", response_model=list[FreeSlot])
async def get_free_slots(
    plan_date: date,
    composer: Composer,
    settings: AppSettings,
    duration_minutes: int = Query(..., ge=1, description="Length of the wanted slot"),
    max_results: Optional[int] = Query(None, ge=1, le=100),
    exclude_item_id: Optional[UUID] = Query(None, description="Item being moved"),
) -> list[FreeSlot]:
    """Earliest conflict-free start times for a duration."""
    try:
        return await composer.suggest_free_slots(
            plan_date,
            duration_minutes,
            max_results or settings.FREE_SLOT_SUGGESTIONS,
            exclude_item_id=exclude_item_id,
        )
    except PlannerError as exc:
        raise _planner_http_error(exc) from exc


@router.get("/{plan_date}/timeline", response_model=list[TimelineSlot])
async def get_timeline(
    plan_date: date,
    composer: Composer,
    grid: TimelineGrid,
) -> list[TimelineSlot]:
    """Timeline rows for the day, each listing the scheduled items it overlaps."""
    plan = await composer.get_or_create(plan_date)
    scheduled = plan.scheduled_items()
    rows: list[TimelineSlot] = []
    for slot in grid.slots_for(plan_date):
        start = grid.to_timestamp(plan_date, slot)
        window = ScheduledTime(start=start, end=start + timedelta(minutes=grid.slot_minutes))
        rows.append(
            TimelineSlot(
                slot=slot,
                start=window.start,
                end=window.end,
                item_ids=[item.id for item in find_conflicts(window, scheduled)],
            )
        )
    return rows


# ===========================================
# Items
# ===========================================


@router.put("/{plan_date}/items/{item_id}/schedule", response_model=ScheduleOutcome)
async def schedule_item(
    plan_date: date,
    item_id: UUID,
    payload: ScheduleRequest,
    composer: Composer,
) -> ScheduleOutcome:
    """Schedule an item at a slot for a duration."""
    try:
        outcome = await composer.schedule_item(
            plan_date,
            item_id,
            payload.slot,
            payload.duration_minutes,
            confirm=payload.confirm,
        )
    except PlannerError as exc:
        raise _planner_http_error(exc) from exc
    return _check_outcome(outcome)


@router.put("/{plan_date}/items/{item_id}/reschedule", response_model=ScheduleOutcome)
async def reschedule_item(
    plan_date: date,
    item_id: UUID,
    payload: RescheduleRequest,
    composer: Composer,
) -> ScheduleOutcome:
    """Move an item to another slot, keeping its duration."""
    try:
        outcome = await composer.reschedule_item(
            plan_date, item_id, payload.slot, confirm=payload.confirm
        )
    except PlannerError as exc:
        raise _planner_http_error(exc) from exc
    return _check_outcome(outcome)


@router.put("/{plan_date}/items/{item_id}/drag", response_model=ScheduleOutcome)
async def drag_item(
    plan_date: date,
    item_id: UUID,
    payload: DragRequest,
    composer: Composer,
) -> ScheduleOutcome:
    """Apply one drag sample. The pointer time is snapped to the grid."""
    try:
        outcome = await composer.drag_item(
            plan_date, item_id, payload.pointer_time, confirm=payload.confirm
        )
    except PlannerError as exc:
        raise _planner_http_error(exc) from exc
    return _check_outcome(outcome)


@router.delete("/{plan_date}/items/{item_id}/schedule", response_model=ScheduleOutcome)
async def clear_item_schedule(
    plan_date: date,
    item_id: UUID,
    composer: Composer,
) -> ScheduleOutcome:
    """Unschedule an item; it stays in the plan."""
    outcome = await composer.clear_item_schedule(plan_date, item_id)
    return _check_outcome(outcome)


@router.post("/{plan_date}/items/{item_id}/toggle", response_model=DailyPlan)
async def toggle_item(
    plan_date: date,
    item_id: UUID,
    composer: Composer,
    habit_registry: HabitRegistry,
) -> DailyPlan:
    """
    Flip an item's completion state.

    Toggling a habit instance also records the habit entry for the day.
    """
    try:
        plan = await composer.toggle_item(plan_date, item_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc

    item = plan.find_item(item_id)
    if item is not None and isinstance(item.source, HabitSource):
        try:
            await habit_registry.record_habit_entry(
                item.source.habit_id, plan_date, item.completed
            )
        except NotFoundError:
            # Instance of a habit that was deleted since; the plan keeps it
            logger.warning(
                f"Habit {item.source.habit_id} no longer exists, entry not recorded"
            )
    return plan


@router.delete("/{plan_date}/items/{item_id}", response_model=DailyPlan)
async def remove_item(
    plan_date: date,
    item_id: UUID,
    composer: Composer,
) -> DailyPlan:
    """Remove an item from the plan."""
    try:
        return await composer.remove_item(plan_date, item_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc


@router.get("/{plan_date}/items/{item_id}/durations", response_model=DurationSuggestions)
async def get_duration_suggestions(
    plan_date: date,
    item_id: UUID,
    composer: Composer,
) -> DurationSuggestions:
    """Ranked duration options for an item."""
    try:
        durations = await composer.suggest_durations(plan_date, item_id)
        default = await composer.default_duration(plan_date, item_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return DurationSuggestions(item_id=item_id, durations=durations, default=default)
