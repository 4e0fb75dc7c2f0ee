"""
Progress statistics API endpoints.

Reads stored plans only: asking for statistics never creates a plan.
"""

from datetime import date, timedelta
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from dayplan.api.deps import Aggregator, AppSettings, HabitRegistry, PlanRepo
from dayplan.models.progress import (
    DayProgress,
    HabitCompletionRate,
    HabitStreak,
    RangeProgress,
    WeekProgress,
)
from dayplan.utils.datetime_utils import get_user_today

router = APIRouter()

# Lower bound for open-ended ranges
EARLIEST_DATE = date(1970, 1, 1)


@router.get("/day/{plan_date}", response_model=DayProgress)
async def get_day_progress(
    plan_date: date,
    plan_repo: PlanRepo,
    aggregator: Aggregator,
) -> DayProgress:
    plan = await plan_repo.load(plan_date)
    return aggregator.day_progress(plan, plan_date)


@router.get("/week", response_model=WeekProgress)
async def get_week_progress(
    plan_repo: PlanRepo,
    aggregator: Aggregator,
    settings: AppSettings,
    reference_date: Optional[date] = Query(None, description="Any day of the week (default: today)"),
    week_start: int = Query(0, ge=0, le=6, description="0=Monday ... 6=Sunday"),
) -> WeekProgress:
    """Progress of the calendar week containing the reference date."""
    reference = reference_date or get_user_today(settings.TIMEZONE)
    offset = (reference.weekday() - week_start) % 7
    start = reference - timedelta(days=offset)
    plans = await plan_repo.list_by_range(start, start + timedelta(days=6))
    return aggregator.week_progress(plans, reference, week_start=week_start)


@router.get("/rolling", response_model=list[WeekProgress])
async def get_rolling_weeks(
    plan_repo: PlanRepo,
    aggregator: Aggregator,
    settings: AppSettings,
    weeks: Optional[int] = Query(None, ge=1, le=52),
    today: Optional[date] = Query(None, description="Last day of the window (default: today)"),
) -> list[WeekProgress]:
    """Consecutive 7-day windows ending today, oldest first."""
    count = weeks or settings.ROLLING_WEEKS
    end = today or get_user_today(settings.TIMEZONE)
    start = end - timedelta(days=7 * count - 1)
    plans = await plan_repo.list_by_range(start, end)
    return aggregator.rolling_weeks(plans, end, weeks=count)


@router.get("/month", response_model=WeekProgress)
async def get_month_progress(
    plan_repo: PlanRepo,
    aggregator: Aggregator,
    settings: AppSettings,
    year: Optional[int] = Query(None, ge=1970, le=9999),
    month: Optional[int] = Query(None, ge=1, le=12),
) -> WeekProgress:
    today = get_user_today(settings.TIMEZONE)
    year = year or today.year
    month = month or today.month
    start = date(year, month, 1)
    end = (date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)) - timedelta(days=1)
    plans = await plan_repo.list_by_range(start, end)
    return aggregator.month_progress(plans, year, month)


@router.get("/overall", response_model=RangeProgress)
async def get_overall_progress(
    plan_repo: PlanRepo,
    aggregator: Aggregator,
    settings: AppSettings,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
) -> RangeProgress:
    """Average daily progress over every stored plan in the range."""
    start = start_date or EARLIEST_DATE
    end = end_date or get_user_today(settings.TIMEZONE)
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date",
        )
    plans = await plan_repo.list_by_range(start, end)
    return aggregator.average_progress(plans, start_date, end_date)


@router.get("/habits/{habit_id}/streak", response_model=HabitStreak)
async def get_habit_streak(
    habit_id: UUID,
    habit_registry: HabitRegistry,
    aggregator: Aggregator,
    settings: AppSettings,
    reference_date: Optional[date] = Query(None),
) -> HabitStreak:
    if await habit_registry.get(habit_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Habit {habit_id} not found",
        )
    today = reference_date or get_user_today(settings.TIMEZONE)
    entries = await habit_registry.list_entries(habit_id=habit_id, end_date=today)
    return aggregator.habit_streak(entries, habit_id, today)


@router.get("/habits/{habit_id}/completion-rate", response_model=HabitCompletionRate)
async def get_habit_completion_rate(
    habit_id: UUID,
    habit_registry: HabitRegistry,
    aggregator: Aggregator,
    start_date: date = Query(...),
    end_date: date = Query(...),
) -> HabitCompletionRate:
    if await habit_registry.get(habit_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Habit {habit_id} not found",
        )
    entries = await habit_registry.list_entries(
        habit_id=habit_id, start_date=start_date, end_date=end_date
    )
    return aggregator.habit_completion_rate(entries, habit_id, start_date, end_date)
