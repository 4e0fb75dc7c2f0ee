"""
Progress aggregation.

Completion ratios for a day, a week, a month and a rolling window of weeks.
Habit instances count toward a separate habit ratio, never toward the goal ratio.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Optional
from uuid import UUID

from dayplan.models.enums import CompletionLevel
from dayplan.models.habit import HabitEntry
from dayplan.models.plan import DailyPlan
from dayplan.models.progress import (
    CompletionStatus,
    DayProgress,
    HabitCompletionRate,
    HabitStreak,
    PlanStats,
    RangeProgress,
    WeekProgress,
)

# (lower bound, level, label, color), best band first
COMPLETION_BANDS: tuple[tuple[float, CompletionLevel, str, str], ...] = (
    (0.8, CompletionLevel.GREAT, "Great progress", "#16A34A"),
    (0.5, CompletionLevel.GOOD, "Good progress", "#D97706"),
    (0.0, CompletionLevel.NEEDS_EFFORT, "More effort needed", "#DC2626"),
)


def _ratio(done: int, total: int) -> float:
    return done / total if total > 0 else 0.0


class ProgressAggregator:
    """Derives progress figures from plans on demand."""

    def recompute(self, plan: DailyPlan) -> PlanStats:
        """Derived counters of a plan. Zero items of a kind gives a ratio of 0."""
        goals = [item for item in plan.goals if not item.is_habit]
        habits = [item for item in plan.goals if item.is_habit]
        goals_completed = sum(1 for item in goals if item.completed)
        habits_completed = sum(1 for item in habits if item.completed)
        return PlanStats(
            goals_completed=goals_completed,
            total_goals=len(goals),
            progress=_ratio(goals_completed, len(goals)),
            habits_completed=habits_completed,
            total_habits=len(habits),
            habit_progress=_ratio(habits_completed, len(habits)),
        )

    def apply(self, plan: DailyPlan) -> DailyPlan:
        """Copy of the plan with its derived fields brought up to date."""
        return plan.model_copy(update=self.recompute(plan).model_dump())

    def completion_status(self, progress: float) -> CompletionStatus:
        for lower_bound, level, label, color in COMPLETION_BANDS:
            if progress >= lower_bound:
                return CompletionStatus(level=level, label=label, color=color)
        _, level, label, color = COMPLETION_BANDS[-1]
        return CompletionStatus(level=level, label=label, color=color)

    def day_progress(self, plan: Optional[DailyPlan], plan_date: date) -> DayProgress:
        if plan is None:
            return DayProgress(plan_date=plan_date)
        stats = self.recompute(plan)
        return DayProgress(
            plan_date=plan_date,
            progress=stats.progress,
            goals_completed=stats.goals_completed,
            total_goals=stats.total_goals,
            habit_progress=stats.habit_progress,
            has_plan=True,
        )

    def average_progress(
        self,
        plans: Iterable[DailyPlan],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> RangeProgress:
        """
        Mean daily progress over plans in an inclusive date range.

        Days without a plan are left out of the denominator.
        """
        selected = [
            plan
            for plan in plans
            if (start_date is None or plan.plan_date >= start_date)
            and (end_date is None or plan.plan_date <= end_date)
        ]
        total = sum(self.recompute(plan).progress for plan in selected)
        average = total / len(selected) if selected else 0.0
        return RangeProgress(
            start_date=start_date,
            end_date=end_date,
            average=average,
            planned_days=len(selected),
            status=self.completion_status(average),
        )

    def _range_with_days(
        self,
        plans: Iterable[DailyPlan],
        start_date: date,
        end_date: date,
        label: str,
    ) -> WeekProgress:
        by_date = {plan.plan_date: plan for plan in plans}
        days: list[DayProgress] = []
        current = start_date
        while current <= end_date:
            days.append(self.day_progress(by_date.get(current), current))
            current += timedelta(days=1)
        summary = self.average_progress(by_date.values(), start_date, end_date)
        return WeekProgress(
            start_date=start_date,
            end_date=end_date,
            average=summary.average,
            planned_days=summary.planned_days,
            status=summary.status,
            label=label,
            days=days,
        )

    def week_progress(
        self,
        plans: Iterable[DailyPlan],
        reference_date: date,
        week_start: int = 0,
    ) -> WeekProgress:
        """
        Progress of the week containing ``reference_date``.

        Args:
            week_start: First weekday of the week, 0=Monday ... 6=Sunday
        """
        offset = (reference_date.weekday() - week_start) % 7
        start = reference_date - timedelta(days=offset)
        end = start + timedelta(days=6)
        return self._range_with_days(plans, start, end, label=f"Week of {start.isoformat()}")

    def rolling_weeks(
        self,
        plans: Iterable[DailyPlan],
        today: date,
        weeks: int = 4,
    ) -> list[WeekProgress]:
        """
        Consecutive 7-day windows ending today, oldest first.

        Window ``i`` (0 = most recent) covers ``today - 7*(i+1) + 1`` to ``today - 7*i``.
        """
        plan_list = list(plans)
        windows: list[WeekProgress] = []
        for i in range(weeks):
            end = today - timedelta(days=7 * i)
            start = end - timedelta(days=6)
            windows.append(
                self._range_with_days(plan_list, start, end, label=f"Week {weeks - i}")
            )
        windows.reverse()
        return windows

    def month_progress(self, plans: Iterable[DailyPlan], year: int, month: int) -> WeekProgress:
        start = date(year, month, 1)
        next_month = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
        end = next_month - timedelta(days=1)
        return self._range_with_days(plans, start, end, label=start.strftime("%B %Y"))

    def habit_streak(
        self,
        entries: Iterable[HabitEntry],
        habit_id: UUID,
        today: date,
    ) -> HabitStreak:
        """Number of consecutive completed days ending on ``today``."""
        completed_dates = {
            entry.entry_date
            for entry in entries
            if entry.habit_id == habit_id and entry.completed
        }
        streak = 0
        current = today
        while current in completed_dates:
            streak += 1
            current -= timedelta(days=1)
        return HabitStreak(habit_id=habit_id, streak=streak, reference_date=today)

    def habit_completion_rate(
        self,
        entries: Iterable[HabitEntry],
        habit_id: UUID,
        start_date: date,
        end_date: date,
    ) -> HabitCompletionRate:
        """Completed days over all days of the inclusive range."""
        total_days = (end_date - start_date).days + 1
        if total_days <= 0:
            return HabitCompletionRate(habit_id=habit_id, completed_days=0, total_days=0)
        completed_days = len(
            {
                entry.entry_date
                for entry in entries
                if entry.habit_id == habit_id
                and entry.completed
                and start_date <= entry.entry_date <= end_date
            }
        )
        return HabitCompletionRate(
            habit_id=habit_id,
            completed_days=completed_days,
            total_days=total_days,
            rate=_ratio(completed_days, total_days),
        )
