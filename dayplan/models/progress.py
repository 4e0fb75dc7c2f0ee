"""
Progress and statistics models.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from dayplan.models.enums import CompletionLevel


class PlanStats(BaseModel):
    """Derived counters of a single plan."""

    goals_completed: int = 0
    total_goals: int = 0
    progress: float = Field(0.0, ge=0, le=1)
    habits_completed: int = 0
    total_habits: int = 0
    habit_progress: float = Field(0.0, ge=0, le=1)


class CompletionStatus(BaseModel):
    """Display band for a progress value."""

    level: CompletionLevel
    label: str
    color: str


class DayProgress(BaseModel):
    """Progress of one day. ``has_plan`` is False for days never composed."""

    plan_date: date
    progress: float = 0.0
    goals_completed: int = 0
    total_goals: int = 0
    habit_progress: float = 0.0
    has_plan: bool = False


class RangeProgress(BaseModel):
    """Average progress over a date range, counting only days with a plan."""

    start_date: Optional[date] = None
    end_date: Optional[date] = None
    average: float = 0.0
    planned_days: int = 0
    status: CompletionStatus


class WeekProgress(RangeProgress):
    """Week summary with a per-day breakdown."""

    label: str = ""
    days: list[DayProgress] = Field(default_factory=list)


class HabitStreak(BaseModel):
    """Consecutive completed days ending on the reference date."""

    habit_id: UUID
    streak: int
    reference_date: date


class HabitCompletionRate(BaseModel):
    """Share of completed entries for a habit in a date range."""

    habit_id: UUID
    completed_days: int
    total_days: int
    rate: float = Field(0.0, ge=0, le=1)
