"""Pydantic models (schemas) for the application."""

from dayplan.models.enums import (
    ActivityCategory,
    CompletionLevel,
    HabitCategory,
    ItemKind,
    ScheduleStatus,
)
from dayplan.models.activity import (
    ProductiveActivity,
    ProductiveActivityCreate,
    ProductiveActivityUpdate,
)
from dayplan.models.goal import LibraryGoal, LibraryGoalCreate, LibraryGoalUpdate
from dayplan.models.habit import Habit, HabitCreate, HabitEntry, HabitEntryCreate, HabitUpdate
from dayplan.models.plan import (
    ActivitySource,
    AutomaticGoalSource,
    DailyPlan,
    FreeSlot,
    GoalSource,
    HabitSource,
    PlanItem,
    ScheduledTime,
    ScheduleOutcome,
    ScheduleRequest,
    TimeSlot,
)
from dayplan.models.progress import (
    CompletionStatus,
    DayProgress,
    HabitCompletionRate,
    HabitStreak,
    PlanStats,
    RangeProgress,
    WeekProgress,
)
