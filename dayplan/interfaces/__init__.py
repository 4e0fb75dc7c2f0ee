"""Abstract interfaces for infrastructure abstraction."""

from dayplan.interfaces.activity_repository import IActivityRepository
from dayplan.interfaces.goal_library import IGoalLibrary
from dayplan.interfaces.habit_registry import IHabitRegistry
from dayplan.interfaces.plan_repository import IDailyPlanRepository

__all__ = [
    "IActivityRepository",
    "IDailyPlanRepository",
    "IGoalLibrary",
    "IHabitRegistry",
]
