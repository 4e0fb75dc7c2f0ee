"""
Enum definitions for the application.

These enums are used across models and provide type-safe kind/category values.
"""

from enum import Enum


class ItemKind(str, Enum):
    """Where a plan item came from."""

    GOAL = "goal"
    AUTOMATIC = "automatic"
    HABIT = "habit"
    ACTIVITY = "activity"


class ScheduleStatus(str, Enum):
    """Result of a scheduling operation."""

    COMMITTED = "committed"
    CONFLICT = "conflict"
    ITEM_NOT_FOUND = "item_not_found"


class HabitCategory(str, Enum):
    """Habit category."""

    HEALTH = "health"
    PRODUCTIVITY = "productivity"
    MINDFULNESS = "mindfulness"
    LEARNING = "learning"
    SOCIAL = "social"
    OTHER = "other"


class ActivityCategory(str, Enum):
    """Productive activity category."""

    MIND = "mind"
    BODY = "body"
    WORK = "work"
    CREATIVE = "creative"
    SOCIAL = "social"
    OTHER = "other"


class CompletionLevel(str, Enum):
    """
    Completion band derived from a progress ratio.

    GREAT = 80% and above
    GOOD = 50% up to 80%
    NEEDS_EFFORT = below 50%
    """

    GREAT = "great"
    GOOD = "good"
    NEEDS_EFFORT = "needs_effort"
