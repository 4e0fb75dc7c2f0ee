"""
Habit models.

Active habits are instantiated into every composed day plan.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from dayplan.models.enums import HabitCategory

HABIT_CATEGORY_COLORS: dict[HabitCategory, str] = {
    HabitCategory.HEALTH: "#EF4444",
    HabitCategory.PRODUCTIVITY: "#F59E0B",
    HabitCategory.MINDFULNESS: "#3B82F6",
    HabitCategory.LEARNING: "#8B5CF6",
    HabitCategory.SOCIAL: "#10B981",
    HabitCategory.OTHER: "#737373",
}


class HabitBase(BaseModel):
    """Base fields for habits."""

    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: HabitCategory = HabitCategory.HEALTH
    color: Optional[str] = Field(None, max_length=20)
    is_active: bool = True
    target_count: Optional[int] = Field(None, ge=1)
    unit: Optional[str] = Field(None, max_length=50)


class HabitCreate(HabitBase):
    """Create a new habit. Colour defaults to the category colour."""

    @model_validator(mode="after")
    def _default_color(self) -> "HabitCreate":
        if not self.color:
            self.color = HABIT_CATEGORY_COLORS[self.category]
        return self


class HabitUpdate(BaseModel):
    """Update habit fields."""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[HabitCategory] = None
    color: Optional[str] = Field(None, max_length=20)
    is_active: Optional[bool] = None
    target_count: Optional[int] = Field(None, ge=1)
    unit: Optional[str] = Field(None, max_length=50)


class Habit(HabitBase):
    """Habit with metadata."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class HabitEntryCreate(BaseModel):
    """Record completion of a habit on a date."""

    entry_date: date
    completed: bool = True
    count: Optional[int] = Field(None, ge=0)


class HabitEntry(BaseModel):
    """Habit completion for one date. Unique on (habit_id, entry_date)."""

    habit_id: UUID
    entry_date: date
    completed: bool
    count: Optional[int] = None
    updated_at: datetime
