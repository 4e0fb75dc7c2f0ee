"""
Goal library models.

Library goals are reusable templates that are added to individual days.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field


class LibraryGoalBase(BaseModel):
    """Base fields for library goals."""

    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    is_automatic: bool = Field(
        False, description="Recur in every day's plan without manual selection"
    )
    has_timer: bool = False


class LibraryGoalCreate(LibraryGoalBase):
    """Create a new library goal."""

    pass


class LibraryGoalUpdate(BaseModel):
    """Update library goal fields."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=2000)
    is_automatic: Optional[bool] = None
    has_timer: Optional[bool] = None


class LibraryGoal(LibraryGoalBase):
    """Library goal with metadata."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
