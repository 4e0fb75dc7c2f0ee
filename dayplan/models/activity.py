"""
Productive activity models.

Activities are reusable templates instantiated into a day on demand.
They never recur automatically.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from dayplan.models.enums import ActivityCategory


class ProductiveActivityBase(BaseModel):
    """Base fields for productive activities."""

    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: ActivityCategory = ActivityCategory.MIND
    estimated_duration: Optional[int] = Field(None, ge=1, description="Minutes")
    is_active: bool = True


class ProductiveActivityCreate(ProductiveActivityBase):
    """Create a new productive activity."""

    pass


class ProductiveActivityUpdate(BaseModel):
    """Update productive activity fields."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[ActivityCategory] = None
    estimated_duration: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None


class ProductiveActivity(ProductiveActivityBase):
    """Productive activity with metadata."""

    id: UUID
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
