"""
Habit registry interface.

Defines contract for habits and their per-date completion entries.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional
from uuid import UUID

from dayplan.models.habit import Habit, HabitCreate, HabitEntry, HabitUpdate


class IHabitRegistry(ABC):
    """Abstract interface for habit persistence."""

    @abstractmethod
    async def create(self, data: HabitCreate) -> Habit:
        """Create a new habit."""
        pass

    @abstractmethod
    async def get(self, habit_id: UUID) -> Optional[Habit]:
        """Get a habit by ID."""
        pass

    @abstractmethod
    async def list(self, include_inactive: bool = True) -> list[Habit]:
        """List habits, oldest first."""
        pass

    @abstractmethod
    async def list_active(self) -> list[Habit]:
        """List habits that propagate onto day plans."""
        pass

    @abstractmethod
    async def update(self, habit_id: UUID, update: HabitUpdate) -> Habit:
        """Update a habit. Raises NotFoundError if missing."""
        pass

    @abstractmethod
    async def delete(self, habit_id: UUID) -> bool:
        """Delete a habit and its entries."""
        pass

    @abstractmethod
    async def record_habit_entry(
        self,
        habit_id: UUID,
        entry_date: date,
        completed: bool,
        count: Optional[int] = None,
    ) -> HabitEntry:
        """Insert or update the entry for (habit_id, entry_date)."""
        pass

    @abstractmethod
    async def get_entry(self, habit_id: UUID, entry_date: date) -> Optional[HabitEntry]:
        """Get the entry for (habit_id, entry_date)."""
        pass

    @abstractmethod
    async def list_entries(
        self,
        habit_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[HabitEntry]:
        """List entries, optionally filtered by habit and inclusive date range."""
        pass
