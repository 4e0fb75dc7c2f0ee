"""
Goal library interface.

Defines contract for library goal persistence operations.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from dayplan.models.goal import LibraryGoal, LibraryGoalCreate, LibraryGoalUpdate


class IGoalLibrary(ABC):
    """Abstract interface for library goal persistence."""

    @abstractmethod
    async def create(self, data: LibraryGoalCreate) -> LibraryGoal:
        """Create a new library goal."""
        pass

    @abstractmethod
    async def get(self, goal_id: UUID) -> Optional[LibraryGoal]:
        """Get a library goal by ID."""
        pass

    @abstractmethod
    async def list(self) -> list[LibraryGoal]:
        """List all library goals, oldest first."""
        pass

    @abstractmethod
    async def list_automatic(self) -> list[LibraryGoal]:
        """List goals flagged to recur in every day's plan."""
        pass

    @abstractmethod
    async def update(self, goal_id: UUID, update: LibraryGoalUpdate) -> LibraryGoal:
        """Update a library goal. Raises NotFoundError if missing."""
        pass

    @abstractmethod
    async def delete(self, goal_id: UUID) -> bool:
        """Delete a library goal. Existing plan items are left untouched."""
        pass
