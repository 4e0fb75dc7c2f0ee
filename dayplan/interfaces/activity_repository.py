"""
Productive activity repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from dayplan.models.activity import (
    ProductiveActivity,
    ProductiveActivityCreate,
    ProductiveActivityUpdate,
)


class IActivityRepository(ABC):
    """Abstract interface for productive activity persistence."""

    @abstractmethod
    async def create(self, data: ProductiveActivityCreate) -> ProductiveActivity:
        """Create a new activity template."""
        pass

    @abstractmethod
    async def get(self, activity_id: UUID) -> Optional[ProductiveActivity]:
        """Get an activity by ID."""
        pass

    @abstractmethod
    async def list(self, include_inactive: bool = True) -> list[ProductiveActivity]:
        """List activities, oldest first."""
        pass

    @abstractmethod
    async def list_active(self) -> list[ProductiveActivity]:
        """List activities that can be added to a day."""
        pass

    @abstractmethod
    async def update(
        self, activity_id: UUID, update: ProductiveActivityUpdate
    ) -> ProductiveActivity:
        """Update an activity. Raises NotFoundError if missing."""
        pass

    @abstractmethod
    async def delete(self, activity_id: UUID) -> bool:
        """Delete an activity."""
        pass
