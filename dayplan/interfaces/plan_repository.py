"""
Daily plan repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from dayplan.models.plan import DailyPlan


class IDailyPlanRepository(ABC):
    @abstractmethod
    async def load(self, plan_date: date) -> Optional[DailyPlan]:
        """Load the plan for a date. None means the plan was never created."""
        pass

    @abstractmethod
    async def save(self, plan: DailyPlan) -> DailyPlan:
        """Insert or replace the plan for ``plan.plan_date``."""
        pass

    @abstractmethod
    async def list_by_range(self, start_date: date, end_date: date) -> list[DailyPlan]:
        """List plans with start_date <= plan_date <= end_date, ordered by date."""
        pass

    @abstractmethod
    async def delete(self, plan_date: date) -> bool:
        """Delete the plan for a date."""
        pass
