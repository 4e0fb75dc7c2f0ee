"""
SQLite implementation of daily plan repository.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from sqlalchemy import and_, select

from dayplan.infrastructure.local.database import DailyPlanORM, ensure_aware, get_session_factory
from dayplan.interfaces.plan_repository import IDailyPlanRepository
from dayplan.models.plan import DailyPlan, PlanItem
from dayplan.utils.datetime_utils import now_utc


class SqliteDailyPlanRepository(IDailyPlanRepository):
    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: DailyPlanORM) -> DailyPlan:
        return DailyPlan(
            plan_date=orm.plan_date,
            goals=[PlanItem.model_validate(entry) for entry in (orm.goals_json or [])],
            goals_completed=orm.goals_completed or 0,
            total_goals=orm.total_goals or 0,
            progress=orm.progress or 0.0,
            habits_completed=orm.habits_completed or 0,
            total_habits=orm.total_habits or 0,
            habit_progress=orm.habit_progress or 0.0,
            updated_at=ensure_aware(orm.updated_at),
        )

    async def load(self, plan_date: date) -> Optional[DailyPlan]:
        async with self._session_factory() as session:
            orm = await session.get(DailyPlanORM, plan_date)
            return self._orm_to_model(orm) if orm else None

    async def save(self, plan: DailyPlan) -> DailyPlan:
        async with self._session_factory() as session:
            orm = await session.get(DailyPlanORM, plan.plan_date)
            if orm is None:
                orm = DailyPlanORM(plan_date=plan.plan_date)
                session.add(orm)
            orm.goals_json = [item.model_dump(mode="json") for item in plan.goals]
            orm.goals_completed = plan.goals_completed
            orm.total_goals = plan.total_goals
            orm.progress = plan.progress
            orm.habits_completed = plan.habits_completed
            orm.total_habits = plan.total_habits
            orm.habit_progress = plan.habit_progress
            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def list_by_range(self, start_date: date, end_date: date) -> list[DailyPlan]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(DailyPlanORM)
                .where(
                    and_(
                        DailyPlanORM.plan_date >= start_date,
                        DailyPlanORM.plan_date <= end_date,
                    )
                )
                .order_by(DailyPlanORM.plan_date.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def delete(self, plan_date: date) -> bool:
        async with self._session_factory() as session:
            orm = await session.get(DailyPlanORM, plan_date)
            if not orm:
                return False
            await session.delete(orm)
            await session.commit()
            return True
