"""
SQLite implementation of the habit registry.
"""

from __future__ import annotations

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import and_, delete as sa_delete, select

from dayplan.core.exceptions import NotFoundError
from dayplan.infrastructure.local.database import (
    HabitEntryORM,
    HabitORM,
    ensure_aware,
    get_session_factory,
)
from dayplan.interfaces.habit_registry import IHabitRegistry
from dayplan.models.enums import HabitCategory
from dayplan.models.habit import Habit, HabitCreate, HabitEntry, HabitUpdate
from dayplan.utils.datetime_utils import now_utc


class SqliteHabitRegistry(IHabitRegistry):
    """SQLite implementation of the habit registry."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: HabitORM) -> Habit:
        return Habit(
            id=UUID(orm.id),
            title=orm.title,
            description=orm.description,
            category=HabitCategory(orm.category),
            color=orm.color,
            is_active=bool(orm.is_active),
            target_count=orm.target_count,
            unit=orm.unit,
            created_at=ensure_aware(orm.created_at),
            updated_at=ensure_aware(orm.updated_at),
        )

    def _entry_to_model(self, orm: HabitEntryORM) -> HabitEntry:
        return HabitEntry(
            habit_id=UUID(orm.habit_id),
            entry_date=orm.entry_date,
            completed=bool(orm.completed),
            count=orm.count,
            updated_at=ensure_aware(orm.updated_at),
        )

    async def _get_orm(self, session, habit_id: UUID) -> Optional[HabitORM]:  # noqa: ANN001
        result = await session.execute(select(HabitORM).where(HabitORM.id == str(habit_id)))
        return result.scalar_one_or_none()

    async def create(self, data: HabitCreate) -> Habit:
        """Create a new habit."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = HabitORM(
                id=str(uuid4()),
                title=data.title,
                description=data.description,
                category=data.category.value,
                color=data.color,
                is_active=data.is_active,
                target_count=data.target_count,
                unit=data.unit,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, habit_id: UUID) -> Optional[Habit]:
        """Get a habit by ID."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, habit_id)
            return self._orm_to_model(orm) if orm else None

    async def list(self, include_inactive: bool = True) -> list[Habit]:
        """List habits."""
        async with self._session_factory() as session:
            query = select(HabitORM)
            if not include_inactive:
                query = query.where(HabitORM.is_active == True)  # noqa: E712
            query = query.order_by(HabitORM.created_at.asc())
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_active(self) -> list[Habit]:
        """List active habits."""
        return await self.list(include_inactive=False)

    async def update(self, habit_id: UUID, update: HabitUpdate) -> Habit:
        """Update a habit."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, habit_id)
            if not orm:
                raise NotFoundError(f"Habit {habit_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None and field not in ("description", "target_count", "unit"):
                    continue
                if field == "category":
                    value = value.value
                setattr(orm, field, value)

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, habit_id: UUID) -> bool:
        """Delete a habit and its entries."""
        async with self._session_factory() as session:
            orm = await self._get_orm(session, habit_id)
            if not orm:
                return False
            await session.execute(
                sa_delete(HabitEntryORM).where(HabitEntryORM.habit_id == str(habit_id))
            )
            await session.delete(orm)
            await session.commit()
            return True

    async def record_habit_entry(
        self,
        habit_id: UUID,
        entry_date: date,
        completed: bool,
        count: Optional[int] = None,
    ) -> HabitEntry:
        """Insert or update the entry for (habit_id, entry_date)."""
        async with self._session_factory() as session:
            if not await self._get_orm(session, habit_id):
                raise NotFoundError(f"Habit {habit_id} not found")

            result = await session.execute(
                select(HabitEntryORM).where(
                    and_(
                        HabitEntryORM.habit_id == str(habit_id),
                        HabitEntryORM.entry_date == entry_date,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            if orm:
                orm.completed = completed
                if count is not None:
                    orm.count = count
                orm.updated_at = now_utc()
            else:
                orm = HabitEntryORM(
                    id=str(uuid4()),
                    habit_id=str(habit_id),
                    entry_date=entry_date,
                    completed=completed,
                    count=count,
                    updated_at=now_utc(),
                )
                session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._entry_to_model(orm)

    async def get_entry(self, habit_id: UUID, entry_date: date) -> Optional[HabitEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(HabitEntryORM).where(
                    and_(
                        HabitEntryORM.habit_id == str(habit_id),
                        HabitEntryORM.entry_date == entry_date,
                    )
                )
            )
            orm = result.scalar_one_or_none()
            return self._entry_to_model(orm) if orm else None

    async def list_entries(
        self,
        habit_id: Optional[UUID] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[HabitEntry]:
        async with self._session_factory() as session:
            conditions = []
            if habit_id is not None:
                conditions.append(HabitEntryORM.habit_id == str(habit_id))
            if start_date is not None:
                conditions.append(HabitEntryORM.entry_date >= start_date)
            if end_date is not None:
                conditions.append(HabitEntryORM.entry_date <= end_date)

            query = select(HabitEntryORM)
            if conditions:
                query = query.where(and_(*conditions))
            query = query.order_by(HabitEntryORM.entry_date.asc())
            result = await session.execute(query)
            return [self._entry_to_model(orm) for orm in result.scalars().all()]
