"""
SQLite implementation of the goal library.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select

from dayplan.core.exceptions import NotFoundError
from dayplan.infrastructure.local.database import LibraryGoalORM, ensure_aware, get_session_factory
from dayplan.interfaces.goal_library import IGoalLibrary
from dayplan.models.goal import LibraryGoal, LibraryGoalCreate, LibraryGoalUpdate
from dayplan.utils.datetime_utils import now_utc


class SqliteGoalLibrary(IGoalLibrary):
    """SQLite implementation of the goal library."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: LibraryGoalORM) -> LibraryGoal:
        """Convert ORM object to Pydantic model."""
        return LibraryGoal(
            id=UUID(orm.id),
            title=orm.title,
            description=orm.description,
            is_automatic=bool(orm.is_automatic),
            has_timer=bool(orm.has_timer),
            created_at=ensure_aware(orm.created_at),
            updated_at=ensure_aware(orm.updated_at),
        )

    async def create(self, data: LibraryGoalCreate) -> LibraryGoal:
        """Create a new library goal."""
        async with self._session_factory() as session:
            now = now_utc()
            orm = LibraryGoalORM(
                id=str(uuid4()),
                title=data.title,
                description=data.description,
                is_automatic=data.is_automatic,
                has_timer=data.has_timer,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, goal_id: UUID) -> Optional[LibraryGoal]:
        """Get a library goal by ID."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(LibraryGoalORM).where(LibraryGoalORM.id == str(goal_id))
            )
            orm = result.scalar_one_or_none()
            return self._orm_to_model(orm) if orm else None

    async def list(self) -> list[LibraryGoal]:
        """List all library goals."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(LibraryGoalORM).order_by(LibraryGoalORM.created_at.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_automatic(self) -> list[LibraryGoal]:
        """List automatic goals."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(LibraryGoalORM)
                .where(LibraryGoalORM.is_automatic == True)  # noqa: E712
                .order_by(LibraryGoalORM.created_at.asc())
            )
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def update(self, goal_id: UUID, update: LibraryGoalUpdate) -> LibraryGoal:
        """Update a library goal."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(LibraryGoalORM).where(LibraryGoalORM.id == str(goal_id))
            )
            orm = result.scalar_one_or_none()
            if not orm:
                raise NotFoundError(f"LibraryGoal {goal_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None and field != "description":
                    continue
                setattr(orm, field, value)

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, goal_id: UUID) -> bool:
        """Delete a library goal."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(LibraryGoalORM).where(LibraryGoalORM.id == str(goal_id))
            )
            orm = result.scalar_one_or_none()
            if not orm:
                return False

            await session.delete(orm)
            await session.commit()
            return True
