"""
SQLite implementation of productive activity repository.
"""

from __future__ import annotations

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select

from dayplan.core.exceptions import NotFoundError
from dayplan.infrastructure.local.database import (
    ProductiveActivityORM,
    ensure_aware,
    get_session_factory,
)
from dayplan.interfaces.activity_repository import IActivityRepository
from dayplan.models.activity import (
    ProductiveActivity,
    ProductiveActivityCreate,
    ProductiveActivityUpdate,
)
from dayplan.models.enums import ActivityCategory
from dayplan.utils.datetime_utils import now_utc


class SqliteActivityRepository(IActivityRepository):
    """SQLite implementation of productive activity repository."""

    def __init__(self, session_factory=None):
        self._session_factory = session_factory or get_session_factory()

    def _orm_to_model(self, orm: ProductiveActivityORM) -> ProductiveActivity:
        return ProductiveActivity(
            id=UUID(orm.id),
            name=orm.name,
            description=orm.description,
            category=ActivityCategory(orm.category),
            estimated_duration=orm.estimated_duration,
            is_active=bool(orm.is_active),
            created_at=ensure_aware(orm.created_at),
            updated_at=ensure_aware(orm.updated_at),
        )

    async def _get_orm(self, session, activity_id: UUID) -> Optional[ProductiveActivityORM]:  # noqa: ANN001
        result = await session.execute(
            select(ProductiveActivityORM).where(ProductiveActivityORM.id == str(activity_id))
        )
        return result.scalar_one_or_none()

    async def create(self, data: ProductiveActivityCreate) -> ProductiveActivity:
        async with self._session_factory() as session:
            now = now_utc()
            orm = ProductiveActivityORM(
                id=str(uuid4()),
                name=data.name,
                description=data.description,
                category=data.category.value,
                estimated_duration=data.estimated_duration,
                is_active=data.is_active,
                created_at=now,
                updated_at=now,
            )
            session.add(orm)
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def get(self, activity_id: UUID) -> Optional[ProductiveActivity]:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, activity_id)
            return self._orm_to_model(orm) if orm else None

    async def list(self, include_inactive: bool = True) -> list[ProductiveActivity]:
        async with self._session_factory() as session:
            query = select(ProductiveActivityORM)
            if not include_inactive:
                query = query.where(ProductiveActivityORM.is_active == True)  # noqa: E712
            query = query.order_by(ProductiveActivityORM.created_at.asc())
            result = await session.execute(query)
            return [self._orm_to_model(orm) for orm in result.scalars().all()]

    async def list_active(self) -> list[ProductiveActivity]:
        return await self.list(include_inactive=False)

    async def update(
        self, activity_id: UUID, update: ProductiveActivityUpdate
    ) -> ProductiveActivity:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, activity_id)
            if not orm:
                raise NotFoundError(f"ProductiveActivity {activity_id} not found")

            update_data = update.model_dump(exclude_unset=True)
            for field, value in update_data.items():
                if value is None and field not in ("description", "estimated_duration"):
                    continue
                if field == "category":
                    value = value.value
                setattr(orm, field, value)

            orm.updated_at = now_utc()
            await session.commit()
            await session.refresh(orm)
            return self._orm_to_model(orm)

    async def delete(self, activity_id: UUID) -> bool:
        async with self._session_factory() as session:
            orm = await self._get_orm(session, activity_id)
            if not orm:
                return False
            await session.delete(orm)
            await session.commit()
            return True
