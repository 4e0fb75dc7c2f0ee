"""
SQLite database configuration and ORM models.

This module defines the SQLAlchemy ORM models and database initialization.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from dayplan.core.config import get_settings
from dayplan.core.exceptions import InfrastructureError
from dayplan.utils.datetime_utils import UTC, now_utc


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


# ===========================================
# ORM Models
# ===========================================


class LibraryGoalORM(Base):
    """Library goal ORM model."""

    __tablename__ = "library_goals"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(500), nullable=False)
    description = Column(Text, nullable=True)
    is_automatic = Column(Boolean, default=False, index=True)
    has_timer = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class HabitORM(Base):
    """Habit ORM model."""

    __tablename__ = "habits"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(20), default="health")
    color = Column(String(20), nullable=True)
    is_active = Column(Boolean, default=True, index=True)
    target_count = Column(Integer, nullable=True)
    unit = Column(String(50), nullable=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class HabitEntryORM(Base):
    """Habit completion per date."""

    __tablename__ = "habit_entries"
    __table_args__ = (UniqueConstraint("habit_id", "entry_date", name="uq_habit_entry_date"),)

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    habit_id = Column(String(36), nullable=False, index=True)
    entry_date = Column(Date, nullable=False, index=True)
    completed = Column(Boolean, default=False)
    count = Column(Integer, nullable=True)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class ProductiveActivityORM(Base):
    """Productive activity ORM model."""

    __tablename__ = "productive_activities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(20), default="mind")
    estimated_duration = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True, index=True)
    created_at = Column(DateTime(timezone=True), default=now_utc)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


class DailyPlanORM(Base):
    """Daily plan ORM model. Items are stored as a JSON document."""

    __tablename__ = "daily_plans"

    plan_date = Column(Date, primary_key=True)
    goals_json = Column(JSON, nullable=False, default=list)
    goals_completed = Column(Integer, default=0)
    total_goals = Column(Integer, default=0)
    progress = Column(Float, default=0.0)
    habits_completed = Column(Integer, default=0)
    total_habits = Column(Integer, default=0)
    habit_progress = Column(Float, default=0.0)
    updated_at = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)


# ===========================================
# Database Session Management
# ===========================================


def get_engine():
    """Get async engine instance."""
    settings = get_settings()
    return create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG and settings.LOG_LEVEL == "DEBUG")


def get_session_factory():
    """Get async session factory."""
    engine = get_engine()
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def init_db():
    """Initialize database tables."""
    engine = get_engine()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except SQLAlchemyError as e:
        raise InfrastructureError(f"Database initialization failed: {e}") from e
    finally:
        await engine.dispose()


def ensure_aware(value: datetime) -> datetime:
    """SQLite drops tzinfo on read; stored values are UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
