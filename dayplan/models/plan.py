"""
Daily plan models.

A plan holds the items for one calendar date together with derived progress.
Items carry a tagged ``source`` telling real goals apart from habit instances.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from dayplan.models.enums import ItemKind, ScheduleStatus


class ScheduledTime(BaseModel):
    """Absolute [start, end) interval of a scheduled item."""

    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _check_order(self) -> "ScheduledTime":
        if self.end <= self.start:
            raise ValueError("scheduled end must be after start")
        return self

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)


class GoalSource(BaseModel):
    kind: Literal["goal"] = "goal"
    goal_id: UUID


class AutomaticGoalSource(BaseModel):
    kind: Literal["automatic"] = "automatic"
    goal_id: UUID


class HabitSource(BaseModel):
    kind: Literal["habit"] = "habit"
    habit_id: UUID


class ActivitySource(BaseModel):
    kind: Literal["activity"] = "activity"
    activity_id: UUID


ItemSource = Annotated[
    Union[GoalSource, AutomaticGoalSource, HabitSource, ActivitySource],
    Field(discriminator="kind"),
]


class PlanItem(BaseModel):
    """Schedulable unit inside a day plan."""

    id: UUID
    title: str
    description: Optional[str] = None
    completed: bool = False
    scheduled_time: Optional[ScheduledTime] = None
    is_automatic: bool = False
    has_timer: bool = False
    category: Optional[str] = None
    color: Optional[str] = None
    created_at: datetime
    source: ItemSource

    @property
    def kind(self) -> ItemKind:
        return ItemKind(self.source.kind)

    @property
    def is_habit(self) -> bool:
        return self.source.kind == ItemKind.HABIT.value

    @property
    def duration_minutes(self) -> Optional[int]:
        if self.scheduled_time is None:
            return None
        return self.scheduled_time.duration_minutes

    def source_key(self) -> tuple[str, UUID]:
        """Identity of the library entry this item was derived from.

        Goal and automatic-goal instances share a key so the same library goal
        never appears twice in one plan.
        """
        source = self.source
        if isinstance(source, (GoalSource, AutomaticGoalSource)):
            return ("goal", source.goal_id)
        if isinstance(source, HabitSource):
            return ("habit", source.habit_id)
        return ("activity", self.id)


class DailyPlan(BaseModel):
    """Composed plan for one calendar date."""

    plan_date: date
    goals: list[PlanItem] = Field(default_factory=list)
    goals_completed: int = 0
    total_goals: int = 0
    progress: float = Field(0.0, ge=0, le=1)
    habits_completed: int = 0
    total_habits: int = 0
    habit_progress: float = Field(0.0, ge=0, le=1)
    updated_at: Optional[datetime] = None

    def find_item(self, item_id: UUID) -> Optional[PlanItem]:
        return next((item for item in self.goals if item.id == item_id), None)

    def scheduled_items(self) -> list[PlanItem]:
        return [item for item in self.goals if item.scheduled_time is not None]

    def replace_item(self, updated: PlanItem) -> "DailyPlan":
        """Return a copy with the item of the same id replaced."""
        goals = [updated if item.id == updated.id else item for item in self.goals]
        return self.model_copy(update={"goals": goals})


class TimeSlot(BaseModel):
    """Start time on the time grid."""

    model_config = ConfigDict(frozen=True)

    hour: int = Field(..., ge=0, le=23)
    minute: int = Field(..., ge=0, le=59)

    @property
    def minutes_of_day(self) -> int:
        return self.hour * 60 + self.minute

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


class ScheduleRequest(BaseModel):
    """Optional pre-scheduling when adding an item to a date."""

    slot: TimeSlot
    duration_minutes: int
    confirm: bool = Field(False, description="Schedule anyway when conflicts exist")


class ScheduleOutcome(BaseModel):
    """Result of a scheduling mutation.

    ``plan`` is the plan after the operation; it equals the input plan unless
    ``status`` is ``committed``.
    """

    status: ScheduleStatus
    item_id: Optional[UUID] = None
    scheduled_time: Optional[ScheduledTime] = None
    conflicts: list[PlanItem] = Field(default_factory=list)
    overridden: bool = False
    message: Optional[str] = None
    plan: DailyPlan

    @property
    def committed(self) -> bool:
        return self.status == ScheduleStatus.COMMITTED


class FreeSlot(BaseModel):
    """Grid slot where an item of the requested length fits without conflict."""

    slot: TimeSlot
    start: datetime
    end: datetime
