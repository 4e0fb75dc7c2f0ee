"""
Time grid for a day.

Defines the discrete start times that can be scheduled within a bounded
hour range, and converts between slots and absolute timestamps.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dayplan.core.config import Settings
from dayplan.core.exceptions import InvalidIntervalError, ValidationError
from dayplan.models.plan import TimeSlot
from dayplan.utils.datetime_utils import local_datetime, to_timezone


class TimeGrid:
    """
    Discretized schedulable slots for a day.

    Slots are start times in ``[start_hour:00, end_hour:00)`` every
    ``slot_minutes`` minutes. Instances hold only their parameters, so every
    method is a pure function of its arguments.
    """

    def __init__(
        self,
        start_hour: int = 6,
        end_hour: int = 22,
        slot_minutes: int = 30,
        timezone: str = "UTC",
    ):
        if slot_minutes <= 0 or 60 % slot_minutes != 0:
            raise ValidationError(f"slot_minutes must divide 60, got {slot_minutes}")
        if not 0 <= start_hour < end_hour <= 24:
            raise ValidationError(
                f"invalid hour range {start_hour}-{end_hour}",
                details={"start_hour": start_hour, "end_hour": end_hour},
            )
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValidationError(f"unknown timezone {timezone!r}") from exc

        self.start_hour = start_hour
        self.end_hour = end_hour
        self.slot_minutes = slot_minutes
        self.timezone = timezone

    @classmethod
    def from_settings(cls, settings: Settings, slot_minutes: Optional[int] = None) -> "TimeGrid":
        """Build a grid from settings. Defaults to the schedule-builder granularity."""
        return cls(
            start_hour=settings.DAY_START_HOUR,
            end_hour=settings.DAY_END_HOUR,
            slot_minutes=slot_minutes or settings.SCHEDULE_SLOT_MINUTES,
            timezone=settings.TIMEZONE,
        )

    @property
    def _start_minutes(self) -> int:
        return self.start_hour * 60

    @property
    def _end_minutes(self) -> int:
        return self.end_hour * 60

    @property
    def slot_count(self) -> int:
        return (self._end_minutes - self._start_minutes) // self.slot_minutes

    def slot_at(self, index: int) -> TimeSlot:
        """Slot descriptor for an index on the grid."""
        if not 0 <= index < self.slot_count:
            raise ValidationError(f"slot index {index} outside grid")
        minutes = self._start_minutes + index * self.slot_minutes
        return TimeSlot(hour=minutes // 60, minute=minutes % 60)

    def slots_for(self, day: date) -> list[TimeSlot]:
        """All slots of the day in chronological order.

        Slots are wall-clock start times, so the sequence is the same for every date.
        """
        return [self.slot_at(index) for index in range(self.slot_count)]

    def is_on_grid(self, slot: TimeSlot) -> bool:
        offset = slot.minutes_of_day - self._start_minutes
        return 0 <= offset < self._end_minutes - self._start_minutes and offset % self.slot_minutes == 0

    def to_timestamp(self, day: date, slot: TimeSlot) -> datetime:
        """Absolute, timezone-aware start time of a slot on a date."""
        if not self.is_on_grid(slot):
            raise InvalidIntervalError(
                f"slot {slot.label} is not on the {self.slot_minutes}-minute grid "
                f"{self.start_hour:02d}:00-{self.end_hour:02d}:00"
            )
        return local_datetime(day, slot.hour, slot.minute, self.timezone)

    def end_of_day(self, day: date) -> datetime:
        """Timestamp where the grid's range ends on a date."""
        start_of_day = local_datetime(day, 0, 0, self.timezone)
        return start_of_day + timedelta(minutes=self._end_minutes)

    def _minutes_into_day(self, timestamp: datetime) -> tuple[date, float]:
        local = to_timezone(timestamp, self.timezone)
        minutes = local.hour * 60 + local.minute + local.second / 60 + local.microsecond / 60_000_000
        return local.date(), minutes

    def slot_index_at(self, timestamp: datetime) -> Optional[int]:
        """Index of the slot containing ``timestamp``, or None outside the grid range."""
        _, minutes = self._minutes_into_day(timestamp)
        if minutes < self._start_minutes or minutes >= self._end_minutes:
            return None
        return int((minutes - self._start_minutes) // self.slot_minutes)

    def snap(self, timestamp: datetime) -> TimeSlot:
        """
        Nearest slot to a timestamp, clamped to the grid bounds.

        A timestamp exactly halfway between two slots snaps to the later one.
        """
        _, minutes = self._minutes_into_day(timestamp)
        offset = (minutes - self._start_minutes) / self.slot_minutes
        index = int(offset + 0.5) if offset >= 0 else 0
        index = max(0, min(index, self.slot_count - 1))
        return self.slot_at(index)
