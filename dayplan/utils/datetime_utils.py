"""
Timezone-aware datetime utilities.

Plans are keyed by calendar date while scheduled times are absolute,
timezone-aware timestamps anchored to the configured zone.
"""

from datetime import date, datetime, time, timezone
from zoneinfo import ZoneInfo

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.
    """
    return datetime.now(UTC)


def get_user_today(user_timezone: str) -> date:
    """
    Get today's date in the given timezone.

    Example:
        >>> get_user_today("Asia/Tokyo")  # When UTC is 2024-01-19 23:00
        date(2024, 1, 20)
    """
    tz = ZoneInfo(user_timezone)
    return datetime.now(UTC).astimezone(tz).date()


def local_datetime(day: date, hour: int, minute: int, user_timezone: str) -> datetime:
    """Build an aware datetime for a wall-clock time on a date in the given zone."""
    return datetime.combine(day, time(hour, minute), tzinfo=ZoneInfo(user_timezone))


def to_timezone(dt: datetime, user_timezone: str) -> datetime:
    """
    Convert a datetime to the given zone.

    Naive datetimes are taken to already be wall-clock times in that zone.
    """
    tz = ZoneInfo(user_timezone)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)

