"""
Conflict detection between scheduled plan items.
"""

from __future__ import annotations

from typing import Iterable, Optional
from uuid import UUID

from dayplan.models.plan import PlanItem, ScheduledTime


def intervals_overlap(a: ScheduledTime, b: ScheduledTime) -> bool:
    """Half-open overlap test. Touching intervals (a.end == b.start) do not overlap."""
    return a.start < b.end and a.end > b.start


def find_conflicts(
    candidate: ScheduledTime,
    items: Iterable[PlanItem],
    exclude_item_id: Optional[UUID] = None,
) -> list[PlanItem]:
    """
    Items whose scheduled interval overlaps the candidate interval.

    Args:
        candidate: Proposed interval
        items: Items of the day, scheduled or not
        exclude_item_id: The item being placed, never compared with itself

    Returns:
        Overlapping items in plan order; empty when there is no conflict
    """
    return [
        item
        for item in items
        if item.id != exclude_item_id
        and item.scheduled_time is not None
        and intervals_overlap(candidate, item.scheduled_time)
    ]
