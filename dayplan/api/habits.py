"""
Habit API endpoints.

Deactivating a habit stops new daily instances; instances already in plans stay.
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from dayplan.api.deps import HabitRegistry
from dayplan.core.exceptions import NotFoundError
from dayplan.models.habit import Habit, HabitCreate, HabitEntry, HabitEntryCreate, HabitUpdate

router = APIRouter()


@router.post("", response_model=Habit, status_code=status.HTTP_201_CREATED)
async def create_habit(payload: HabitCreate, repo: HabitRegistry) -> Habit:
    return await repo.create(payload)


@router.get("", response_model=list[Habit])
async def list_habits(
    repo: HabitRegistry,
    include_inactive: bool = Query(False, description="Include inactive habits"),
) -> list[Habit]:
    return await repo.list(include_inactive=include_inactive)


@router.get("/{habit_id}", response_model=Habit)
async def get_habit(habit_id: UUID, repo: HabitRegistry) -> Habit:
    result = await repo.get(habit_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Habit {habit_id} not found",
        )
    return result


@router.patch("/{habit_id}", response_model=Habit)
async def update_habit(habit_id: UUID, update: HabitUpdate, repo: HabitRegistry) -> Habit:
    try:
        return await repo.update(habit_id, update)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete("/{habit_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_habit(habit_id: UUID, repo: HabitRegistry) -> None:
    """Delete a habit and its entries."""
    deleted = await repo.delete(habit_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Habit {habit_id} not found",
        )


# ===========================================
# Entries
# ===========================================


@router.put("/{habit_id}/entries", response_model=HabitEntry)
async def record_entry(
    habit_id: UUID,
    payload: HabitEntryCreate,
    repo: HabitRegistry,
) -> HabitEntry:
    """Record a habit for a date. Recording the same date again updates the entry."""
    try:
        return await repo.record_habit_entry(
            habit_id,
            payload.entry_date,
            payload.completed,
            count=payload.count,
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.get("/{habit_id}/entries", response_model=list[HabitEntry])
async def list_entries(
    habit_id: UUID,
    repo: HabitRegistry,
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
) -> list[HabitEntry]:
    return await repo.list_entries(habit_id=habit_id, start_date=start_date, end_date=end_date)
