"""
Goal library API endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from dayplan.api.deps import GoalLibrary
from dayplan.core.exceptions import NotFoundError
from dayplan.models.goal import LibraryGoal, LibraryGoalCreate, LibraryGoalUpdate

router = APIRouter()


@router.post("", response_model=LibraryGoal, status_code=status.HTTP_201_CREATED)
async def create_goal(payload: LibraryGoalCreate, repo: GoalLibrary) -> LibraryGoal:
    """Create a library goal. Automatic goals appear on every day from the next plan access."""
    return await repo.create(payload)


@router.get("", response_model=list[LibraryGoal])
async def list_goals(
    repo: GoalLibrary,
    automatic_only: bool = Query(False, description="Only goals added to every day"),
) -> list[LibraryGoal]:
    if automatic_only:
        return await repo.list_automatic()
    return await repo.list()


@router.get("/{goal_id}", response_model=LibraryGoal)
async def get_goal(goal_id: UUID, repo: GoalLibrary) -> LibraryGoal:
    result = await repo.get(goal_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"LibraryGoal {goal_id} not found",
        )
    return result


@router.patch("/{goal_id}", response_model=LibraryGoal)
async def update_goal(
    goal_id: UUID,
    update: LibraryGoalUpdate,
    repo: GoalLibrary,
) -> LibraryGoal:
    """Update a library goal. Instances already in plans are left as they are."""
    try:
        return await repo.update(goal_id, update)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete("/{goal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goal(goal_id: UUID, repo: GoalLibrary) -> None:
    deleted = await repo.delete(goal_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"LibraryGoal {goal_id} not found",
        )
