"""
Productive activity API endpoints.
"""

from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status

from dayplan.api.deps import ActivityRepo
from dayplan.core.exceptions import NotFoundError
from dayplan.models.activity import (
    ProductiveActivity,
    ProductiveActivityCreate,
    ProductiveActivityUpdate,
)

router = APIRouter()


@router.post("", response_model=ProductiveActivity, status_code=status.HTTP_201_CREATED)
async def create_activity(
    payload: ProductiveActivityCreate,
    repo: ActivityRepo,
) -> ProductiveActivity:
    return await repo.create(payload)


@router.get("", response_model=list[ProductiveActivity])
async def list_activities(
    repo: ActivityRepo,
    include_inactive: bool = Query(False, description="Include inactive activities"),
) -> list[ProductiveActivity]:
    """List activities, active ones only unless asked otherwise."""
    return await repo.list(include_inactive=include_inactive)


@router.get("/{activity_id}", response_model=ProductiveActivity)
async def get_activity(activity_id: UUID, repo: ActivityRepo) -> ProductiveActivity:
    result = await repo.get(activity_id)
    if not result:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"ProductiveActivity {activity_id} not found",
        )
    return result


@router.patch("/{activity_id}", response_model=ProductiveActivity)
async def update_activity(
    activity_id: UUID,
    update: ProductiveActivityUpdate,
    repo: ActivityRepo,
) -> ProductiveActivity:
    try:
        return await repo.update(activity_id, update)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc


@router.delete("/{activity_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_activity(activity_id: UUID, repo: ActivityRepo) -> None:
    deleted = await repo.delete(activity_id)
    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"ProductiveActivity {activity_id} not found",
        )
