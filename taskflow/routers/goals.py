from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from .. import crud
from ..db import get_session
from ..models import GoalHorizon
from ..schemas import GoalCreate, GoalOut, GoalUpdate

router = APIRouter()


async def _check_area(db: AsyncSession, area_id: str | None) -> None:
    if area_id is not None and not await crud.get_area(db, area_id):
        raise HTTPException(400, f"Area {area_id!r} does not exist")


@router.post("", response_model=GoalOut)
async def create_goal(payload: GoalCreate, db: AsyncSession = Depends(get_session)):
    await _check_area(db, payload.area_id)
    return await crud.create_goal(db, payload)


@router.get("", response_model=list[GoalOut])
async def list_goals(
    horizon: GoalHorizon | None = Query(None, description="1-year, 3-year, 5-year or vision"),
    area_id: str | None = None,
    db: AsyncSession = Depends(get_session),
):
    return await crud.list_goals(db, horizon=horizon, area_id=area_id)


@router.get("/{goal_id}", response_model=GoalOut)
async def get_goal(goal_id: int, db: AsyncSession = Depends(get_session)):
    goal = await crud.get_goal(db, goal_id)
    if not goal:
        raise HTTPException(404, "Goal not found")
    return goal


@router.patch("/{goal_id}", response_model=GoalOut)
async def update_goal(goal_id: int, payload: GoalUpdate, db: AsyncSession = Depends(get_session)):
    await _check_area(db, payload.area_id)
    goal = await crud.update_goal(db, goal_id, payload)
    if not goal:
        raise HTTPException(404, "Goal not found")
    return goal


@router.delete("/{goal_id}")
async def delete_goal(goal_id: int, db: AsyncSession = Depends(get_session)):
    ok = await crud.delete_goal(db, goal_id)
    if not ok:
        raise HTTPException(404, "Goal not found")
    return {"deleted": True}
