from typing import Literal

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from .. import crud
from ..db import get_session
from ..models import Context, TaskStatus
from ..schemas import TaskCreate, TaskMove, TaskOut, TaskStats, TaskUpdate

router = APIRouter()


async def _check_project(db: AsyncSession, project_id: int | None) -> None:
    if project_id is not None and not await crud.get_project(db, project_id):
        raise HTTPException(400, f"Project {project_id} does not exist")


@router.post("", response_model=TaskOut)
async def create_task(payload: TaskCreate, db: AsyncSession = Depends(get_session)):
    await _check_project(db, payload.project_id)
    return await crud.create_task(db, payload)


@router.get("", response_model=list[TaskOut])
async def list_tasks(
    status: TaskStatus | None = Query(None, description="Filter by GTD bucket"),
    project_id: int | None = None,
    context: Context | None = Query(None, description="Filter by context, e.g. @phone"),
    due: Literal["today", "overdue", "soon"] | None = Query(None, description="Open tasks in a due window"),
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
):
    return await crud.list_tasks(
        db,
        status=status,
        project_id=project_id,
        context=context.value if context else None,
        due=due,
        limit=limit,
        offset=offset,
    )


@router.get("/stats", response_model=TaskStats)
async def task_stats(db: AsyncSession = Depends(get_session)):
    return await crud.task_stats(db)


@router.get("/{task_id}", response_model=TaskOut)
async def get_task(task_id: int, db: AsyncSession = Depends(get_session)):
    task = await crud.get_task(db, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.patch("/{task_id}", response_model=TaskOut)
async def update_task(task_id: int, payload: TaskUpdate, db: AsyncSession = Depends(get_session)):
    await _check_project(db, payload.project_id)
    task = await crud.update_task(db, task_id, payload)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.post("/{task_id}/complete", response_model=TaskOut)
async def complete_task(task_id: int, db: AsyncSession = Depends(get_session)):
    task = await crud.complete_task(db, task_id)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.post("/{task_id}/move", response_model=TaskOut)
async def move_task(task_id: int, payload: TaskMove, db: AsyncSession = Depends(get_session)):
    task = await crud.move_task(db, task_id, payload.status)
    if not task:
        raise HTTPException(404, "Task not found")
    return task


@router.delete("/{task_id}")
async def delete_task(task_id: int, db: AsyncSession = Depends(get_session)):
    ok = await crud.delete_task(db, task_id)
    if not ok:
        raise HTTPException(404, "Task not found")
    return {"deleted": True}
