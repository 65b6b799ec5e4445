from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from .. import crud
from ..db import get_session
from ..schemas import ProjectCreate, ProjectOut, ProjectProgress, ProjectUpdate

router = APIRouter()


@router.post("", response_model=ProjectOut)
async def create_project(payload: ProjectCreate, db: AsyncSession = Depends(get_session)):
    return await crud.create_project(db, payload)


@router.get("", response_model=list[ProjectOut])
async def list_projects(
    limit: int = Query(100, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_session),
):
    return await crud.list_projects(db, limit=limit, offset=offset)


@router.get("/{project_id}", response_model=ProjectOut)
async def get_project(project_id: int, db: AsyncSession = Depends(get_session)):
    project = await crud.get_project(db, project_id)
    if not project:
        raise HTTPException(404, "Project not found")
    return project


@router.get("/{project_id}/progress", response_model=ProjectProgress)
async def get_project_progress(project_id: int, db: AsyncSession = Depends(get_session)):
    if not await crud.get_project(db, project_id):
        raise HTTPException(404, "Project not found")
    return await crud.project_progress(db, project_id)


@router.patch("/{project_id}", response_model=ProjectOut)
async def update_project(project_id: int, payload: ProjectUpdate, db: AsyncSession = Depends(get_session)):
    project = await crud.update_project(db, project_id, payload)
    if not project:
        raise HTTPException(404, "Project not found")
    return project


@router.delete("/{project_id}")
async def delete_project(project_id: int, db: AsyncSession = Depends(get_session)):
    ok = await crud.delete_project(db, project_id)
    if not ok:
        raise HTTPException(404, "Project not found")
    return {"deleted": True}
