import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from ..crud import create_task, find_project_by_name
from ..db import get_session
from ..models import TaskStatus
from ..nlp.parser import ParsedTaskDraft, parse_task_input
from ..schemas import TaskCreate, TaskOut

logger = logging.getLogger(__name__)

router = APIRouter()


class IngestIn(BaseModel):
    text: str = Field(..., min_length=1)
    description: str | None = None


@router.post("/preview", response_model=ParsedTaskDraft)
def preview(payload: IngestIn):
    """Parse a quick-add line without storing anything."""
    return parse_task_input(payload.text)


@router.post("", response_model=TaskOut)
async def ingest(payload: IngestIn, db: AsyncSession = Depends(get_session)):
    draft = parse_task_input(payload.text)
    logger.debug("Parsed %r into %s", payload.text, draft.model_dump())
    if not draft.title:
        raise HTTPException(400, "Nothing left for a title after parsing")

    project_id = None
    if draft.project_name:
        project = await find_project_by_name(db, draft.project_name)
        if project:
            project_id = project.id
            logger.info("Matched project %r for pro:%s", project.title, draft.project_name)
        else:
            logger.info("No project matches pro:%s, leaving task unassigned", draft.project_name)

    try:
        task = TaskCreate(
            title=draft.title,
            description=payload.description,
            status=draft.status or TaskStatus.inbox,
            priority=draft.priority,
            context=draft.context,
            project_id=project_id,
            due_date=_iso_or_none(draft.due_date),
            tags=list(draft.tags),
        )
    except ValidationError as exc:
        raise HTTPException(400, f"Quick-add line does not make a valid task: {exc.errors()[0]['msg']}") from exc
    return await create_task(db, task)


def _iso_or_none(value: str | None) -> date | None:
    # YYYY-MM-DD tokens pass the parser unchecked, e.g. 2024-02-30
    if value is None:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning("Dropping impossible due date %s", value)
        return None
