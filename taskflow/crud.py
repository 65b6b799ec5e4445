import logging
from collections.abc import Iterable
from datetime import date, datetime

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from .config import AreaSeed
from .models import Area, Goal, GoalHorizon, Project, ProjectStatus, Task, TaskStatus
from .schemas import (
    GoalCreate,
    GoalUpdate,
    ProjectCreate,
    ProjectProgress,
    ProjectUpdate,
    TaskCreate,
    TaskStats,
    TaskUpdate,
)
from .utils.dates import DUE_CHECKS, DueFilter, local_today
from .utils.text import slugify_title

logger = logging.getLogger(__name__)


# --- tasks ---


def _stamp_completion(task: Task) -> None:
    # completed_at follows the status: set on entering done, cleared on leaving it
    if task.status == TaskStatus.done:
        if task.completed_at is None:
            task.completed_at = datetime.utcnow()
    else:
        task.completed_at = None


async def create_task(db: AsyncSession, payload: TaskCreate) -> Task:
    task = Task(**payload.model_dump())
    _stamp_completion(task)
    db.add(task)
    await db.commit()
    await db.refresh(task)
    logger.info("Created task %s in %s", task.id, task.status.value)
    return task


async def get_task(db: AsyncSession, task_id: int) -> Task | None:
    res = await db.execute(select(Task).where(Task.id == task_id))
    return res.scalar_one_or_none()


async def list_tasks(
    db: AsyncSession,
    status: TaskStatus | None = None,
    project_id: int | None = None,
    context: str | None = None,
    due: DueFilter | None = None,
    today: date | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[Task]:
    stmt = select(Task).order_by(Task.created_at.desc(), Task.id.desc())
    if status:
        stmt = stmt.where(Task.status == TaskStatus(status))
    if project_id is not None:
        stmt = stmt.where(Task.project_id == project_id)
    if context:
        stmt = stmt.where(Task.context == context)
    if due is None:
        stmt = stmt.limit(limit).offset(offset)
        res = await db.execute(stmt)
        return list(res.scalars().all())

    # due windows are evaluated in Python against the local date
    today = today or local_today()
    check = DUE_CHECKS[due]
    stmt = stmt.where(Task.status != TaskStatus.done, Task.due_date.is_not(None))
    res = await db.execute(stmt)
    matching = [t for t in res.scalars().all() if check(t.due_date, today)]
    return matching[offset : offset + limit]


async def update_task(db: AsyncSession, task_id: int, payload: TaskUpdate):
    task = await get_task(db, task_id)
    if not task:
        return None
    updates = payload.model_dump(exclude_unset=True)
    for required in ("title", "status", "tags"):
        if updates.get(required, ...) is None:
            del updates[required]
    for k, v in updates.items():
        setattr(task, k, v)
    if "status" in updates:
        task.status = TaskStatus(task.status)
        _stamp_completion(task)
    await db.commit()
    await db.refresh(task)
    return task


async def move_task(db: AsyncSession, task_id: int, status: TaskStatus):
    task = await get_task(db, task_id)
    if not task:
        return None
    logger.info("Moving task %s from %s to %s", task_id, task.status.value, TaskStatus(status).value)
    task.status = TaskStatus(status)
    _stamp_completion(task)
    await db.commit()
    await db.refresh(task)
    return task


async def complete_task(db: AsyncSession, task_id: int):
    return await move_task(db, task_id, TaskStatus.done)


async def delete_task(db: AsyncSession, task_id: int) -> bool:
    task = await get_task(db, task_id)
    if not task:
        return False
    await db.delete(task)
    await db.commit()
    return True


async def task_stats(db: AsyncSession, today: date | None = None) -> TaskStats:
    today = today or local_today()
    res = await db.execute(select(Task.status, func.count(Task.id)).group_by(Task.status))
    counts = {TaskStatus(status).value: n for status, n in res.all()}

    res = await db.execute(
        select(Task.due_date).where(Task.status != TaskStatus.done, Task.due_date.is_not(None))
    )
    open_due = res.scalars().all()
    return TaskStats(
        **counts,
        today=sum(DUE_CHECKS["today"](d, today) for d in open_due),
        overdue=sum(DUE_CHECKS["overdue"](d, today) for d in open_due),
        total=sum(counts.values()),
    )


# --- projects ---


async def create_project(db: AsyncSession, payload: ProjectCreate) -> Project:
    project = Project(**payload.model_dump())
    db.add(project)
    await db.commit()
    await db.refresh(project)
    logger.info("Created project %s (%s)", project.id, project.title)
    return project


async def get_project(db: AsyncSession, project_id: int) -> Project | None:
    res = await db.execute(select(Project).where(Project.id == project_id))
    return res.scalar_one_or_none()


async def list_projects(db: AsyncSession, limit: int = 100, offset: int = 0) -> list[Project]:
    stmt = select(Project).order_by(Project.id).limit(limit).offset(offset)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def update_project(db: AsyncSession, project_id: int, payload: ProjectUpdate):
    project = await get_project(db, project_id)
    if not project:
        return None
    updates = payload.model_dump(exclude_unset=True)
    for required in ("title", "status", "color"):
        if updates.get(required, ...) is None:
            del updates[required]
    for k, v in updates.items():
        setattr(project, k, v)
    if "status" in updates:
        done = ProjectStatus(project.status) == ProjectStatus.completed
        project.completed_at = (project.completed_at or datetime.utcnow()) if done else None
    await db.commit()
    await db.refresh(project)
    return project


async def delete_project(db: AsyncSession, project_id: int) -> bool:
    project = await get_project(db, project_id)
    if not project:
        return False
    # tasks survive their project
    await db.execute(update(Task).where(Task.project_id == project_id).values(project_id=None))
    await db.delete(project)
    await db.commit()
    return True


async def project_progress(db: AsyncSession, project_id: int) -> ProjectProgress:
    stmt = select(func.count(Task.id), func.count(Task.id).filter(Task.status == TaskStatus.done)).where(
        Task.project_id == project_id
    )
    total, done = (await db.execute(stmt)).one()
    percent = round(done / total * 100) if total else 0
    return ProjectProgress(project_id=project_id, total=total, done=done, percent=percent)


def match_project(projects: Iterable[Project], name: str) -> Project | None:
    """
    First project whose title equals `name` ignoring case, or whose
    hyphenated title ('Home Renovation' -> 'home-renovation') does.
    """
    wanted = name.lower()
    for project in projects:
        if project.title.lower() == wanted or slugify_title(project.title) == wanted:
            return project
    return None


async def find_project_by_name(db: AsyncSession, name: str) -> Project | None:
    res = await db.execute(select(Project).order_by(Project.id))
    return match_project(res.scalars().all(), name)


# --- areas ---


async def list_areas(db: AsyncSession) -> list[Area]:
    res = await db.execute(select(Area).order_by(Area.created_at, Area.id))
    return list(res.scalars().all())


async def get_area(db: AsyncSession, area_id: str) -> Area | None:
    res = await db.execute(select(Area).where(Area.id == area_id))
    return res.scalar_one_or_none()


async def seed_areas(db: AsyncSession, seeds: Iterable[AreaSeed]) -> int:
    """Insert `seeds` into an empty areas table. Returns how many were added."""
    existing = await db.scalar(select(func.count(Area.id)))
    if existing:
        return 0
    added = 0
    for seed in seeds:
        db.add(Area(**seed.model_dump()))
        added += 1
    await db.commit()
    logger.info("Seeded %d default areas", added)
    return added


# --- goals ---


async def create_goal(db: AsyncSession, payload: GoalCreate) -> Goal:
    goal = Goal(**payload.model_dump())
    db.add(goal)
    await db.commit()
    await db.refresh(goal)
    logger.info("Created %s goal %s (%s)", goal.horizon.value, goal.id, goal.title)
    return goal


async def get_goal(db: AsyncSession, goal_id: int) -> Goal | None:
    res = await db.execute(select(Goal).where(Goal.id == goal_id))
    return res.scalar_one_or_none()


async def list_goals(
    db: AsyncSession, horizon: GoalHorizon | None = None, area_id: str | None = None
) -> list[Goal]:
    stmt = select(Goal).order_by(Goal.id)
    if horizon:
        stmt = stmt.where(Goal.horizon == GoalHorizon(horizon))
    if area_id:
        stmt = stmt.where(Goal.area_id == area_id)
    res = await db.execute(stmt)
    return list(res.scalars().all())


async def update_goal(db: AsyncSession, goal_id: int, payload: GoalUpdate):
    goal = await get_goal(db, goal_id)
    if not goal:
        return None
    updates = payload.model_dump(exclude_unset=True)
    for required in ("title", "horizon"):
        if updates.get(required, ...) is None:
            del updates[required]
    for k, v in updates.items():
        setattr(goal, k, v)
    await db.commit()
    await db.refresh(goal)
    return goal


async def delete_goal(db: AsyncSession, goal_id: int) -> bool:
    goal = await get_goal(db, goal_id)
    if not goal:
        return False
    await db.delete(goal)
    await db.commit()
    return True
