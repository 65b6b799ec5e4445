from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from .models import Context, GoalHorizon, Priority, ProjectStatus, TaskStatus


class TaskBase(BaseModel):
    # Serialize enums as their values (e.g., "inbox", "@phone")
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., max_length=280)
    description: str | None = None
    status: TaskStatus = TaskStatus.inbox
    priority: Priority | None = None
    context: Context | None = None
    project_id: int | None = None
    due_date: date | None = None
    waiting_for: str | None = None
    tags: list[str] = Field(default_factory=list)
    estimated_minutes: int | None = None


class TaskCreate(TaskBase):
    pass


class TaskUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, max_length=280)
    description: str | None = None
    status: TaskStatus | None = None
    priority: Priority | None = None
    context: Context | None = None
    project_id: int | None = None
    due_date: date | None = None
    waiting_for: str | None = None
    tags: list[str] | None = None
    estimated_minutes: int | None = None


class TaskOut(TaskBase):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
    id: int
    created_at: datetime
    completed_at: datetime | None = None


class TaskMove(BaseModel):
    status: TaskStatus


class TaskStats(BaseModel):
    """Bucket counts; today and overdue only count open tasks."""

    inbox: int = 0
    next: int = 0
    waiting: int = 0
    someday: int = 0
    done: int = 0
    today: int = 0
    overdue: int = 0
    total: int = 0


class ProjectBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., max_length=200)
    description: str | None = None
    outcome: str | None = None
    area_id: str | None = None
    status: ProjectStatus = ProjectStatus.active
    due_date: date | None = None
    color: str = "#3B82F6"


class ProjectCreate(ProjectBase):
    pass


class ProjectUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, max_length=200)
    description: str | None = None
    outcome: str | None = None
    area_id: str | None = None
    status: ProjectStatus | None = None
    due_date: date | None = None
    color: str | None = None


class ProjectOut(ProjectBase):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
    id: int
    created_at: datetime
    completed_at: datetime | None = None


class ProjectProgress(BaseModel):
    project_id: int
    total: int
    done: int
    percent: int = Field(ge=0, le=100)


class AreaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: str
    description: str | None = None
    icon: str
    created_at: datetime


class GoalBase(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str = Field(..., max_length=200)
    description: str | None = None
    horizon: GoalHorizon
    area_id: str | None = None


class GoalCreate(GoalBase):
    pass


class GoalUpdate(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    title: str | None = Field(None, max_length=200)
    description: str | None = None
    horizon: GoalHorizon | None = None
    area_id: str | None = None


class GoalOut(GoalBase):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)
    id: int
    created_at: datetime
