"""Task Schemas: request validation and response shapes for /projects/{id}/tasks.

Invariants:
    - TaskCreate never accepts stage, order or index (assigned by the server)
    - TaskUpdate is partial; only fields sent by the client are applied
    - Explicit nulls are rejected; titles are measured after stripping
    - Legacy stage labels ("To Do", "In Progress") are accepted and normalized
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.core.domain_types import TaskStage


class Attachment(BaseModel):
    type: str
    url: str


class TaskCreate(BaseModel):
    title: str = Field(min_length=3, max_length=30)
    description: str = Field(min_length=1)
    attachments: list[Attachment] = Field(default_factory=list)

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class TaskUpdate(BaseModel):
    title: str | None = Field(None, min_length=3, max_length=30)
    description: str | None = Field(None, min_length=1)
    stage: TaskStage | None = None
    attachments: list[Attachment] | None = None

    @field_validator("title", "description", "stage", "attachments", mode="before")
    @classmethod
    def reject_null(cls, v, info):
        # an omitted field stays unchanged; null is never a valid value
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v.strip() if isinstance(v, str) and info.field_name != "stage" else v

    @field_validator("stage", mode="before")
    @classmethod
    def accept_legacy_stage(cls, v):
        return TaskStage.parse(v) if isinstance(v, str) else v


class TaskResponse(BaseModel):
    id: str
    title: str
    description: str
    stage: TaskStage
    order: int
    index: int
    attachments: list[Attachment] = []
    created_at: datetime
    updated_at: datetime


class TaskBoardResponse(BaseModel):
    """Tasks grouped by stage, each group in board order."""
    model_config = ConfigDict(populate_by_name=True)

    requested: list[TaskResponse]
    todo: list[TaskResponse]
    in_progress: list[TaskResponse] = Field(alias="inProgress")
    completed: list[TaskResponse]
