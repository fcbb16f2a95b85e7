"""Project Schemas: request validation and response shapes for /projects.

Invariants:
    - title: 3-30 chars after stripping; description: non-empty after stripping
    - ProjectSummary never carries tasks or members
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from taskboard.schemas.member import MemberResponse
from taskboard.schemas.task import TaskResponse


class ProjectWrite(BaseModel):
    """Body of project create and update."""
    title: str = Field(min_length=3, max_length=30)
    description: str = Field(min_length=1)

    @field_validator("title", "description", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v


class ProjectSummary(BaseModel):
    """Project list entry."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str
    created_at: datetime
    updated_at: datetime


class ProjectResponse(ProjectSummary):
    """Full project aggregate."""
    tasks: list[TaskResponse]
    members: list[MemberResponse]
