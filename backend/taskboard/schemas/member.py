"""Member Schemas: add and move payloads for /projects/{id}/members."""

from datetime import datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, Field

from taskboard.core.domain_types import MemberRole


class MemberCreate(BaseModel):
    id: str = Field(min_length=1, max_length=64)
    name: str = Field(min_length=1)
    role: MemberRole


class MemberMove(BaseModel):
    """Destination of a member transfer. newProjectId is the older field name."""
    dest_project_id: UUID = Field(
        validation_alias=AliasChoices(
            "destProjectId", "newProjectId", "dest_project_id",
        ),
    )


class MemberResponse(BaseModel):
    id: str
    name: str
    role: MemberRole
    created_at: datetime
    updated_at: datetime
