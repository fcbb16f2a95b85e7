"""Member Routes: roster of one project and transfers between projects.

Invariants:
    - PUT /{member_id} is a move, never a copy (MemberTransfer)
    - Moving a member to its own project is a 400, not a no-op
"""

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status

from taskboard.api.dependencies import (
    get_activity_log, get_member_roster, get_member_transfer,
)
from taskboard.schemas.member import MemberCreate, MemberMove, MemberResponse
from taskboard.services.activity_log import ActivityLog
from taskboard.services.member_roster import MemberRoster
from taskboard.services.member_transfer import MemberTransfer

router = APIRouter(
    prefix="/api/v1/projects/{project_id}/members", tags=["members"],
)


@router.post(
    "", response_model=MemberResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_member(
    project_id: UUID,
    body: MemberCreate,
    background_tasks: BackgroundTasks,
    roster: MemberRoster = Depends(get_member_roster),
    activity: ActivityLog = Depends(get_activity_log),
):
    member = await roster.add_member(
        project_id, body.id, body.name, body.role.value,
    )
    background_tasks.add_task(
        activity.record,
        f"Member '{member['name']}' added to project {project_id}",
    )
    return member


@router.get("", response_model=list[MemberResponse])
async def list_members(
    project_id: UUID, roster: MemberRoster = Depends(get_member_roster),
):
    return await roster.list_members(project_id)


@router.put("/{member_id}", response_model=MemberResponse)
async def move_member(
    project_id: UUID,
    member_id: str,
    body: MemberMove,
    background_tasks: BackgroundTasks,
    transfer: MemberTransfer = Depends(get_member_transfer),
    activity: ActivityLog = Depends(get_activity_log),
):
    """Move a member to the project named in the body."""
    member = await transfer.move(project_id, member_id, body.dest_project_id)
    background_tasks.add_task(
        activity.record,
        f"Member '{member['name']}' moved from project {project_id} "
        f"to project {body.dest_project_id}",
    )
    return member
