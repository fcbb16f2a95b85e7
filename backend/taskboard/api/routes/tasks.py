"""Task Routes: the kanban board of one project."""

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status

from taskboard.api.dependencies import get_activity_log, get_task_board
from taskboard.schemas.task import (
    TaskBoardResponse, TaskCreate, TaskResponse, TaskUpdate,
)
from taskboard.services.activity_log import ActivityLog
from taskboard.services.task_board import TaskBoard

router = APIRouter(prefix="/api/v1/projects/{project_id}/tasks", tags=["tasks"])


@router.post(
    "", response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_task(
    project_id: UUID,
    body: TaskCreate,
    background_tasks: BackgroundTasks,
    board: TaskBoard = Depends(get_task_board),
    activity: ActivityLog = Depends(get_activity_log),
):
    """Append a task in stage Requested; order and index are assigned here."""
    task = await board.add_task(
        project_id, body.title, body.description,
        [a.model_dump() for a in body.attachments],
    )
    background_tasks.add_task(
        activity.record, f"Task '{task['title']}' added to project {project_id}",
    )
    return task


@router.get("", response_model=TaskBoardResponse)
async def list_tasks_grouped(
    project_id: UUID, board: TaskBoard = Depends(get_task_board),
):
    """Tasks grouped into requested / todo / inProgress / completed."""
    return await board.grouped(project_id)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    project_id: UUID, task_id: str, board: TaskBoard = Depends(get_task_board),
):
    return await board.get_task(project_id, task_id)


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    project_id: UUID,
    task_id: str,
    body: TaskUpdate,
    board: TaskBoard = Depends(get_task_board),
):
    """Partial update; stage may move to any value."""
    changes = body.model_dump(exclude_unset=True, mode="json")
    return await board.update_task(project_id, task_id, changes)


@router.delete("/{task_id}")
async def delete_task(
    project_id: UUID, task_id: str, board: TaskBoard = Depends(get_task_board),
):
    """Delete a task. Unknown task ids are accepted as already deleted."""
    await board.delete_task(project_id, task_id)
    return {"message": "Task deleted successfully"}
