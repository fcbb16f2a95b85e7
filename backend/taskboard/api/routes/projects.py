"""Project Routes: CRUD over project aggregates.

Invariants:
    - Bodies are validated by ProjectWrite before the store is called
    - Listing returns summaries only (no tasks, no members)
    - Creation queues an activity note; the note never affects the response
"""

from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, status

from taskboard.api.dependencies import get_activity_log, get_project_store
from taskboard.schemas.project import ProjectResponse, ProjectSummary, ProjectWrite
from taskboard.services.activity_log import ActivityLog
from taskboard.services.project_store import ProjectStore

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("", response_model=list[ProjectSummary])
async def list_projects(store: ProjectStore = Depends(get_project_store)):
    """List all projects without their task boards."""
    return await store.list_summaries()


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID, store: ProjectStore = Depends(get_project_store),
):
    """Get a project with tasks and members."""
    return await store.get(project_id)


@router.post(
    "", response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectWrite,
    background_tasks: BackgroundTasks,
    store: ProjectStore = Depends(get_project_store),
    activity: ActivityLog = Depends(get_activity_log),
):
    """Create a project. Duplicate titles are rejected with 409."""
    project = await store.create(body.title, body.description)
    background_tasks.add_task(
        activity.record, f"Project '{project.title}' created",
    )
    return project


@router.put("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    body: ProjectWrite,
    store: ProjectStore = Depends(get_project_store),
):
    """Replace title and description."""
    return await store.update(project_id, body.title, body.description)


@router.delete("/{project_id}")
async def delete_project(
    project_id: UUID, store: ProjectStore = Depends(get_project_store),
):
    """Delete a project together with its tasks and members."""
    await store.delete(project_id)
    return {"message": "Project deleted successfully"}
