"""Task Board: task operations on a single project aggregate.

Invariants:
    - order/index of a new task are computed from the task list read by the same
      mutate() attempt that commits it
    - Deleting a task never renumbers the others
    - Deleting a missing task is a no-op; a missing project is NotFoundError
"""

import logging
from collections.abc import Mapping, Sequence
from uuid import UUID

from taskboard.core.task_ordering import group_by_stage
from taskboard.core.task_records import (
    drop_task, find_task, new_task, replace_task, updated_task,
)
from taskboard.models.project import Project
from taskboard.services.project_store import ProjectStore

logger = logging.getLogger(__name__)


class TaskBoard:
    """Add, read, edit and remove tasks embedded in a project."""

    def __init__(self, store: ProjectStore):
        self.store = store

    async def add_task(
        self,
        project_id: UUID,
        title: str,
        description: str,
        attachments: Sequence[Mapping] | None = None,
    ) -> dict:
        def append(project: Project) -> dict:
            task = new_task(project.tasks, title, description, attachments)
            project.tasks = [*project.tasks, task]
            return task

        _, task = await self.store.mutate(project_id, append)
        logger.info(
            f"Task '{title}' added at order {task['order']}, index {task['index']}",
            extra={"project_id": str(project_id), "task_id": task["id"]},
        )
        return task

    async def get_task(self, project_id: UUID, task_id: str) -> dict:
        project = await self.store.get(project_id)
        return find_task(project.tasks, task_id)

    async def grouped(self, project_id: UUID) -> dict[str, list]:
        project = await self.store.get(project_id)
        return group_by_stage(project.tasks)

    async def update_task(
        self, project_id: UUID, task_id: str, changes: Mapping,
    ) -> dict:
        def edit(project: Project) -> dict:
            task = updated_task(find_task(project.tasks, task_id), changes)
            project.tasks = replace_task(project.tasks, task)
            return task

        _, task = await self.store.mutate(project_id, edit)
        return task

    async def delete_task(self, project_id: UUID, task_id: str) -> None:
        def remove(project: Project) -> None:
            project.tasks = drop_task(project.tasks, task_id)

        await self.store.mutate(project_id, remove)
        logger.info(
            "Task removed",
            extra={"project_id": str(project_id), "task_id": task_id},
        )
