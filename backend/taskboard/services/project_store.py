"""Project Store: durable CRUD for Project aggregates plus the revision-checked write loop.

Invariants:
    - Title uniqueness is enforced by the database constraint; the IntegrityError
      is translated into ConflictError (no check-then-insert)
    - Every single-aggregate write goes through mutate(): reload, apply, commit with
      "WHERE revision = ?"; a lost race rolls back and retries from a fresh read
    - Retries are bounded (max_attempts) and the whole loop runs under the
      transaction deadline; exhaustion raises TransactionAbortedError
    - Missing project ids raise NotFoundError from every operation
"""

import logging
from collections.abc import Callable
from typing import TypeVar
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from taskboard.core.errors import (
    ConflictError, ErrorContext, NotFoundError, TaskboardError,
    TransactionAbortedError,
)
from taskboard.infrastructure.database import bounded_transaction
from taskboard.models.project import Project

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _title_conflict(title: str, project_id: UUID | None = None) -> ConflictError:
    return ConflictError(
        f"Project title '{title}' is already taken",
        field="title",
        context=ErrorContext(
            project_id=str(project_id) if project_id else None,
        ),
    )


class ProjectStore:
    """Persistence of Project aggregates on one AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        max_attempts: int = 3,
        timeout_seconds: float = 5.0,
    ):
        self.db = db
        self.max_attempts = max_attempts
        self.timeout_seconds = timeout_seconds

    async def _load(self, project_id: UUID) -> Project:
        project = await self.db.get(Project, project_id, populate_existing=True)
        if project is None:
            raise NotFoundError(
                "Project", str(project_id),
                ErrorContext(project_id=str(project_id)),
            )
        return project

    async def create(self, title: str, description: str) -> Project:
        project = Project(
            title=title, description=description, tasks=[], members=[],
        )
        async with bounded_transaction(
            self.db, self.timeout_seconds, "project create",
        ):
            self.db.add(project)
            try:
                await self.db.commit()
            except IntegrityError as e:
                await self.db.rollback()
                raise _title_conflict(title) from e
        logger.info(
            f"Project '{title}' created",
            extra={"project_id": str(project.id)},
        )
        return project

    async def get(self, project_id: UUID) -> Project:
        return await self._load(project_id)

    async def list_summaries(self) -> list:
        """Id, title, description and timestamps of every project; no tasks or members."""
        result = await self.db.execute(
            select(
                Project.id, Project.title, Project.description,
                Project.created_at, Project.updated_at,
            ).order_by(Project.created_at)
        )
        return list(result.all())

    async def update(
        self, project_id: UUID, title: str, description: str,
    ) -> Project:
        def rename(project: Project) -> None:
            project.title = title
            project.description = description

        project, _ = await self.mutate(project_id, rename)
        return project

    async def delete(self, project_id: UUID) -> None:
        async with bounded_transaction(
            self.db, self.timeout_seconds, "project delete",
        ):
            result = await self.db.execute(
                delete(Project).where(Project.id == project_id),
            )
            if result.rowcount == 0:
                await self.db.rollback()
                raise NotFoundError(
                    "Project", str(project_id),
                    ErrorContext(project_id=str(project_id)),
                )
            await self.db.commit()
        logger.info("Project deleted", extra={"project_id": str(project_id)})

    async def mutate(
        self, project_id: UUID, change: Callable[[Project], T],
    ) -> tuple[Project, T]:
        """Apply change to the freshly loaded project and commit it atomically.

        change must be synchronous and must replace (not mutate) the JSON
        lists it edits. It runs once per attempt, against the state that
        attempt read.
        """
        async with bounded_transaction(
            self.db, self.timeout_seconds, "project update",
        ):
            for attempt in range(1, self.max_attempts + 1):
                project = await self._load(project_id)
                try:
                    outcome = change(project)
                except TaskboardError:
                    await self.db.rollback()
                    raise
                # rollback expires the instance; read what the error needs first
                title = project.title
                try:
                    await self.db.commit()
                    return project, outcome
                except StaleDataError:
                    await self.db.rollback()
                    logger.warning(
                        "Project revision changed during write, retrying",
                        extra={"project_id": str(project_id), "attempt": attempt},
                    )
                except IntegrityError as e:
                    await self.db.rollback()
                    raise _title_conflict(title, project_id) from e

        raise TransactionAbortedError(
            f"Project '{project_id}' kept changing; gave up after "
            f"{self.max_attempts} attempts",
            "project update",
            ErrorContext(project_id=str(project_id)),
        )
