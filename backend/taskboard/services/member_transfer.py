"""Member Transfer: move a member from one project to another in a single transaction.

Invariants:
    - source != destination, else InvalidArgumentError (never a silent no-op)
    - Remove-from-source and add-to-destination commit together or not at all:
      no reader ever sees the member in neither project or in both
    - Both rows are locked in id order before either is read, so opposite moves
      between the same two projects queue instead of deadlocking
    - Revision conflicts and deadline overruns roll back and raise
      TransactionAbortedError (retryable); the caller decides whether to retry
    - Cancellation before commit leaves nothing durable (the session rolls back)

Design Decisions:
    - Each step flushes immediately so a revision conflict on the source is
      detected before the destination is touched
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from taskboard.core.errors import (
    ErrorContext, InvalidArgumentError, NotFoundError, TransactionAbortedError,
)
from taskboard.core.member_records import append_member, take_member
from taskboard.infrastructure.database import bounded_transaction
from taskboard.models.project import Project

logger = logging.getLogger(__name__)


class MemberTransfer:
    """Relocates members between project aggregates."""

    def __init__(self, db: AsyncSession, timeout_seconds: float = 5.0):
        self.db = db
        self.timeout_seconds = timeout_seconds

    async def _lock(self, *project_ids: UUID) -> None:
        await self.db.execute(
            select(Project.id)
            .where(Project.id.in_(sorted(project_ids)))
            .order_by(Project.id)
            .with_for_update()
        )

    async def _load(self, project_id: UUID) -> Project:
        project = await self.db.get(Project, project_id, populate_existing=True)
        if project is None:
            raise NotFoundError(
                "Project", str(project_id),
                ErrorContext(project_id=str(project_id)),
            )
        return project

    async def _relocate(
        self, source_id: UUID, member_id: str, dest_id: UUID,
    ) -> dict:
        await self._lock(source_id, dest_id)

        source = await self._load(source_id)
        remaining, member = take_member(source.members, member_id)
        source.members = remaining
        await self.db.flush()

        destination = await self._load(dest_id)
        destination.members = append_member(destination.members, member)
        await self.db.flush()
        return destination.members[-1]

    async def move(
        self, source_project_id: UUID, member_id: str, dest_project_id: UUID,
    ) -> dict:
        """Move member_id from source to destination and return the moved record."""
        context = ErrorContext(
            project_id=str(source_project_id), member_id=member_id,
        )
        if source_project_id == dest_project_id:
            raise InvalidArgumentError(
                "Destination project must differ from the source project",
                context,
            )

        async with bounded_transaction(
            self.db, self.timeout_seconds, "member transfer",
        ):
            try:
                member = await self._relocate(
                    source_project_id, member_id, dest_project_id,
                )
                await self.db.commit()
            except StaleDataError as e:
                await self.db.rollback()
                raise TransactionAbortedError(
                    "A project changed during the transfer; nothing was moved",
                    "member transfer", context,
                ) from e
            except Exception:
                await self.db.rollback()
                raise

        logger.info(
            f"Member moved to project {dest_project_id}",
            extra={"project_id": str(source_project_id), "member_id": member_id},
        )
        return member
