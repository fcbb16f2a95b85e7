"""Activity Log: append-only event notes written after successful mutations.

Invariants:
    - record() never raises; a failed write is logged and dropped
    - record() uses its own session, independent of the request that triggered it
    - recent(n) returns at most n entries, newest first (timestamp, then id)
"""

import logging

from sqlalchemy import select

from taskboard.core.errors import StorageError
from taskboard.infrastructure.database import DatabaseSessionManager
from taskboard.models.activity import Activity

logger = logging.getLogger(__name__)


class ActivityLog:
    """Fire-and-forget writer and newest-first reader of Activity entries."""

    def __init__(self, manager: DatabaseSessionManager | None):
        self._manager = manager

    async def record(self, message: str) -> None:
        """Append an entry. Meant to run as a background task after the response."""
        if not self._manager:
            logger.error(f"Activity not recorded, database not initialized: {message}")
            return
        try:
            async with self._manager.session() as db:
                db.add(Activity(message=message))
                await db.commit()
        except Exception as e:
            logger.warning(
                f"Activity not recorded ({message}): {e}",
                extra={"operation": "activity record"},
            )

    async def recent(self, limit: int) -> list[Activity]:
        if not self._manager:
            raise StorageError("activity read")
        async with self._manager.session() as db:
            result = await db.execute(
                select(Activity)
                .order_by(Activity.timestamp.desc(), Activity.id.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
