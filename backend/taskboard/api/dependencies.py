"""Service Providers: FastAPI dependencies that build services for one request.

Invariants:
    - Every service built here shares the request's AsyncSession (get_db)
    - ActivityLog resolves db_manager at call time, so it follows init_db and test patches
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskboard.config import get_settings
from taskboard.infrastructure import database
from taskboard.infrastructure.database import get_db
from taskboard.services.activity_log import ActivityLog
from taskboard.services.member_roster import MemberRoster
from taskboard.services.member_transfer import MemberTransfer
from taskboard.services.project_store import ProjectStore
from taskboard.services.task_board import TaskBoard


def get_project_store(db: AsyncSession = Depends(get_db)) -> ProjectStore:
    settings = get_settings()
    return ProjectStore(
        db,
        max_attempts=settings.optimistic_retry_attempts,
        timeout_seconds=settings.transaction_timeout_seconds,
    )


def get_task_board(store: ProjectStore = Depends(get_project_store)) -> TaskBoard:
    return TaskBoard(store)


def get_member_roster(
    store: ProjectStore = Depends(get_project_store),
) -> MemberRoster:
    return MemberRoster(store)


def get_member_transfer(db: AsyncSession = Depends(get_db)) -> MemberTransfer:
    return MemberTransfer(
        db, timeout_seconds=get_settings().transaction_timeout_seconds,
    )


def get_activity_log() -> ActivityLog:
    return ActivityLog(database.db_manager)
