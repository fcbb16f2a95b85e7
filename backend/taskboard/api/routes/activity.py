"""Activity Routes: read-only view of the most recent activity notes."""

from fastapi import APIRouter, Depends, Query

from taskboard.api.dependencies import get_activity_log
from taskboard.config import get_settings
from taskboard.schemas.activity import ActivityResponse
from taskboard.services.activity_log import ActivityLog

router = APIRouter(prefix="/api/v1/activity", tags=["activity"])


@router.get("", response_model=list[ActivityResponse])
async def list_recent_activity(
    limit: int | None = Query(None, ge=1, le=100),
    activity: ActivityLog = Depends(get_activity_log),
):
    """Newest entries first. limit defaults to ACTIVITY_RECENT_DEFAULT."""
    return await activity.recent(limit or get_settings().activity_recent_default)
