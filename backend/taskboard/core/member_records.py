"""Member Records: pure operations on the member list embedded in a project.

Invariants:
    - Member id is caller-supplied and unique within one project's list
    - take_member + append_member is the only way a member changes project
    - Inputs are never mutated in place
"""

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from taskboard.core.domain_types import MemberRole
from taskboard.core.errors import (
    ConflictError, ErrorContext, NotFoundError, ValidationError,
)


def _now_iso(now: datetime | None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def new_member(
    member_id: str, name: str, role: str, now: datetime | None = None,
) -> dict:
    """Build a member record. Raises ValidationError on blank or unknown values."""
    for field_name, value in (("id", member_id), ("name", name), ("role", role)):
        if not isinstance(value, str) or not value.strip():
            raise ValidationError(
                "Member id, name, and role are required", field=field_name,
            )
    try:
        role_value = MemberRole(role).value
    except ValueError:
        raise ValidationError(f"Unknown member role: {role!r}", field="role")

    stamp = _now_iso(now)
    return {
        "id": member_id.strip(),
        "name": name.strip(),
        "role": role_value,
        "created_at": stamp,
        "updated_at": stamp,
    }


def has_member(members: Sequence[Mapping], member_id: str) -> bool:
    return any(m["id"] == member_id for m in members)


def take_member(
    members: Sequence[Mapping], member_id: str,
) -> tuple[list[dict], dict]:
    """Split members into (remaining, taken). Raises NotFoundError."""
    remaining = [dict(m) for m in members if m["id"] != member_id]
    if len(remaining) == len(members):
        raise NotFoundError("Member", member_id, ErrorContext(member_id=member_id))
    taken = next(dict(m) for m in members if m["id"] == member_id)
    return remaining, taken


def append_member(
    members: Sequence[Mapping], member: Mapping, now: datetime | None = None,
) -> list[dict]:
    """Return members plus member (updated_at refreshed). Raises ConflictError."""
    if has_member(members, member["id"]):
        raise ConflictError(
            f"Member '{member['id']}' already belongs to this project",
            field="id", context=ErrorContext(member_id=member["id"]),
        )
    arrived = dict(member)
    arrived["updated_at"] = _now_iso(now)
    return [*(dict(m) for m in members), arrived]
