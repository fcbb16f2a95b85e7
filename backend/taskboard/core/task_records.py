"""Task Records: pure constructors and edits for the task list embedded in a project.

Invariants:
    - Every function returns new dicts/lists; inputs are never mutated in place
    - Task id is assigned once at creation and never changes
    - order and index are set only by new_task (via next_position)
    - Timestamps are ISO-8601 strings (the list is stored as JSON)
"""

import uuid
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone

from taskboard.core.domain_types import TaskStage
from taskboard.core.errors import ErrorContext, NotFoundError, ValidationError
from taskboard.core.task_ordering import next_position

EDITABLE_TASK_FIELDS = ("title", "description", "stage", "attachments")


def _now_iso(now: datetime | None) -> str:
    return (now or datetime.now(timezone.utc)).isoformat()


def _parse_stage(value) -> str:
    try:
        return TaskStage.parse(value).value
    except ValueError:
        raise ValidationError(f"Unknown task stage: {value!r}", field="stage")


def _required_text(name: str, value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Task {name} cannot be empty", field=name)
    return value.strip()


def _clean_attachments(attachments: Sequence[Mapping] | None) -> list[dict]:
    return [
        {"type": a.get("type"), "url": a.get("url")}
        for a in (attachments or [])
    ]


def new_task(
    existing_tasks: Sequence[Mapping],
    title: str,
    description: str,
    attachments: Sequence[Mapping] | None = None,
    now: datetime | None = None,
) -> dict:
    """Build the record for a task appended to existing_tasks."""
    order, index = next_position(existing_tasks)
    stamp = _now_iso(now)
    return {
        "id": str(uuid.uuid4()),
        "title": title,
        "description": description,
        "stage": TaskStage.REQUESTED.value,
        "order": order,
        "index": index,
        "attachments": _clean_attachments(attachments),
        "created_at": stamp,
        "updated_at": stamp,
    }


def find_task(tasks: Sequence[Mapping], task_id: str) -> dict:
    """Return the task with task_id or raise NotFoundError."""
    for task in tasks:
        if task["id"] == task_id:
            return dict(task)
    raise NotFoundError("Task", task_id, ErrorContext(task_id=task_id))


def updated_task(
    task: Mapping, changes: Mapping, now: datetime | None = None,
) -> dict:
    """Apply a partial update. Any stage may follow any other stage."""
    unknown = set(changes) - set(EDITABLE_TASK_FIELDS)
    if unknown:
        name = sorted(unknown)[0]
        raise ValidationError(f"Task field '{name}' cannot be updated", field=name)

    result = dict(task)
    for name, value in changes.items():
        if name in ("title", "description"):
            value = _required_text(name, value)
        elif name == "stage":
            value = _parse_stage(value)
        elif name == "attachments":
            value = _clean_attachments(value)
        result[name] = value
    result["updated_at"] = _now_iso(now)
    return result


def replace_task(tasks: Sequence[Mapping], task: Mapping) -> list[dict]:
    """Return a copy of tasks with the entry sharing task's id replaced."""
    return [dict(task) if t["id"] == task["id"] else dict(t) for t in tasks]


def drop_task(tasks: Sequence[Mapping], task_id: str) -> list[dict]:
    """Return tasks without task_id. A missing id leaves the list as is."""
    return [dict(t) for t in tasks if t["id"] != task_id]
