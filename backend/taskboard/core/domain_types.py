"""Domain Types: identity wrappers and the enums stored inside project aggregates.

Invariants:
    - ProjectId wraps the project UUID; TaskId and MemberId are opaque strings
    - TaskStage values are the wire and storage values
    - Any TaskStage is reachable from any other (no transition graph here)
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProjectId = NewType("ProjectId", UUID)
TaskId = NewType("TaskId", str)
MemberId = NewType("MemberId", str)


# ─── Enums ───────────────────────────────────────────────────────

# Labels written by older clients, mapped onto current stage values
_LEGACY_STAGE_LABELS = {
    "To Do": "ToDo",
    "In Progress": "InProgress",
}


class TaskStage(str, Enum):
    """Kanban column a task sits in."""
    REQUESTED = "Requested"
    TODO = "ToDo"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, value: "str | TaskStage") -> "TaskStage":
        """Resolve a stage from its value or a legacy label. Raises ValueError."""
        if isinstance(value, cls):
            return value
        return cls(_LEGACY_STAGE_LABELS.get(value, value))


class MemberRole(str, Enum):
    """Role a member holds inside its project."""
    DEVELOPER = "Developer"
    DESIGNER = "Designer"
    MANAGER = "Manager"
    QA = "QA"
