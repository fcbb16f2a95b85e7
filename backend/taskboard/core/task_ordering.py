"""Task Ordering: position assignment for new tasks and the grouped board view.

Invariants:
    - order = number of tasks present at insertion time (never renumbered)
    - index = 0 for an empty board, else max(existing index) + 1
    - group_by_stage is an exhaustive, disjoint partition that keeps input order
    - No IO: callers run next_position inside the same write that persists the task
"""

from collections.abc import Mapping, Sequence

from taskboard.core.domain_types import TaskStage

# Stage -> key of the grouped board payload, in board column order
STAGE_GROUP_KEYS: dict[TaskStage, str] = {
    TaskStage.REQUESTED: "requested",
    TaskStage.TODO: "todo",
    TaskStage.IN_PROGRESS: "inProgress",
    TaskStage.COMPLETED: "completed",
}


def next_position(existing_tasks: Sequence[Mapping]) -> tuple[int, int]:
    """Return (order, index) for a task appended to existing_tasks."""
    order = len(existing_tasks)
    if not existing_tasks:
        return order, 0
    return order, 1 + max(task["index"] for task in existing_tasks)


def group_by_stage(tasks: Sequence[Mapping]) -> dict[str, list]:
    """Partition tasks into board columns keyed by STAGE_GROUP_KEYS."""
    groups: dict[str, list] = {key: [] for key in STAGE_GROUP_KEYS.values()}
    for task in tasks:
        stage = TaskStage.parse(task["stage"])
        groups[STAGE_GROUP_KEYS[stage]].append(task)
    return groups
