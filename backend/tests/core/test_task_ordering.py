"""Tests for next_position and group_by_stage: pure ordering logic, no IO."""

from taskboard.core.task_ordering import group_by_stage, next_position


def _task(title, stage="Requested", index=0):
    return {"id": title, "title": title, "stage": stage, "index": index}


def test_empty_board_starts_at_zero():
    assert next_position([]) == (0, 0)


def test_order_is_length_and_index_is_max_plus_one():
    tasks = [_task("a", index=0), _task("b", index=1)]
    assert next_position(tasks) == (2, 2)


def test_index_follows_max_not_length_after_deletions():
    # tasks with index 0 and 2 were deleted earlier
    tasks = [_task("b", index=1), _task("d", index=3)]
    assert next_position(tasks) == (2, 4)


def test_sequential_insertions_are_dense_and_strictly_increasing():
    tasks = []
    for n in range(6):
        order, index = next_position(tasks)
        tasks.append({**_task(f"t{n}"), "order": order, "index": index})

    assert [t["order"] for t in tasks] == list(range(6))
    indices = [t["index"] for t in tasks]
    assert indices[0] == 0
    assert all(b > a for a, b in zip(indices, indices[1:]))


def test_group_by_stage_has_all_four_columns_even_when_empty():
    assert group_by_stage([]) == {
        "requested": [], "todo": [], "inProgress": [], "completed": [],
    }


def test_group_by_stage_is_exhaustive_and_disjoint():
    stages = ["Requested", "ToDo", "InProgress", "Completed", "ToDo", "Requested"]
    tasks = [_task(f"t{i}", stage) for i, stage in enumerate(stages)]

    groups = group_by_stage(tasks)

    flattened = [t["id"] for group in groups.values() for t in group]
    assert len(flattened) == len(tasks)
    assert sorted(flattened) == sorted(t["id"] for t in tasks)
    assert [t["id"] for t in groups["todo"]] == ["t1", "t4"]
    assert [t["id"] for t in groups["requested"]] == ["t0", "t5"]


def test_group_by_stage_keeps_input_order_within_column():
    tasks = [_task("z"), _task("a"), _task("m")]
    assert [t["id"] for t in group_by_stage(tasks)["requested"]] == ["z", "a", "m"]


def test_group_by_stage_is_idempotent():
    tasks = [_task("a", "Completed"), _task("b", "InProgress")]
    assert group_by_stage(tasks) == group_by_stage(tasks)


def test_group_by_stage_reads_legacy_labels():
    tasks = [_task("a", "To Do"), _task("b", "In Progress")]
    groups = group_by_stage(tasks)
    assert [t["id"] for t in groups["todo"]] == ["a"]
    assert [t["id"] for t in groups["inProgress"]] == ["b"]
