"""Domain Types: enum values and stage parsing."""

from uuid import uuid4

import pytest

from taskboard.core.domain_types import (
    MemberId, MemberRole, ProjectId, TaskId, TaskStage,
)


def test_identity_types_wrap_values():
    uid = uuid4()
    assert ProjectId(uid) == uid
    assert TaskId("t1") == "t1"
    assert MemberId("m1") == "m1"


def test_task_stage_has_four_values():
    assert [s.value for s in TaskStage] == [
        "Requested", "ToDo", "InProgress", "Completed",
    ]


def test_member_roles():
    assert {r.value for r in MemberRole} == {
        "Developer", "Designer", "Manager", "QA",
    }


def test_parse_accepts_values_members_and_legacy_labels():
    assert TaskStage.parse("ToDo") is TaskStage.TODO
    assert TaskStage.parse(TaskStage.COMPLETED) is TaskStage.COMPLETED
    assert TaskStage.parse("To Do") is TaskStage.TODO
    assert TaskStage.parse("In Progress") is TaskStage.IN_PROGRESS


def test_parse_rejects_unknown_stage():
    with pytest.raises(ValueError):
        TaskStage.parse("Blocked")
