"""Request schemas: field limits, legacy stage labels and move aliases.

Invariants:
    - Project and task titles are 3-30 chars; descriptions are non-empty
    - TaskUpdate normalizes "To Do" / "In Progress" and rejects unknown stages
    - TaskUpdate rejects explicit nulls; lengths are measured after stripping
    - MemberMove accepts destProjectId and the older newProjectId
"""

import uuid

import pytest
from pydantic import ValidationError

from taskboard.core.domain_types import TaskStage
from taskboard.schemas.member import MemberCreate, MemberMove
from taskboard.schemas.project import ProjectWrite
from taskboard.schemas.task import TaskBoardResponse, TaskCreate, TaskUpdate


# --- ProjectWrite -------------------------------------------------------------

def test_project_write_strips_whitespace():
    body = ProjectWrite(title="  Alpha  ", description="  demo ")
    assert body.title == "Alpha"
    assert body.description == "demo"


@pytest.mark.parametrize("title", ["ab", "x" * 31])
def test_project_title_length_enforced(title):
    with pytest.raises(ValidationError):
        ProjectWrite(title=title, description="demo")


def test_project_title_length_counts_stripped_text():
    with pytest.raises(ValidationError):
        ProjectWrite(title="  ab  ", description="demo")


def test_project_blank_description_rejected():
    with pytest.raises(ValidationError):
        ProjectWrite(title="Alpha", description="   ")


# --- Tasks --------------------------------------------------------------------

def test_task_create_defaults_to_no_attachments():
    assert TaskCreate(title="Ship", description="d").attachments == []


@pytest.mark.parametrize("label, stage", [
    ("To Do", TaskStage.TODO),
    ("In Progress", TaskStage.IN_PROGRESS),
    ("Completed", TaskStage.COMPLETED),
])
def test_task_update_normalizes_stage(label, stage):
    assert TaskUpdate(stage=label).stage is stage


def test_task_update_rejects_unknown_stage():
    with pytest.raises(ValidationError):
        TaskUpdate(stage="Blocked")


@pytest.mark.parametrize("field", ["title", "description", "stage", "attachments"])
def test_task_update_rejects_explicit_null(field):
    with pytest.raises(ValidationError):
        TaskUpdate(**{field: None})


def test_task_create_strips_title_before_length_check():
    assert TaskCreate(title="  Ship  ", description="d").title == "Ship"
    with pytest.raises(ValidationError):
        TaskCreate(title="  ab  ", description="d")


def test_task_update_only_dumps_sent_fields():
    body = TaskUpdate(stage="InProgress")
    assert body.model_dump(exclude_unset=True, mode="json") == {"stage": "InProgress"}


def test_board_serializes_in_progress_by_alias():
    board = TaskBoardResponse(requested=[], todo=[], in_progress=[], completed=[])
    assert set(board.model_dump(by_alias=True)) == {
        "requested", "todo", "inProgress", "completed",
    }


# --- Members ------------------------------------------------------------------

@pytest.mark.parametrize("field", ["destProjectId", "newProjectId"])
def test_member_move_accepts_both_field_names(field):
    dest = uuid.uuid4()
    assert MemberMove(**{field: str(dest)}).dest_project_id == dest


def test_member_create_rejects_unknown_role():
    with pytest.raises(ValidationError):
        MemberCreate(id="m1", name="Ana", role="Intern")
