"""Tests for member record helpers: construction, take, append."""

import pytest

from taskboard.core.errors import ConflictError, NotFoundError, ValidationError
from taskboard.core.member_records import (
    append_member, has_member, new_member, take_member,
)


def test_new_member_strips_and_stamps():
    member = new_member(" m1 ", " Ana ", "Developer")
    assert member["id"] == "m1"
    assert member["name"] == "Ana"
    assert member["role"] == "Developer"
    assert member["created_at"] == member["updated_at"]


@pytest.mark.parametrize("field, args", [
    ("id", ("", "Ana", "Developer")),
    ("name", ("m1", "   ", "Developer")),
    ("role", ("m1", "Ana", "")),
])
def test_new_member_requires_all_fields(field, args):
    with pytest.raises(ValidationError) as exc:
        new_member(*args)
    assert exc.value.field == field


def test_new_member_rejects_unknown_role():
    with pytest.raises(ValidationError) as exc:
        new_member("m1", "Ana", "Intern")
    assert exc.value.field == "role"


def test_take_member_splits_list():
    ana = new_member("m1", "Ana", "Developer")
    bo = new_member("m2", "Bo", "QA")

    remaining, taken = take_member([ana, bo], "m1")

    assert taken["id"] == "m1"
    assert [m["id"] for m in remaining] == ["m2"]


def test_take_member_missing_raises_not_found():
    with pytest.raises(NotFoundError):
        take_member([new_member("m1", "Ana", "QA")], "m9")


def test_append_member_rejects_duplicate_id():
    ana = new_member("m1", "Ana", "Developer")
    with pytest.raises(ConflictError):
        append_member([ana], new_member("m1", "Other", "QA"))


def test_append_member_leaves_input_untouched():
    members = [new_member("m1", "Ana", "Developer")]
    result = append_member(members, new_member("m2", "Bo", "QA"))
    assert len(members) == 1
    assert has_member(result, "m2")
