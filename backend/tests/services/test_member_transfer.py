"""Member Transfer: all-or-nothing move of a member between two projects.

Invariants:
    - After a successful move the member is only in the destination
    - Any failure before commit leaves the member only in the source
    - Self-transfer is rejected and changes nothing
"""

import asyncio
import uuid

import pytest

from taskboard.core.errors import (
    ConflictError, InvalidArgumentError, NotFoundError, StorageError,
    TransactionAbortedError,
)
from taskboard.services import member_transfer as transfer_module
from taskboard.services.member_roster import MemberRoster
from taskboard.services.member_transfer import MemberTransfer


def _ids(project):
    return [m["id"] for m in project.members]


@pytest.fixture
async def alpha_beta(store):
    alpha = await store.create("Alpha", "source")
    beta = await store.create("Beta", "destination")
    await MemberRoster(store).add_member(alpha.id, "m1", "Ana", "Developer")
    return alpha.id, beta.id


@pytest.fixture
def transfer(test_db):
    return MemberTransfer(test_db, timeout_seconds=5.0)


async def test_move_member_between_projects(alpha_beta, transfer, read_project):
    alpha_id, beta_id = alpha_beta

    moved = await transfer.move(alpha_id, "m1", beta_id)

    assert moved["id"] == "m1"
    assert moved["name"] == "Ana"
    assert moved["role"] == "Developer"
    assert _ids(await read_project(alpha_id)) == []
    assert _ids(await read_project(beta_id)) == ["m1"]


async def test_move_to_same_project_is_rejected(alpha_beta, transfer, read_project):
    alpha_id, _ = alpha_beta

    with pytest.raises(InvalidArgumentError):
        await transfer.move(alpha_id, "m1", alpha_id)

    assert _ids(await read_project(alpha_id)) == ["m1"]


async def test_missing_member_is_not_found(alpha_beta, transfer, read_project):
    alpha_id, beta_id = alpha_beta

    with pytest.raises(NotFoundError) as exc:
        await transfer.move(alpha_id, "m404", beta_id)

    assert exc.value.resource_type == "Member"
    assert _ids(await read_project(beta_id)) == []


async def test_missing_source_is_not_found(alpha_beta, transfer):
    _, beta_id = alpha_beta
    with pytest.raises(NotFoundError) as exc:
        await transfer.move(uuid.uuid4(), "m1", beta_id)
    assert exc.value.resource_type == "Project"


async def test_missing_destination_rolls_back_source(
    alpha_beta, transfer, read_project,
):
    alpha_id, _ = alpha_beta

    with pytest.raises(NotFoundError):
        await transfer.move(alpha_id, "m1", uuid.uuid4())

    assert _ids(await read_project(alpha_id)) == ["m1"]


async def test_failure_between_remove_and_add_keeps_member_in_source(
    alpha_beta, transfer, read_project, monkeypatch,
):
    alpha_id, beta_id = alpha_beta

    def failing_append(members, member, now=None):
        raise StorageError("flush")

    monkeypatch.setattr(transfer_module, "append_member", failing_append)

    with pytest.raises(StorageError):
        await transfer.move(alpha_id, "m1", beta_id)

    assert _ids(await read_project(alpha_id)) == ["m1"]
    assert _ids(await read_project(beta_id)) == []


async def test_destination_already_holding_member_is_conflict(
    store, alpha_beta, transfer, read_project,
):
    alpha_id, beta_id = alpha_beta
    await MemberRoster(store).add_member(beta_id, "m1", "Ana", "Developer")

    with pytest.raises(ConflictError):
        await transfer.move(alpha_id, "m1", beta_id)

    assert _ids(await read_project(alpha_id)) == ["m1"]
    assert _ids(await read_project(beta_id)) == ["m1"]


async def test_deadline_overrun_aborts_and_keeps_source(
    alpha_beta, test_db, read_project, monkeypatch,
):
    alpha_id, beta_id = alpha_beta
    slow = MemberTransfer(test_db, timeout_seconds=0.05)
    original_load = MemberTransfer._load

    async def stalled_load(self, project_id):
        if project_id == beta_id:
            await asyncio.sleep(1)
        return await original_load(self, project_id)

    monkeypatch.setattr(MemberTransfer, "_load", stalled_load)

    with pytest.raises(TransactionAbortedError) as exc:
        await slow.move(alpha_id, "m1", beta_id)

    assert exc.value.retryable is True
    assert _ids(await read_project(alpha_id)) == ["m1"]
    assert _ids(await read_project(beta_id)) == []


async def test_member_can_move_back(alpha_beta, transfer, read_project):
    alpha_id, beta_id = alpha_beta

    await transfer.move(alpha_id, "m1", beta_id)
    await transfer.move(beta_id, "m1", alpha_id)

    assert _ids(await read_project(alpha_id)) == ["m1"]
    assert _ids(await read_project(beta_id)) == []
