"""Member Roster: add and list the members of one project."""

import logging
from uuid import UUID

from taskboard.core.member_records import append_member, new_member
from taskboard.models.project import Project
from taskboard.services.project_store import ProjectStore

logger = logging.getLogger(__name__)


class MemberRoster:
    """Member operations that touch a single project."""

    def __init__(self, store: ProjectStore):
        self.store = store

    async def add_member(
        self, project_id: UUID, member_id: str, name: str, role: str,
    ) -> dict:
        member = new_member(member_id, name, role)

        def join(project: Project) -> dict:
            project.members = append_member(project.members, member)
            return project.members[-1]

        _, added = await self.store.mutate(project_id, join)
        logger.info(
            f"Member '{added['name']}' joined as {added['role']}",
            extra={"project_id": str(project_id), "member_id": added["id"]},
        )
        return added

    async def list_members(self, project_id: UUID) -> list[dict]:
        project = await self.store.get(project_id)
        return [dict(m) for m in project.members]
