"""Project ORM: the aggregate root, with its tasks and members embedded as JSON.

Invariants:
    - id is UUID primary key (client-side default)
    - title is globally unique (uq_projects_title), enforced by the database
    - tasks and members are JSON lists; they are replaced, never mutated in place,
      so the ORM sees every change
    - revision is the SQLAlchemy version counter: each UPDATE/DELETE through the
      ORM carries "WHERE revision = <loaded value>" and fails with StaleDataError
      when another writer got there first
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, JSON, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from taskboard.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Project(Base):
    """Project aggregate root: owns its tasks and members."""
    __tablename__ = "projects"
    __table_args__ = (
        UniqueConstraint("title", name="uq_projects_title"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(String(30), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tasks: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    members: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    revision: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=_utcnow, onupdate=_utcnow,
    )

    __mapper_args__ = {"version_id_col": revision}
