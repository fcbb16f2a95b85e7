"""Activity ORM: free-standing, append-only event note.

Invariants:
    - Never updated after insert
    - No foreign key to projects (entries outlive the projects they mention)
    - id is auto-increment and breaks timestamp ties when reading newest-first
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base


class Activity(Base):
    """Activity entry."""
    __tablename__ = "activities"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    message: Mapped[str] = mapped_column(Text, nullable=False)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
