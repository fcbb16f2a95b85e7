"""ORM Models: SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Project is the aggregate root; Activity stands alone

Design Decisions:
    - All models imported here so Base.metadata is complete for create_all and alembic
"""

from taskboard.models.project import Project  # noqa: F401
from taskboard.models.activity import Activity  # noqa: F401
