"""ORM Models — SQLAlchemy declarative models for all stored entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Membership is the single source of truth for who belongs to which server

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from union.models.user import User  # noqa: F401
from union.models.server import Server  # noqa: F401
from union.models.membership import Membership  # noqa: F401
from union.models.invite import Invite  # noqa: F401
from union.models.message import Message  # noqa: F401
