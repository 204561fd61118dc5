"""Membership ORM — join table between users and servers.

Invariants:
    - (user_id, server_id) is the primary key: set semantics, no duplicates
    - A user's membership set and a server's roster are both read from here

Design Decisions:
    - Join table over a users.servers array: one source of truth, so the two
      sides of the relationship cannot drift apart
    - ON DELETE CASCADE on both keys; the registries also delete rows explicitly
      so behaviour does not depend on SQLite's foreign_keys pragma
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from union.db.base import Base


class Membership(Base):
    __tablename__ = "memberships"

    user_id: Mapped[str] = mapped_column(
        String(20), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
    )
    server_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("servers.id", ondelete="CASCADE"), primary_key=True,
        index=True,
    )
