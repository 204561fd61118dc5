"""Invite ORM — short random code pointing at a server.

Invariants:
    - code is the primary key (collision resistance comes from the generator)
    - No expiry and no use counter: invites stay valid until their server is deleted
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from union.db.base import Base


class Invite(Base):
    __tablename__ = "invites"

    code: Mapped[str] = mapped_column(String(64), primary_key=True)
    server_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    inviter: Mapped[str] = mapped_column(String(20), nullable=False)
