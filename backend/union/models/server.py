"""Server ORM — a guild owned by one account.

Invariants:
    - id is allocated as max(id) + 1 by ServerRegistry (no sequence)
    - owner is an account id; the owner is always a member after creation
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from union.db.base import Base


class Server(Base):
    __tablename__ = "servers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    icon_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
