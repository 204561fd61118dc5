"""Message ORM — keyed message store.

Invariants:
    - id is supplied by the caller (a snowflake from the Identifier Allocator)
    - created_at is assigned by the store at insert time, never by the caller
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from union.db.base import Base


class Message(Base):
    __tablename__ = "messages"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    author: Mapped[str] = mapped_column(String(20), nullable=False)
    server: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    contents: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
