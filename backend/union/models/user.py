"""User ORM — account record keyed by a snowflake id.

Invariants:
    - id is the decimal string of a 64-bit snowflake (never reused)
    - (username, discriminator) is unique
    - password_hash is a bcrypt hash, never plaintext
    - online defaults to False; admin is NULL until explicitly set

Design Decisions:
    - Membership lives in the memberships table, not an array column on users
"""

from sqlalchemy import Boolean, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from union.db.base import Base


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("username", "discriminator", name="uq_users_tag"),
    )

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    username: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    discriminator: Mapped[str] = mapped_column(String(4), nullable=False)
    password_hash: Mapped[str] = mapped_column(String(60), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    online: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
