"""Initial schema — users, servers, memberships, invites, messages.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(20), primary_key=True),
        sa.Column("username", sa.String(32), nullable=False),
        sa.Column("discriminator", sa.String(4), nullable=False),
        sa.Column("password_hash", sa.String(60), nullable=False),
        sa.Column("avatar_url", sa.Text, nullable=True),
        sa.Column("online", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("admin", sa.Boolean, nullable=True),
        sa.UniqueConstraint("username", "discriminator", name="uq_users_tag"),
    )
    op.create_index("ix_users_username", "users", ["username"])

    op.create_table(
        "servers",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("icon_url", sa.Text, nullable=True),
        sa.Column("owner", sa.String(20), nullable=False),
    )
    op.create_index("ix_servers_owner", "servers", ["owner"])

    op.create_table(
        "memberships",
        sa.Column(
            "user_id", sa.String(20),
            sa.ForeignKey("users.id", ondelete="CASCADE"), primary_key=True,
        ),
        sa.Column(
            "server_id", sa.Integer,
            sa.ForeignKey("servers.id", ondelete="CASCADE"), primary_key=True,
        ),
    )
    op.create_index("ix_memberships_server_id", "memberships", ["server_id"])

    op.create_table(
        "invites",
        sa.Column("code", sa.String(64), primary_key=True),
        sa.Column("server_id", sa.Integer, nullable=False),
        sa.Column("inviter", sa.String(20), nullable=False),
    )
    op.create_index("ix_invites_server_id", "invites", ["server_id"])

    op.create_table(
        "messages",
        sa.Column("id", sa.String(20), primary_key=True),
        sa.Column("author", sa.String(20), nullable=False),
        sa.Column("server", sa.Integer, nullable=False),
        sa.Column("contents", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_messages_server", "messages", ["server"])


def downgrade() -> None:
    op.drop_table("messages")
    op.drop_table("invites")
    op.drop_table("memberships")
    op.drop_table("servers")
    op.drop_table("users")
