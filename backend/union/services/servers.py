"""Server Registry — server lifecycle, ownership checks and membership joins.

Invariants:
    - New ids are max(id) + 1, starting at 1 on an empty table
    - create() rejects an owner id with no account; the server row and the
      owner's membership row are written in one transaction
    - join_member/leave_member are idempotent; missing user or server is a no-op
    - delete() removes the server, every invite pointing at it and every
      membership row for it, in ONE transaction
    - get() returns the server with its roster expanded (public fields only)

Design Decisions:
    - max+1 allocation is a read-then-write: two concurrent creates can pick
      the same id, and the primary key turns the loser into a DatabaseError
    - Membership rows for joins and leaves are written through AccountRegistry,
      the owner of the account side of the relationship; only the owner's
      first membership is written here, alongside the server row
"""

import logging

from sqlalchemy import delete, func, select, update

from union.core.errors import ValidationFailureError
from union.core.patches import ServerPatch
from union.core.records import Server
from union.infrastructure.database import DatabaseSessionManager
from union.models.invite import Invite as InviteModel
from union.models.membership import Membership
from union.models.server import Server as ServerModel
from union.models.user import User as UserModel
from union.services.accounts import AccountRegistry
from union.services.queries import load_servers

logger = logging.getLogger(__name__)


class ServerRegistry:
    """Creates, updates and deletes servers; keeps rosters consistent."""

    def __init__(self, db: DatabaseSessionManager, accounts: AccountRegistry):
        self._db = db
        self._accounts = accounts

    async def create(self, name: str, icon_url: str | None, owner_id: str) -> Server:
        if not name or not name.strip():
            raise ValidationFailureError("Server name must not be empty", "name")

        async with self._db.session() as db:
            if await db.get(UserModel, owner_id) is None:
                raise ValidationFailureError("Owner account does not exist", "owner")
            largest = (await db.execute(select(func.max(ServerModel.id)))).scalar()
            server_id = (largest or 0) + 1
            db.add(ServerModel(id=server_id, name=name, icon_url=icon_url, owner=owner_id))
            db.add(Membership(user_id=owner_id, server_id=server_id))
            await db.commit()

        logger.info(
            f"Created server '{name}'",
            extra={"server_id": server_id, "user_id": owner_id},
        )
        return await self.get(server_id)

    async def update(self, server_id: int, patch: ServerPatch) -> bool:
        changes = patch.column_changes()
        if not changes:
            return await self.exists(server_id)
        async with self._db.session() as db:
            result = await db.execute(
                update(ServerModel).where(ServerModel.id == server_id).values(**changes),
            )
            await db.commit()
        return bool(result.rowcount)

    async def join_member(self, user_id: str, server_id: int) -> bool:
        """True when a membership row was added."""
        if not await self.exists(server_id):
            return False
        return await self._accounts.add_membership(user_id, server_id)

    async def leave_member(self, user_id: str, server_id: int) -> bool:
        """True when a membership row was removed."""
        return await self._accounts.remove_membership(user_id, server_id)

    async def delete(self, server_id: int) -> bool:
        async with self._db.session() as db:
            memberships = await db.execute(
                delete(Membership).where(Membership.server_id == server_id),
            )
            invites = await db.execute(
                delete(InviteModel).where(InviteModel.server_id == server_id),
            )
            result = await db.execute(
                delete(ServerModel).where(ServerModel.id == server_id),
            )
            await db.commit()

        if result.rowcount:
            logger.info(
                f"Deleted server, {invites.rowcount} invite(s), "
                f"{memberships.rowcount} membership(s)",
                extra={"server_id": server_id},
            )
        return bool(result.rowcount)

    async def get(self, server_id: int) -> Server | None:
        async with self._db.session() as db:
            servers = await load_servers(db, {server_id})
        return servers[0] if servers else None

    async def owns_server(self, user_id: str, server_id: int) -> bool:
        return await self._accounts.owns_server(user_id, server_id)

    async def exists(self, server_id: int | None) -> bool:
        if not server_id:
            return False
        async with self._db.session() as db:
            return await db.get(ServerModel, server_id) is not None
