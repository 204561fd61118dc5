"""Account Registry — registration, updates, presence and membership rows for accounts.

Invariants:
    - register() inserts an account with no memberships and online=False
    - update() re-rolls the discriminator on EVERY call, even when the username
      is unchanged (the returned tag always reflects the new value)
    - Presence writes are the only mutation whose failures may be suppressed,
      and only when the presence policy says so; suppression covers store
      errors (DatabaseError) and connection errors (OSError), nothing else
    - delete() removes the account and its own membership rows; servers it
      owns are left in place for the caller to reconcile
    - Membership mutations are idempotent (set semantics)

Design Decisions:
    - Discriminator lookups and tag lookups go through AccountQueries so
      DiscriminatorResolver and CredentialService stay free of SQLAlchemy
    - Presence policy is a constructor argument with a per-call override,
      so tests can assert both the swallowing and the propagating path
"""

import logging
import random

from sqlalchemy import delete, func, select, update

from union.core.discriminator import DiscriminatorResolver
from union.core.domain_types import TAG_SEPARATOR, format_tag
from union.core.errors import DatabaseError, ValidationFailureError
from union.core.patches import AccountPatch
from union.core.records import Account, Member, Server
from union.core.snowflake import SnowflakeAllocator
from union.infrastructure.database import DatabaseSessionManager
from union.models.membership import Membership
from union.models.server import Server as ServerModel
from union.models.user import User as UserModel
from union.services.credentials import CredentialService
from union.services.queries import (
    AccountQueries, is_member, load_account, load_servers, member_from_row,
    members_of, server_ids_of,
)

logger = logging.getLogger(__name__)

FORBIDDEN_USERNAME_CHARS = (TAG_SEPARATOR, ":")


def validate_username(username: str) -> str:
    if not username or not username.strip():
        raise ValidationFailureError("Username must not be empty", "username")
    for char in FORBIDDEN_USERNAME_CHARS:
        if char in username:
            raise ValidationFailureError(
                f"Username must not contain '{char}'", "username",
            )
    return username


class AccountRegistry:
    """Creates, updates and deletes accounts; answers membership questions."""

    def __init__(
        self,
        db: DatabaseSessionManager,
        allocator: SnowflakeAllocator,
        credentials: CredentialService,
        *,
        max_probes: int = 32,
        rng: random.Random | None = None,
        suppress_presence_errors: bool = True,
    ):
        self._db = db
        self._allocator = allocator
        self._credentials = credentials
        self.queries = AccountQueries(db)
        self._resolver = DiscriminatorResolver(self.queries, max_probes, rng)
        self.suppress_presence_errors = suppress_presence_errors

    # ─── Mutations ───────────────────────────────────────────────

    async def register(self, username: str, password: str) -> str:
        """Create an account and return its tag ("name#0042")."""
        validate_username(username)
        if not password:
            raise ValidationFailureError("Password must not be empty", "password")

        user_id = self._allocator.allocate_str()
        discriminator = await self._resolver.resolve(username)
        password_hash = await self._credentials.hash(password)

        async with self._db.session() as db:
            db.add(UserModel(
                id=user_id,
                username=username,
                discriminator=discriminator,
                password_hash=password_hash,
                online=False,
            ))
            await db.commit()

        logger.info(
            f"Registered {format_tag(username, discriminator)}",
            extra={"user_id": user_id},
        )
        return format_tag(username, discriminator)

    async def update(self, user_id: str, patch: AccountPatch) -> str | None:
        """Apply a patch; returns the new tag, or None if the account is gone."""
        validate_username(patch.username)
        discriminator = await self._resolver.resolve(patch.username)
        changes = patch.column_changes()
        changes["discriminator"] = discriminator
        new_password = patch.new_password()
        if new_password is not None:
            changes["password_hash"] = await self._credentials.hash(new_password)

        async with self._db.session() as db:
            result = await db.execute(
                update(UserModel).where(UserModel.id == user_id).values(**changes),
            )
            await db.commit()

        if result.rowcount == 0:
            return None
        logger.info(
            f"Updated account, fields: {sorted(changes)}",
            extra={"user_id": user_id},
        )
        return format_tag(patch.username, discriminator)

    async def set_presence(
        self, user_id: str, online: bool, *, suppress_errors: bool | None = None,
    ) -> bool:
        """Write the online flag. False when a suppressed failure occurred."""
        suppress = (
            self.suppress_presence_errors if suppress_errors is None else suppress_errors
        )
        try:
            async with self._db.session() as db:
                await db.execute(
                    update(UserModel)
                    .where(UserModel.id == user_id)
                    .values(online=online),
                )
                await db.commit()
        except (DatabaseError, OSError) as e:
            if not suppress:
                raise
            logger.warning(
                f"Presence update suppressed: {e}", extra={"user_id": user_id},
            )
            return False
        return True

    async def reset_all_presence(self) -> int:
        """Mark every account offline (orderly shutdown). Returns rows touched."""
        async with self._db.session() as db:
            result = await db.execute(
                update(UserModel)
                .where(UserModel.online.is_(True))
                .values(online=False),
            )
            await db.commit()
        logger.info(f"Reset presence for {result.rowcount} account(s)")
        return result.rowcount

    async def delete(self, user_id: str) -> bool:
        async with self._db.session() as db:
            await db.execute(
                delete(Membership).where(Membership.user_id == user_id),
            )
            result = await db.execute(
                delete(UserModel).where(UserModel.id == user_id),
            )
            await db.commit()
        if result.rowcount:
            logger.info("Deleted account", extra={"user_id": user_id})
        return bool(result.rowcount)

    async def add_membership(self, user_id: str, server_id: int) -> bool:
        """Insert (user, server) unless the user is missing or already a member."""
        async with self._db.session() as db:
            if await db.get(UserModel, user_id) is None:
                return False
            if await is_member(db, user_id, server_id):
                return False
            db.add(Membership(user_id=user_id, server_id=server_id))
            await db.commit()
        return True

    async def remove_membership(self, user_id: str, server_id: int) -> bool:
        async with self._db.session() as db:
            result = await db.execute(
                delete(Membership)
                .where(Membership.user_id == user_id)
                .where(Membership.server_id == server_id),
            )
            await db.commit()
        return bool(result.rowcount)

    # ─── Reads ───────────────────────────────────────────────────

    async def get(self, user_id: str) -> Account | None:
        """Full account including password hash and membership set."""
        async with self._db.session() as db:
            return await load_account(db, await db.get(UserModel, user_id))

    async def get_member(self, user_id: str) -> Member | None:
        """Account with private fields stripped."""
        async with self._db.session() as db:
            user = await db.get(UserModel, user_id)
            return member_from_row(user) if user is not None else None

    async def find_by_tag(self, username: str, discriminator: str) -> Account | None:
        return await self.queries.find_by_tag(username, discriminator)

    async def members_of(self, server_id: int) -> list[Member]:
        async with self._db.session() as db:
            return await members_of(db, server_id)

    async def server_ids_of(self, user_id: str) -> set[int]:
        async with self._db.session() as db:
            return await server_ids_of(db, user_id)

    async def servers_of(self, user_id: str) -> list[Server]:
        async with self._db.session() as db:
            return await load_servers(db, await server_ids_of(db, user_id))

    async def owned_server_count(self, user_id: str) -> int:
        async with self._db.session() as db:
            result = await db.execute(
                select(func.count()).select_from(ServerModel)
                .where(ServerModel.owner == user_id),
            )
            return int(result.scalar_one())

    async def is_in_server(self, user_id: str, server_id: int) -> bool:
        async with self._db.session() as db:
            return await is_member(db, user_id, server_id)

    async def owns_server(self, user_id: str, server_id: int) -> bool:
        async with self._db.session() as db:
            server = await db.get(ServerModel, server_id)
            return server is not None and server.owner == user_id
