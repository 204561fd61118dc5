"""Shared Read Queries — row-to-record conversion and the account lookups used by core.

Invariants:
    - Query functions take an open AsyncSession and never commit
    - Member records never carry password_hash or the membership set
    - Rosters are always read from the memberships table (no cached copies)

Design Decisions:
    - Module-level functions over a repository class: both registries compose
      them inside their own sessions, so a roster read can share a transaction
      with the write that precedes it
    - AccountQueries wraps the functions behind the core Protocols
      (DiscriminatorLookup, AccountLookup) with one session per call
"""

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from union.core.records import Account, Member, Server
from union.infrastructure.database import DatabaseSessionManager
from union.models.membership import Membership
from union.models.server import Server as ServerModel
from union.models.user import User as UserModel


def member_from_row(user: UserModel) -> Member:
    return Member(
        id=user.id,
        username=user.username,
        discriminator=user.discriminator,
        avatar_url=user.avatar_url,
        online=user.online,
        admin=user.admin,
    )


def account_from_row(user: UserModel, server_ids: set[int]) -> Account:
    return Account(
        id=user.id,
        username=user.username,
        discriminator=user.discriminator,
        password_hash=user.password_hash,
        servers=frozenset(server_ids),
        avatar_url=user.avatar_url,
        online=user.online,
        admin=user.admin,
    )


async def server_ids_of(db: AsyncSession, user_id: str) -> set[int]:
    result = await db.execute(
        select(Membership.server_id).where(Membership.user_id == user_id),
    )
    return set(result.scalars().all())


async def load_account(db: AsyncSession, user: UserModel | None) -> Account | None:
    if user is None:
        return None
    return account_from_row(user, await server_ids_of(db, user.id))


async def members_of(db: AsyncSession, server_id: int) -> list[Member]:
    result = await db.execute(
        select(UserModel)
        .join(Membership, Membership.user_id == UserModel.id)
        .where(Membership.server_id == server_id)
        .order_by(UserModel.id),
    )
    return [member_from_row(u) for u in result.scalars().all()]


async def load_servers(db: AsyncSession, server_ids: set[int]) -> list[Server]:
    """Servers with their rosters expanded, ordered by id. Two queries total."""
    if not server_ids:
        return []
    result = await db.execute(
        select(ServerModel)
        .where(ServerModel.id.in_(server_ids))
        .order_by(ServerModel.id),
    )
    rows = result.scalars().all()
    if not rows:
        return []

    rosters: dict[int, list[Member]] = {row.id: [] for row in rows}
    members = await db.execute(
        select(Membership.server_id, UserModel)
        .join(UserModel, Membership.user_id == UserModel.id)
        .where(Membership.server_id.in_(list(rosters)))
        .order_by(UserModel.id),
    )
    for server_id, user in members.all():
        rosters[server_id].append(member_from_row(user))

    return [
        Server(
            id=row.id,
            name=row.name,
            owner=row.owner,
            icon_url=row.icon_url,
            members=rosters[row.id],
        )
        for row in rows
    ]


async def is_member(db: AsyncSession, user_id: str, server_id: int) -> bool:
    result = await db.execute(
        select(exists().where(
            Membership.user_id == user_id, Membership.server_id == server_id,
        )),
    )
    return bool(result.scalar())


class AccountQueries:
    """Account namespace reads, one session per call."""

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def discriminator_taken(self, username: str, discriminator: str) -> bool:
        async with self._db.session() as db:
            result = await db.execute(
                select(exists().where(
                    UserModel.username == username,
                    UserModel.discriminator == discriminator,
                )),
            )
            return bool(result.scalar())

    async def discriminators_in_use(self, username: str) -> set[str]:
        async with self._db.session() as db:
            result = await db.execute(
                select(UserModel.discriminator).where(UserModel.username == username),
            )
            return set(result.scalars().all())

    async def find_by_tag(self, username: str, discriminator: str) -> Account | None:
        async with self._db.session() as db:
            result = await db.execute(
                select(UserModel)
                .where(UserModel.username == username)
                .where(UserModel.discriminator == discriminator)
                .limit(1),
            )
            return await load_account(db, result.scalar_one_or_none())
