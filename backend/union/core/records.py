"""Domain Records — immutable snapshots returned by the registries.

Invariants:
    - Account carries private fields (password_hash, servers); Member never does
    - Server.members is the derived roster at read time, not a stored field
    - Records are frozen: mutation goes through the registries only

Design Decisions:
    - Plain dataclasses over ORM instances: callers never hold a live session
      object, so no lazy-load surprises after the session closes
"""

from dataclasses import dataclass, field
from datetime import datetime

from union.core.domain_types import format_tag


@dataclass(frozen=True)
class Member:
    """Account without private fields."""
    id: str
    username: str
    discriminator: str
    avatar_url: str | None = None
    online: bool = False
    admin: bool | None = None

    @property
    def tag(self) -> str:
        return format_tag(self.username, self.discriminator)


@dataclass(frozen=True)
class Account:
    """Full account, including the password hash and membership set."""
    id: str
    username: str
    discriminator: str
    password_hash: str
    servers: frozenset[int] = frozenset()
    avatar_url: str | None = None
    online: bool = False
    admin: bool | None = None

    @property
    def tag(self) -> str:
        return format_tag(self.username, self.discriminator)

    def public(self) -> Member:
        return Member(
            id=self.id,
            username=self.username,
            discriminator=self.discriminator,
            avatar_url=self.avatar_url,
            online=self.online,
            admin=self.admin,
        )


@dataclass(frozen=True)
class Server:
    id: int
    name: str
    owner: str
    icon_url: str | None = None
    members: list[Member] = field(default_factory=list)

    @property
    def member_ids(self) -> set[str]:
        return {m.id for m in self.members}


@dataclass(frozen=True)
class Invite:
    code: str
    server_id: int
    inviter: str


@dataclass(frozen=True)
class Message:
    id: str
    author: str
    server: int
    contents: str
    created_at: datetime
