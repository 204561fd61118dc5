"""Registry Wiring — builds every registry from one store handle and the settings.

Invariants:
    - One DatabaseSessionManager, one SnowflakeAllocator, one CredentialService per container
    - AccountRegistry and CredentialService share the same account lookups

Design Decisions:
    - Plain dataclass container over a DI framework: the graph is five nodes deep
"""

import random
from dataclasses import dataclass

from union.config import Settings
from union.core.snowflake import SnowflakeAllocator
from union.infrastructure.database import DatabaseSessionManager
from union.infrastructure.password_hasher import PasswordHasher
from union.services.accounts import AccountRegistry
from union.services.credentials import CredentialService
from union.services.invites import InviteRegistry
from union.services.messages import MessageRegistry
from union.services.queries import AccountQueries
from union.services.servers import ServerRegistry


@dataclass
class Registries:
    db: DatabaseSessionManager
    allocator: SnowflakeAllocator
    credentials: CredentialService
    accounts: AccountRegistry
    servers: ServerRegistry
    invites: InviteRegistry
    messages: MessageRegistry


def build_registries(
    db: DatabaseSessionManager,
    settings: Settings,
    *,
    rng: random.Random | None = None,
) -> Registries:
    allocator = SnowflakeAllocator(worker_id=settings.snowflake_worker_id)
    credentials = CredentialService(
        AccountQueries(db), PasswordHasher(rounds=settings.password_hash_rounds),
    )
    accounts = AccountRegistry(
        db,
        allocator,
        credentials,
        max_probes=settings.discriminator_max_probes,
        rng=rng,
        suppress_presence_errors=settings.presence_suppress_errors,
    )
    return Registries(
        db=db,
        allocator=allocator,
        credentials=credentials,
        accounts=accounts,
        servers=ServerRegistry(db, accounts),
        invites=InviteRegistry(db, code_bytes=settings.invite_code_bytes),
        messages=MessageRegistry(db),
    )
