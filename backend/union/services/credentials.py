"""Credential Service — password hashing/verification and Basic header authentication.

Invariants:
    - authenticate() never raises for malformed input; every failure is None
    - Lookup is by the exact (name, discriminator) pair
    - bcrypt work runs in a worker thread so the event loop never blocks on it

Design Decisions:
    - Parsing lives in core/basic_auth.py (pure); this service only adds the
      lookup and the hash comparison
"""

import asyncio
import logging

from union.core.basic_auth import parse_basic_auth
from union.core.records import Account
from union.core.repository_protocols import AccountLookup
from union.infrastructure.password_hasher import PasswordHasher

logger = logging.getLogger(__name__)


class CredentialService:
    """Hashes passwords and turns Authorization headers into accounts."""

    def __init__(self, accounts: AccountLookup, hasher: PasswordHasher):
        self._accounts = accounts
        self._hasher = hasher

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._hasher.hash, password)

    async def verify(self, password: str, hashed: str) -> bool:
        return await asyncio.to_thread(self._hasher.verify, password, hashed)

    async def authenticate(self, raw_header: str | None) -> Account | None:
        credentials = parse_basic_auth(raw_header)
        if credentials is None:
            return None

        account = await self._accounts.find_by_tag(
            credentials.name, credentials.discriminator,
        )
        if account is None:
            logger.info(
                f"Authentication failed: unknown tag "
                f"{credentials.name}#{credentials.discriminator}",
            )
            return None

        if not await self.verify(credentials.password, account.password_hash):
            logger.info(
                "Authentication failed: wrong password",
                extra={"user_id": account.id},
            )
            return None

        return account
