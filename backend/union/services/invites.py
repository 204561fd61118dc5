"""Invite Registry — issues and resolves invite codes.

Invariants:
    - Codes are URL-safe random strings from the secrets module
    - resolve() is read-only: accepting an invite never consumes it
    - Unknown or empty codes resolve to None
"""

import logging
import secrets
from typing import Callable

from union.core.records import Invite
from union.infrastructure.database import DatabaseSessionManager
from union.models.invite import Invite as InviteModel

logger = logging.getLogger(__name__)


class InviteRegistry:

    def __init__(
        self,
        db: DatabaseSessionManager,
        code_bytes: int = 6,
        code_factory: Callable[[], str] | None = None,
    ):
        self._db = db
        self._new_code = code_factory or (lambda: secrets.token_urlsafe(code_bytes))

    async def create(self, server_id: int, inviter_id: str) -> str:
        code = self._new_code()
        async with self._db.session() as db:
            db.add(InviteModel(code=code, server_id=server_id, inviter=inviter_id))
            await db.commit()
        logger.info(
            f"Issued invite {code}",
            extra={"server_id": server_id, "user_id": inviter_id},
        )
        return code

    async def resolve(self, code: str) -> Invite | None:
        if not code:
            return None
        async with self._db.session() as db:
            row = await db.get(InviteModel, code)
        if row is None:
            return None
        return Invite(code=row.code, server_id=row.server_id, inviter=row.inviter)
