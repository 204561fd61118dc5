"""Message Registry — keyed message store with server-assigned timestamps.

Invariants:
    - create() stamps created_at itself; callers cannot backdate a message
    - update() changes contents only
    - No listing or ordering: lookup is by id
"""

from datetime import datetime, timezone

from sqlalchemy import delete, update

from union.core.errors import ValidationFailureError
from union.core.records import Message
from union.infrastructure.database import DatabaseSessionManager
from union.models.message import Message as MessageModel


def _to_record(row: MessageModel) -> Message:
    return Message(
        id=row.id,
        author=row.author,
        server=row.server,
        contents=row.contents,
        created_at=row.created_at,
    )


class MessageRegistry:

    def __init__(self, db: DatabaseSessionManager):
        self._db = db

    async def create(
        self, message_id: str, author: str, server: int, contents: str,
    ) -> Message:
        if not contents:
            raise ValidationFailureError("Message contents must not be empty", "contents")
        row = MessageModel(
            id=message_id,
            author=author,
            server=server,
            contents=contents,
            created_at=datetime.now(timezone.utc),
        )
        async with self._db.session() as db:
            db.add(row)
            await db.commit()
        return _to_record(row)

    async def update(self, message_id: str, contents: str) -> bool:
        if not contents:
            raise ValidationFailureError("Message contents must not be empty", "contents")
        async with self._db.session() as db:
            result = await db.execute(
                update(MessageModel)
                .where(MessageModel.id == message_id)
                .values(contents=contents),
            )
            await db.commit()
        return bool(result.rowcount)

    async def delete(self, message_id: str) -> bool:
        async with self._db.session() as db:
            result = await db.execute(
                delete(MessageModel).where(MessageModel.id == message_id),
            )
            await db.commit()
        return bool(result.rowcount)

    async def get(self, message_id: str) -> Message | None:
        async with self._db.session() as db:
            row = await db.get(MessageModel, message_id)
        return _to_record(row) if row is not None else None
