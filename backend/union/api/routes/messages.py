"""Message Routes — post into a server, then edit/delete/read by id.

Invariants:
    - Posting and reading require membership of the message's server
    - Editing and deleting require being the author
    - Message ids come from the shared SnowflakeAllocator
"""

from fastapi import APIRouter, Depends, Response, status

from union.api.dependencies import (
    current_account, get_registries, joined_server_or_403, message_or_404,
)
from union.core.errors import ErrorContext, ForbiddenError
from union.core.records import Account, Message
from union.schemas.message import MessageCreate, MessageResponse, MessageUpdate
from union.services.registries import Registries

router = APIRouter(tags=["messages"])


def _require_author(account: Account, message: Message) -> None:
    if message.author != account.id:
        raise ForbiddenError(
            "Only the author can change this message",
            ErrorContext(user_id=account.id, server_id=message.server),
        )


@router.post(
    "/servers/{server_id}/messages",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def post_message(
    server_id: int,
    body: MessageCreate,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    await joined_server_or_403(registries, account, server_id)
    return await registries.messages.create(
        registries.allocator.allocate_str(), account.id, server_id, body.contents,
    )


@router.get("/messages/{message_id}", response_model=MessageResponse)
async def get_message(
    message_id: str,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    message = await message_or_404(registries, message_id)
    await joined_server_or_403(registries, account, message.server)
    return message


@router.put("/messages/{message_id}", response_model=MessageResponse)
async def edit_message(
    message_id: str,
    body: MessageUpdate,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    _require_author(account, await message_or_404(registries, message_id))
    await registries.messages.update(message_id, body.contents)
    return await message_or_404(registries, message_id)


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(
    message_id: str,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    _require_author(account, await message_or_404(registries, message_id))
    await registries.messages.delete(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
