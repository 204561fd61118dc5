"""Request Dependencies — registry access, authentication and lookup-or-404 helpers.

Invariants:
    - Registries are read from app.state (set once by create_app)
    - current_account raises UnauthorizedError (401) for any authentication failure
    - Lookup helpers are the only place None/False becomes a 404/403
"""

from fastapi import Depends, Header, Request

from union.core.errors import (
    ErrorContext, ForbiddenError, ResourceNotFoundError, UnauthorizedError,
)
from union.core.records import Account, Message, Server
from union.services.registries import Registries


def get_registries(request: Request) -> Registries:
    registries = request.app.state.registries
    if registries is None:
        raise RuntimeError("Registries not initialized")
    return registries


async def current_account(
    authorization: str | None = Header(None),
    registries: Registries = Depends(get_registries),
) -> Account:
    account = await registries.credentials.authenticate(authorization)
    if account is None:
        raise UnauthorizedError()
    return account


async def server_or_404(registries: Registries, server_id: int) -> Server:
    server = await registries.servers.get(server_id)
    if server is None:
        raise ResourceNotFoundError("Server", str(server_id))
    return server


async def owned_server_or_403(
    registries: Registries, account: Account, server_id: int,
) -> Server:
    server = await server_or_404(registries, server_id)
    if server.owner != account.id:
        raise ForbiddenError(
            "Only the server owner can do this",
            ErrorContext(user_id=account.id, server_id=server_id),
        )
    return server


async def joined_server_or_403(
    registries: Registries, account: Account, server_id: int,
) -> Server:
    server = await server_or_404(registries, server_id)
    if account.id not in server.member_ids:
        raise ForbiddenError(
            "You are not a member of this server",
            ErrorContext(user_id=account.id, server_id=server_id),
        )
    return server


async def message_or_404(registries: Registries, message_id: str) -> Message:
    message = await registries.messages.get(message_id)
    if message is None:
        raise ResourceNotFoundError("Message", message_id)
    return message
