"""Server Routes — create, read, update, delete and leave.

Invariants:
    - Reads require membership; writes and deletion require ownership
    - The owner cannot leave their own server (they delete it instead)
"""

from fastapi import APIRouter, Depends, Response, status

from union.api.dependencies import (
    current_account, get_registries, joined_server_or_403, owned_server_or_403,
)
from union.core.errors import ErrorContext, ForbiddenError
from union.core.records import Account
from union.schemas.server import ServerCreate, ServerResponse, ServerUpdate
from union.services.registries import Registries

router = APIRouter(prefix="/servers", tags=["servers"])


@router.post("", response_model=ServerResponse, status_code=status.HTTP_201_CREATED)
async def create_server(
    body: ServerCreate,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    return await registries.servers.create(body.name, body.icon_url, account.id)


@router.get("/{server_id}", response_model=ServerResponse)
async def get_server(
    server_id: int,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    return await joined_server_or_403(registries, account, server_id)


@router.put("/{server_id}", response_model=ServerResponse)
async def update_server(
    server_id: int,
    body: ServerUpdate,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    await owned_server_or_403(registries, account, server_id)
    await registries.servers.update(server_id, body.to_patch())
    return await registries.servers.get(server_id)


@router.delete("/{server_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_server(
    server_id: int,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    await owned_server_or_403(registries, account, server_id)
    await registries.servers.delete(server_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{server_id}/members/self", status_code=status.HTTP_204_NO_CONTENT)
async def leave_server(
    server_id: int,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    server = await joined_server_or_403(registries, account, server_id)
    if server.owner == account.id:
        raise ForbiddenError(
            "The owner cannot leave the server",
            ErrorContext(user_id=account.id, server_id=server_id),
        )
    await registries.servers.leave_member(account.id, server_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
