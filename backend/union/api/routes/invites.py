"""Invite Routes — issue an invite for an owned server, accept one by code.

Invariants:
    - Only the owner may issue invites
    - Accepting resolves the code and joins the caller; the invite stays valid
    - Accepting twice is harmless (join is idempotent)
"""

from fastapi import APIRouter, Depends, status

from union.api.dependencies import (
    current_account, get_registries, owned_server_or_403, server_or_404,
)
from union.core.errors import ResourceNotFoundError
from union.core.records import Account
from union.schemas.message import InviteResponse
from union.schemas.server import ServerResponse
from union.services.registries import Registries

router = APIRouter(tags=["invites"])


@router.post(
    "/servers/{server_id}/invites",
    response_model=InviteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_invite(
    server_id: int,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    await owned_server_or_403(registries, account, server_id)
    code = await registries.invites.create(server_id, account.id)
    return InviteResponse(code=code, server_id=server_id, inviter=account.id)


@router.post("/invites/{code}", response_model=ServerResponse)
async def accept_invite(
    code: str,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    invite = await registries.invites.resolve(code)
    if invite is None:
        raise ResourceNotFoundError("Invite", code)
    await registries.servers.join_member(account.id, invite.server_id)
    return await server_or_404(registries, invite.server_id)
