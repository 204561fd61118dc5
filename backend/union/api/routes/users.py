"""User Routes — registration and the caller's own account.

Invariants:
    - POST /users is the only unauthenticated write
    - Only an existing admin may change the admin flag
    - DELETE /users/self removes the account only; owned servers stay
"""

from dataclasses import asdict

from fastapi import APIRouter, Depends, Response, status

from union.api.dependencies import current_account, get_registries
from union.core.errors import ErrorContext, ForbiddenError, ResourceNotFoundError
from union.core.patches import is_set
from union.core.records import Account
from union.schemas.server import ServerResponse
from union.schemas.user import (
    AccountResponse, AccountUpdate, RegisterRequest, TagResponse,
)
from union.services.registries import Registries

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest, registries: Registries = Depends(get_registries),
):
    tag = await registries.accounts.register(body.username, body.password)
    return TagResponse(tag=tag)


@router.get("/self", response_model=AccountResponse)
async def get_self(account: Account = Depends(current_account)):
    return AccountResponse(
        **asdict(account.public()), servers=sorted(account.servers),
    )


@router.put("/self", response_model=TagResponse)
async def update_self(
    body: AccountUpdate,
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    patch = body.to_patch()
    if is_set(patch.admin) and not account.admin:
        raise ForbiddenError(
            "Only administrators can change the admin flag",
            ErrorContext(user_id=account.id),
        )
    tag = await registries.accounts.update(account.id, patch)
    if tag is None:
        raise ResourceNotFoundError("User", account.id)
    return TagResponse(tag=tag)


@router.delete("/self", status_code=status.HTTP_204_NO_CONTENT)
async def delete_self(
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    await registries.accounts.delete(account.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/self/servers", response_model=list[ServerResponse])
async def list_own_servers(
    account: Account = Depends(current_account),
    registries: Registries = Depends(get_registries),
):
    return await registries.accounts.servers_of(account.id)
