"""Membership and ownership routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from certis.application.usecase.member import (
    ChangeRoleRequest,
    ChangeRoleUseCase,
    ReconcileOwnerRequest,
    ReconcileOwnerUseCase,
    RemoveMemberRequest,
    RemoveMemberUseCase,
    TransferOwnershipRequest,
    TransferOwnershipResponse,
    TransferOwnershipUseCase,
)
from certis.application.usecase.views import OrganizationView, UserView
from certis.domain.service import TokenService
from certis.domain.value import Role
from certis.interface.api.dependencies import bearer_token

router = APIRouter(prefix="/members", tags=["members"], route_class=DishkaRoute)


class ChangeRoleAPIRequest(BaseModel):
    role: Role


class TransferOwnershipAPIRequest(BaseModel):
    new_owner_id: UUID


@router.put("/{user_id}/role", response_model=UserView)
async def change_role(
    user_id: UUID,
    request: ChangeRoleAPIRequest,
    token_service: FromDishka[TokenService],
    change_role_use_case: FromDishka[ChangeRoleUseCase],
    token: str = Depends(bearer_token),
) -> UserView:
    """Change a member's role.

    Assigning OWNER hands ownership over and demotes the previous owner.
    """
    claims = token_service.verify(token)
    return await change_role_use_case.execute(
        ChangeRoleRequest(claims=claims, target_user_id=user_id, role=request.role)
    )


@router.delete("/{user_id}", response_model=UserView)
async def remove_member(
    user_id: UUID,
    token_service: FromDishka[TokenService],
    remove_member_use_case: FromDishka[RemoveMemberUseCase],
    token: str = Depends(bearer_token),
) -> UserView:
    """Remove a member from their organization. The owner cannot be removed."""
    claims = token_service.verify(token)
    return await remove_member_use_case.execute(
        RemoveMemberRequest(claims=claims, target_user_id=user_id)
    )


@router.post("/transfer-ownership", response_model=TransferOwnershipResponse)
async def transfer_ownership(
    request: TransferOwnershipAPIRequest,
    token_service: FromDishka[TokenService],
    transfer_ownership_use_case: FromDishka[TransferOwnershipUseCase],
    token: str = Depends(bearer_token),
) -> TransferOwnershipResponse:
    """Hand ownership to another member; the caller becomes ADMIN."""
    claims = token_service.verify(token)
    return await transfer_ownership_use_case.execute(
        TransferOwnershipRequest(claims=claims, new_owner_id=request.new_owner_id)
    )


@router.post("/reconcile-owner/{organization_id}", response_model=OrganizationView)
async def reconcile_owner(
    organization_id: UUID,
    token_service: FromDishka[TokenService],
    reconcile_owner_use_case: FromDishka[ReconcileOwnerUseCase],
    token: str = Depends(bearer_token),
) -> OrganizationView:
    """Repair an organization's ownership record. Platform staff only."""
    claims = token_service.verify(token)
    return await reconcile_owner_use_case.execute(
        ReconcileOwnerRequest(claims=claims, organization_id=organization_id)
    )
