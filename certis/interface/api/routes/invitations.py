"""Invitation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Path, status
from pydantic import BaseModel, EmailStr, Field

from certis.application.usecase.invitation import (
    AcceptInvitationRequest,
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    CreateInvitationRequest,
    CreateInvitationUseCase,
    ListPendingInvitationsRequest,
    ListPendingInvitationsResponse,
    ListPendingInvitationsUseCase,
    RevokeInvitationRequest,
    RevokeInvitationUseCase,
    SweepExpiredInvitationsRequest,
    SweepExpiredInvitationsResponse,
    SweepExpiredInvitationsUseCase,
)
from certis.application.usecase.views import InvitationView
from certis.domain.service import TokenService
from certis.domain.value import Role
from certis.interface.api.dependencies import bearer_token

router = APIRouter(prefix="/invitations", tags=["invitations"], route_class=DishkaRoute)


class CreateInvitationAPIRequest(BaseModel):
    """API request for inviting someone to the caller's organization."""

    email: EmailStr
    role: Role = Role.USER


class AcceptInvitationAPIRequest(BaseModel):
    """API request carrying the token from the invitation email."""

    token: str = Field(min_length=1, max_length=255)


@router.post("", response_model=InvitationView, status_code=status.HTTP_201_CREATED)
async def create_invitation(
    request: CreateInvitationAPIRequest,
    token_service: FromDishka[TokenService],
    create_invitation_use_case: FromDishka[CreateInvitationUseCase],
    token: str = Depends(bearer_token),
) -> InvitationView:
    """Invite an email address to the caller's organization.

    Requires OWNER or ADMIN. The invitation email is sent in the background;
    a delivery failure does not fail this request.
    """
    claims = token_service.verify(token)
    return await create_invitation_use_case.execute(
        CreateInvitationRequest(claims=claims, email=request.email, role=request.role)
    )


@router.get("/pending", response_model=ListPendingInvitationsResponse)
async def list_pending_invitations(
    token_service: FromDishka[TokenService],
    list_pending_use_case: FromDishka[ListPendingInvitationsUseCase],
    token: str = Depends(bearer_token),
) -> ListPendingInvitationsResponse:
    """List pending invitations of the caller's organization."""
    claims = token_service.verify(token)
    return await list_pending_use_case.execute(
        ListPendingInvitationsRequest(claims=claims)
    )


@router.post("/accept", response_model=AcceptInvitationResponse)
async def accept_invitation(
    request: AcceptInvitationAPIRequest,
    token_service: FromDishka[TokenService],
    accept_invitation_use_case: FromDishka[AcceptInvitationUseCase],
    token: str = Depends(bearer_token),
) -> AcceptInvitationResponse:
    """Join an organization. Returns a token carrying the new membership."""
    claims = token_service.verify(token)
    return await accept_invitation_use_case.execute(
        AcceptInvitationRequest(claims=claims, token=request.token)
    )


@router.post("/{invitation_token}/revoke", response_model=InvitationView)
async def revoke_invitation(
    token_service: FromDishka[TokenService],
    revoke_invitation_use_case: FromDishka[RevokeInvitationUseCase],
    invitation_token: str = Path(min_length=1, max_length=255),
    token: str = Depends(bearer_token),
) -> InvitationView:
    """Revoke a pending invitation."""
    claims = token_service.verify(token)
    return await revoke_invitation_use_case.execute(
        RevokeInvitationRequest(claims=claims, token=invitation_token)
    )


@router.post("/sweep", response_model=SweepExpiredInvitationsResponse)
async def sweep_expired_invitations(
    token_service: FromDishka[TokenService],
    sweep_use_case: FromDishka[SweepExpiredInvitationsUseCase],
    token: str = Depends(bearer_token),
) -> SweepExpiredInvitationsResponse:
    """Mark every overdue pending invitation as expired. Platform staff only."""
    claims = token_service.verify(token)
    return await sweep_use_case.execute(SweepExpiredInvitationsRequest(claims=claims))
