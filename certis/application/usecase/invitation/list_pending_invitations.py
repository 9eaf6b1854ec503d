"""List pending invitations use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import InvitationView
from certis.domain.model import TokenClaims
from certis.domain.service import InvitationService, TenantContext


class ListPendingInvitationsRequest(BaseModel):
    claims: TokenClaims


class ListPendingInvitationsResponse(BaseModel):
    invitations: list[InvitationView]


class ListPendingInvitationsUseCase(BaseUseCase):
    """Use case for listing the caller's organization's pending invitations."""

    def __init__(
        self, invitation_service: InvitationService, tenant_context: TenantContext
    ) -> None:
        self.invitation_service = invitation_service
        self.tenant_context = tenant_context

    async def execute(
        self, request: ListPendingInvitationsRequest
    ) -> ListPendingInvitationsResponse:
        organization_id = self.tenant_context.require_tenant(request.claims)
        invitations = await self.invitation_service.list_pending(
            organization_id, request.claims.user_id
        )
        return ListPendingInvitationsResponse(
            invitations=[InvitationView.from_invitation(i) for i in invitations]
        )
