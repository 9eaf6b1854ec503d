"""Create invitation use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import InvitationView
from certis.domain.model import TokenClaims
from certis.domain.service import InvitationService, TenantContext
from certis.domain.value import Role


class CreateInvitationRequest(BaseModel):
    """Create invitation request.

    The target organization is the caller's own, taken from the claims.
    """

    claims: TokenClaims
    email: str
    role: Role = Role.USER


class CreateInvitationUseCase(BaseUseCase):
    """Use case for inviting someone into the caller's organization."""

    def __init__(
        self, invitation_service: InvitationService, tenant_context: TenantContext
    ) -> None:
        self.invitation_service = invitation_service
        self.tenant_context = tenant_context

    async def execute(self, request: CreateInvitationRequest) -> InvitationView:
        """Create a pending invitation and schedule its email.

        Raises:
            PreconditionFailedError: If the caller has no organization
            ForbiddenError: If the caller is not OWNER or ADMIN
            ConflictError: If the invitation would duplicate a pending one
            ValidationError: If the email or role is invalid
        """
        organization_id = self.tenant_context.require_tenant(request.claims)
        invitation = await self.invitation_service.create(
            email=request.email,
            role=request.role,
            organization_id=organization_id,
            inviter_id=request.claims.user_id,
        )
        return InvitationView.from_invitation(invitation)
