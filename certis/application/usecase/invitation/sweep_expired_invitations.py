"""Sweep expired invitations use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.domain.model import TokenClaims
from certis.domain.service import AuthorizationGuard, InvitationService
from certis.domain.value import Capability


class SweepExpiredInvitationsRequest(BaseModel):
    claims: TokenClaims


class SweepExpiredInvitationsResponse(BaseModel):
    expired: int


class SweepExpiredInvitationsUseCase(BaseUseCase):
    """Use case for a platform-triggered expiry sweep."""

    def __init__(
        self,
        invitation_service: InvitationService,
        authorization_guard: AuthorizationGuard,
    ) -> None:
        self.invitation_service = invitation_service
        self.authorization_guard = authorization_guard

    async def execute(
        self, request: SweepExpiredInvitationsRequest
    ) -> SweepExpiredInvitationsResponse:
        """Expire overdue invitations.

        Raises:
            ForbiddenError: Unless the caller holds a platform role
        """
        self.authorization_guard.require_capability(
            request.claims, Capability.MANAGE_PLATFORM
        )
        expired = await self.invitation_service.sweep_expired()
        return SweepExpiredInvitationsResponse(expired=expired)
