"""Revoke invitation use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import InvitationView
from certis.domain.model import TokenClaims
from certis.domain.service import InvitationService
from certis.domain.value import parse_invitation_token
from certis.util.retry import retry_on_conflict


class RevokeInvitationRequest(BaseModel):
    claims: TokenClaims
    token: str


class RevokeInvitationUseCase(BaseUseCase):
    """Use case for revoking a pending invitation."""

    def __init__(self, invitation_service: InvitationService) -> None:
        self.invitation_service = invitation_service

    async def execute(self, request: RevokeInvitationRequest) -> InvitationView:
        token = parse_invitation_token(request.token)
        invitation = await retry_on_conflict(
            lambda: self.invitation_service.revoke(token, request.claims.user_id),
            name="revoke_invitation",
        )
        return InvitationView.from_invitation(invitation)
