"""Accept invitation use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import InvitationView
from certis.domain.model import TokenClaims
from certis.domain.service import InvitationService, TokenService, UserService
from certis.domain.value import parse_invitation_token
from certis.util.retry import retry_on_conflict


class AcceptInvitationRequest(BaseModel):
    """Accept invitation request."""

    claims: TokenClaims
    token: str  # Invitation token from the email link


class AcceptInvitationResponse(BaseModel):
    """The accepted invitation plus a token carrying the new membership."""

    invitation: InvitationView
    token: str


class AcceptInvitationUseCase(BaseUseCase):
    """Use case for joining an organization through an invitation."""

    def __init__(
        self,
        invitation_service: InvitationService,
        user_service: UserService,
        token_service: TokenService,
    ) -> None:
        self.invitation_service = invitation_service
        self.user_service = user_service
        self.token_service = token_service

    async def execute(self, request: AcceptInvitationRequest) -> AcceptInvitationResponse:
        """Accept the invitation, retrying once after a lost concurrent write.

        A retry re-reads the invitation, so a concurrent winner turns the
        retry into a NotFoundError (no longer pending).

        Raises:
            NotFoundError: If no pending invitation has this token
            InvitationExpiredError: If the invitation has expired
            EmailMismatchError: If the invitation is for another email
            ConflictError: If the caller already belongs to an organization
        """
        token = parse_invitation_token(request.token)
        invitation = await retry_on_conflict(
            lambda: self.invitation_service.accept(token, request.claims.user_id),
            name="accept_invitation",
        )
        user = await self.user_service.get_user(request.claims.user_id)
        return AcceptInvitationResponse(
            invitation=InvitationView.from_invitation(invitation),
            token=self.token_service.issue(user),
        )
