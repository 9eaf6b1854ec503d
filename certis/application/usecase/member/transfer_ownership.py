"""Transfer ownership use case."""

from uuid import UUID

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import UserView
from certis.domain.model import TokenClaims
from certis.domain.service import OwnershipService, TokenService, UserService
from certis.domain.value import UserId
from certis.util.retry import retry_on_conflict


class TransferOwnershipRequest(BaseModel):
    """Transfer ownership request. The caller is the current owner."""

    claims: TokenClaims
    new_owner_id: UUID


class TransferOwnershipResponse(BaseModel):
    """New owner plus a token for the caller reflecting their ADMIN role."""

    new_owner: UserView
    token: str


class TransferOwnershipUseCase(BaseUseCase):
    """Use case for handing ownership to another member."""

    def __init__(
        self,
        ownership_service: OwnershipService,
        user_service: UserService,
        token_service: TokenService,
    ) -> None:
        self.ownership_service = ownership_service
        self.user_service = user_service
        self.token_service = token_service

    async def execute(self, request: TransferOwnershipRequest) -> TransferOwnershipResponse:
        """Transfer ownership, retrying once after a lost concurrent write.

        Raises:
            ForbiddenError: If the caller is not the owner
            PreconditionFailedError: If the new owner is not a member
        """
        new_owner = await retry_on_conflict(
            lambda: self.ownership_service.transfer_ownership(
                request.claims.user_id, UserId(request.new_owner_id)
            ),
            name="transfer_ownership",
        )
        previous_owner = await self.user_service.get_user(request.claims.user_id)
        return TransferOwnershipResponse(
            new_owner=UserView.from_user(new_owner),
            token=self.token_service.issue(previous_owner),
        )
