"""Remove member use case."""

from uuid import UUID

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import UserView
from certis.domain.model import TokenClaims
from certis.domain.service import OwnershipService
from certis.domain.value import UserId
from certis.util.retry import retry_on_conflict


class RemoveMemberRequest(BaseModel):
    claims: TokenClaims
    target_user_id: UUID


class RemoveMemberUseCase(BaseUseCase):
    """Use case for removing a member from their organization."""

    def __init__(self, ownership_service: OwnershipService) -> None:
        self.ownership_service = ownership_service

    async def execute(self, request: RemoveMemberRequest) -> UserView:
        user = await retry_on_conflict(
            lambda: self.ownership_service.remove_from_organization(
                UserId(request.target_user_id), request.claims.user_id
            ),
            name="remove_member",
        )
        return UserView.from_user(user)
