"""Change member role use case."""

from uuid import UUID

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import UserView
from certis.domain.model import TokenClaims
from certis.domain.service import OwnershipService
from certis.domain.value import Role, UserId
from certis.util.retry import retry_on_conflict


class ChangeRoleRequest(BaseModel):
    """Change role request."""

    claims: TokenClaims
    target_user_id: UUID
    role: Role


class ChangeRoleUseCase(BaseUseCase):
    """Use case for changing a user's role (OWNER means transfer)."""

    def __init__(self, ownership_service: OwnershipService) -> None:
        self.ownership_service = ownership_service

    async def execute(self, request: ChangeRoleRequest) -> UserView:
        """Change the role, retrying once after a lost concurrent write.

        Raises:
            ForbiddenError: If the caller may not make this change
            PreconditionFailedError: If the change breaks membership rules
            NotFoundError: If the target does not exist
        """
        user = await retry_on_conflict(
            lambda: self.ownership_service.change_role(
                UserId(request.target_user_id), request.role, request.claims.user_id
            ),
            name="change_role",
        )
        return UserView.from_user(user)
