"""Get current user use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import UserView
from certis.domain.model import TokenClaims
from certis.domain.service import UserService


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    claims: TokenClaims  # Verified token claims


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting the current authenticated user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: GetCurrentUserRequest) -> UserView:
        """Load the user behind verified claims.

        The stored user is returned, so a role change made after the token was
        issued is visible here even though the token still carries the old one.

        Raises:
            NotFoundError: If the user no longer exists
        """
        user = await self.user_service.get_user(request.claims.user_id)
        return UserView.from_user(user)
