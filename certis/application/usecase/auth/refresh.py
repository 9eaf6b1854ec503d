"""Refresh token use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.auth.login import TokenResponse
from certis.application.usecase.views import UserView
from certis.domain.service import TokenService, UserService


class RefreshTokenRequest(BaseModel):
    token: str


class RefreshTokenUseCase(BaseUseCase):
    """Use case for exchanging a (recently) expired token for a fresh one."""

    def __init__(self, token_service: TokenService, user_service: UserService) -> None:
        self.token_service = token_service
        self.user_service = user_service

    async def execute(self, request: RefreshTokenRequest) -> TokenResponse:
        """Issue a fresh token carrying the user's current role.

        Raises:
            InvalidTokenError: If the token cannot be refreshed
        """
        token = await self.token_service.refresh(request.token)
        claims = self.token_service.verify(token)
        user = await self.user_service.get_user(claims.user_id)
        return TokenResponse(token=token, user=UserView.from_user(user))
