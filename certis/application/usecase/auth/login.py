"""Login use case."""

from pydantic import BaseModel, EmailStr

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import UserView
from certis.domain.service import TokenService, UserService


class LoginRequest(BaseModel):
    """Login request."""

    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    """A freshly issued token and the user it identifies."""

    token: str
    user: UserView


class LoginUseCase(BaseUseCase):
    """Use case for email/password login."""

    def __init__(self, user_service: UserService, token_service: TokenService) -> None:
        """Initialize login use case.

        Args:
            user_service: User domain service
            token_service: Token domain service
        """
        self.user_service = user_service
        self.token_service = token_service

    async def execute(self, request: LoginRequest) -> TokenResponse:
        """Check credentials and issue a token.

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        user = await self.user_service.authenticate(request.email, request.password)
        return TokenResponse(
            token=self.token_service.issue(user), user=UserView.from_user(user)
        )
