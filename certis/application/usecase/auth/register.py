"""Register use case."""

from pydantic import BaseModel, EmailStr, Field

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import UserView
from certis.domain.service import UserService


class RegisterRequest(BaseModel):
    """Register request."""

    email: EmailStr
    password: str
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)


class RegisterUseCase(BaseUseCase):
    """Use case for creating an account with email and password."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def execute(self, request: RegisterRequest) -> UserView:
        """Register a new unaffiliated user.

        Raises:
            ValidationError: If the email or password is invalid
            ConflictError: If the email is already registered
        """
        user = await self.user_service.register(
            email=request.email,
            password=request.password,
            first_name=request.first_name,
            last_name=request.last_name,
        )
        return UserView.from_user(user)
