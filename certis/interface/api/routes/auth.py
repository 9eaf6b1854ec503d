"""Authentication routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status

from certis.application.usecase.auth import (
    GetCurrentUserRequest,
    GetCurrentUserUseCase,
    LoginRequest,
    LoginUseCase,
    RefreshTokenRequest,
    RefreshTokenUseCase,
    RegisterRequest,
    RegisterUseCase,
    TokenResponse,
)
from certis.application.usecase.views import UserView
from certis.domain.service import TokenService
from certis.interface.api.dependencies import bearer_token

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


@router.post(
    "/register", response_model=UserView, status_code=status.HTTP_201_CREATED
)
async def register(
    request: RegisterRequest,
    register_use_case: FromDishka[RegisterUseCase],
) -> UserView:
    """Create an unaffiliated account.

    Examples:
        POST /auth/register
        {"email": "ada@example.com", "password": "...", "first_name": "Ada"}
    """
    return await register_use_case.execute(request)


@router.post("/login", response_model=TokenResponse)
async def login(
    request: LoginRequest,
    login_use_case: FromDishka[LoginUseCase],
) -> TokenResponse:
    """Exchange email and password for a bearer token.

    Raises:
        InvalidCredentialsError: Mapped to 401
    """
    return await login_use_case.execute(request)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    request: RefreshTokenRequest,
    refresh_use_case: FromDishka[RefreshTokenUseCase],
) -> TokenResponse:
    """Exchange a (possibly recently expired) token for a fresh one.

    The new token reflects the user's current role and organization.
    """
    return await refresh_use_case.execute(request)


@router.get("/me", response_model=UserView)
async def get_current_user(
    token_service: FromDishka[TokenService],
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    token: str = Depends(bearer_token),
) -> UserView:
    """Return the authenticated user."""
    claims = token_service.verify(token)
    return await get_current_user_use_case.execute(GetCurrentUserRequest(claims=claims))
