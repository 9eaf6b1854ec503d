"""Authentication use cases."""

from .get_current_user import GetCurrentUserRequest, GetCurrentUserUseCase
from .login import LoginRequest, LoginUseCase, TokenResponse
from .refresh import RefreshTokenRequest, RefreshTokenUseCase
from .register import RegisterRequest, RegisterUseCase

__all__ = [
    "GetCurrentUserRequest",
    "GetCurrentUserUseCase",
    "LoginRequest",
    "LoginUseCase",
    "RefreshTokenRequest",
    "RefreshTokenUseCase",
    "RegisterRequest",
    "RegisterUseCase",
    "TokenResponse",
]
