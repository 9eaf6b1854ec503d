"""User domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from certis.domain.error import (
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from certis.domain.model import User
from certis.domain.repository import UserRepository
from certis.domain.value import Role, UserId, normalize_email
from certis.util.password import hash_password, validate_password_strength, verify_password

from .base import Service


class UserService(Service):
    """Domain service for user registration and authentication."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def register(
        self,
        email: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> User:
        """Register a new, unaffiliated user.

        Args:
            email: Login email (stored lower-cased)
            password: Plain text password, checked against the password policy
            first_name: Given name
            last_name: Family name

        Returns:
            Created user

        Raises:
            ValidationError: If the email or password is invalid
            ConflictError: If the email is already registered
        """
        with logfire.span("user_service.register"):
            email = normalize_email(email)
            if await self.user_repository.find_by_email(email) is not None:
                logfire.warn("Email already registered")
                raise ConflictError("Email already registered")

            validate_password_strength(password)

            user = User(
                id=UserId(uuid4()),
                email=email,
                password_hash=hash_password(password),
                first_name=first_name,
                last_name=last_name,
                role=Role.USER,
            )
            saved = await self.user_repository.save(user)
            logfire.info("User registered", user_id=str(saved.id))
            return saved

    async def authenticate(self, email: str, password: str) -> User:
        """Check an email/password pair and record the login.

        Unknown emails and wrong passwords raise the same error.

        Returns:
            The authenticated user

        Raises:
            InvalidCredentialsError: If the credentials do not match
        """
        with logfire.span("user_service.authenticate"):
            try:
                email = normalize_email(email)
            except ValidationError:
                raise InvalidCredentialsError()

            user = await self.user_repository.find_by_email(email)
            if user is None or not verify_password(password, user.password_hash):
                logfire.warn("Login failed")
                raise InvalidCredentialsError()

            logged_in = await self.user_repository.save(
                user.model_copy(update={"last_login_at": datetime.now(timezone.utc)})
            )
            logfire.info("User logged in", user_id=str(user.id))
            return logged_in

    async def get_user(self, user_id: UserId) -> User:
        """Get a user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User", str(user_id))
        return user
