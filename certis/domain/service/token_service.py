"""Signed identity token domain service."""

from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import UUID

import logfire

from certis.config import AuthSettings
from certis.domain.error import InvalidTokenError
from certis.domain.model import TokenClaims, User
from certis.domain.repository import UserRepository
from certis.domain.value import OrganizationId, Role, UserId
from certis.util.error import ConfigurationError
from certis.util.jwt import JWTError, decode_token, encode_token

from .base import Service


class TokenService(Service):
    """Issue, verify and refresh stateless identity tokens.

    Verification never touches the database; the claims are trusted until
    the token expires. Refresh is the only operation that re-reads the user.
    """

    def __init__(
        self, auth_settings: AuthSettings, user_repository: UserRepository
    ) -> None:
        """Initialize token service.

        Args:
            auth_settings: Authentication settings
            user_repository: User repository, read on refresh

        Raises:
            ConfigurationError: If no signing key is configured
        """
        if not auth_settings.jwt_secret:
            raise ConfigurationError(
                "AUTH__JWT_SECRET is not set; refusing to issue unsigned tokens"
            )
        self.auth_settings = auth_settings
        self.user_repository = user_repository

    def issue(self, user: User, issued_at: datetime | None = None) -> str:
        """Issue a token for a user.

        Args:
            user: The authenticated user
            issued_at: Issue time, defaults to now

        Returns:
            Encoded token
        """
        with logfire.span("token_service.issue", user_id=str(user.id)):
            claims: dict[str, Any] = {
                "sub": user.email,
                "user_id": str(user.id),
                "role": user.role.value,
                "organization_id": (
                    str(user.organization_id) if user.organization_id else None
                ),
            }
            token = encode_token(claims, self.auth_settings, issued_at=issued_at)
            logfire.info("Token issued", user_id=str(user.id), role=user.role.value)
            return token

    def verify(self, token: str) -> TokenClaims:
        """Verify a token and extract its claims.

        Args:
            token: Encoded token

        Returns:
            Verified claims

        Raises:
            InvalidTokenError: If the token is malformed, tampered with or expired
        """
        with logfire.span("token_service.verify"):
            return self._verify(token, leeway=timedelta(0))

    async def refresh(self, old_token: str) -> str:
        """Exchange a token for a fresh one carrying the current role.

        Tokens expired no longer than the configured grace window are
        accepted. Role and organization are re-read from the user repository.

        Args:
            old_token: Previously issued token

        Returns:
            New encoded token

        Raises:
            InvalidTokenError: If the signature is bad, the grace window has
                passed or the user no longer exists
        """
        with logfire.span("token_service.refresh"):
            grace = timedelta(minutes=self.auth_settings.refresh_grace_minutes)
            claims = self._verify(old_token, leeway=grace)

            user = await self.user_repository.find_by_id(claims.user_id)
            if user is None or user.email != claims.email:
                logfire.warn("Refresh for unknown subject", user_id=str(claims.user_id))
                raise InvalidTokenError("Token subject no longer exists")

            if user.role != claims.role or user.organization_id != claims.organization_id:
                logfire.info(
                    "Refreshed token picks up membership change",
                    user_id=str(user.id),
                    old_role=claims.role.value,
                    new_role=user.role.value,
                )
            return self.issue(user)

    def _verify(self, token: str, leeway: timedelta) -> TokenClaims:
        try:
            payload = decode_token(token, self.auth_settings, leeway=leeway)
        except JWTError as e:
            logfire.warn("Token verification failed", error=str(e))
            raise InvalidTokenError(str(e)) from e
        return self._to_claims(payload)

    @staticmethod
    def _to_claims(payload: dict[str, Any]) -> TokenClaims:
        try:
            organization_id = payload.get("organization_id")
            return TokenClaims(
                email=payload["sub"],
                user_id=UserId(UUID(payload["user_id"])),
                role=Role(payload["role"]),
                organization_id=(
                    OrganizationId(UUID(organization_id)) if organization_id else None
                ),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            logfire.warn("Token carries malformed claims", error=str(e))
            raise InvalidTokenError("Malformed token claims") from e
