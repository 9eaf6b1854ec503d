"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from certis.config import AuthSettings, InvitationSettings, Settings
from certis.util.di.base import ProviderBase
from certis.util.error import ConfigurationError


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings.

        Raises:
            ConfigurationError: If no token signing key is configured
        """
        if not settings.auth.jwt_secret:
            raise ConfigurationError("AUTH__JWT_SECRET must be set")
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_invitation_settings(self, settings: Settings) -> InvitationSettings:
        """Provide invitation settings."""
        return settings.invitations
