"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Configuration error.

    Raised at startup when the service cannot run with the given settings,
    for example when no token signing key is configured.
    """

    pass


class DependencyInjectionError(UtilError):
    """Dependency injection error."""

    pass
