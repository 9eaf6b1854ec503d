"""JWT token utilities."""

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from certis.config import AuthSettings


class JWTError(Exception):
    """JWT-related error."""

    pass


def encode_token(
    claims: dict[str, Any],
    settings: AuthSettings,
    issued_at: datetime | None = None,
) -> str:
    """Sign a set of claims as a JWT.

    ``iat`` and ``exp`` are added from the configured expiry.

    Args:
        claims: Custom claims (``sub``, ``user_id``, ...)
        settings: Authentication settings
        issued_at: Issue time, defaults to now

    Returns:
        Encoded JWT token

    Raises:
        JWTError: If no signing key is configured
    """
    if not settings.jwt_secret:
        raise JWTError("JWT signing key is not configured")

    issued_at = issued_at or datetime.now(timezone.utc)
    payload = {
        **claims,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.jwt_expiry_minutes),
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(
    token: str,
    settings: AuthSettings,
    leeway: timedelta = timedelta(0),
) -> dict[str, Any]:
    """Verify and decode a JWT token.

    Args:
        token: JWT token to verify
        settings: Authentication settings
        leeway: Extra time accepted past ``exp``

    Returns:
        Decoded claims

    Raises:
        JWTError: If token is invalid, tampered with or expired
    """
    if not settings.jwt_secret:
        raise JWTError("JWT signing key is not configured")

    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=leeway,
            options={"require": ["sub", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")
