"""Password hashing and strength policy."""

import re

import bcrypt

from certis.domain.error import ValidationError

SPECIAL_CHARACTERS = "@$!%*?&"


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash string
    """
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash.

    Args:
        plain_password: Plain text password to check
        hashed_password: Bcrypt hash to check against

    Returns:
        True if password matches hash
    """
    if not plain_password:
        return False
    return bcrypt.checkpw(
        plain_password.encode("utf-8"), hashed_password.encode("utf-8")
    )


def validate_password_strength(password: str) -> None:
    """Check a password against the account password policy.

    Requires at least 8 characters with an uppercase letter, a lowercase
    letter, a digit and one of ``@$!%*?&``.

    Raises:
        ValidationError: Describing the first unmet requirement
    """
    if password is None or len(password) < 8:
        raise ValidationError("Password must be at least 8 characters long")
    if not re.search(r"[A-Z]", password):
        raise ValidationError("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        raise ValidationError("Password must contain at least one lowercase letter")
    if not re.search(r"\d", password):
        raise ValidationError("Password must contain at least one number")
    if not any(c in SPECIAL_CHARACTERS for c in password):
        raise ValidationError(
            f"Password must contain at least one special character ({SPECIAL_CHARACTERS})"
        )
