"""Domain value objects for Certis.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import EmailStr, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from certis.domain.error import NotFoundError, ValidationError
from certis.domain.value.common import RootValueObject

_EMAIL_ADAPTER = TypeAdapter(EmailStr)
_DOMAIN_RE = re.compile(
    r"^(?:[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}$"
)


class InvitationStatus(str, Enum):
    """Status of an invitation.

    PENDING is the only non-terminal state.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    REVOKED = "revoked"

    @property
    def is_terminal(self) -> bool:
        return self is not InvitationStatus.PENDING


class InvitationToken(RootValueObject[str]):
    """URL-safe invitation token, delivered out-of-band by email."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        """Validate token is not empty."""
        if len(v) < 1 or len(v) > 255:
            raise ValueError("Token must be 1-255 characters")
        return v


class DomainName(RootValueObject[str]):
    """Organization domain, e.g. ``example.com``. Stored lower-cased."""

    @field_validator("root")
    @classmethod
    def validate_domain(cls, v: str) -> str:
        """Validate hostname format."""
        v = v.strip().lower()
        if len(v) < 3 or len(v) > 255 or not _DOMAIN_RE.match(v):
            raise ValueError(
                "Domain must be a valid domain name (e.g., example.com, subdomain.example.com)"
            )
        return v


def normalize_email(email: str) -> str:
    """Normalize an email address for storage and comparison.

    Syntax is checked by ``email-validator`` through pydantic's ``EmailStr``;
    the result is lower-cased as a whole.

    Raises:
        ValidationError: If the address is blank or malformed
    """
    if email is None or not email.strip():
        raise ValidationError("Email must not be blank")
    try:
        validated = _EMAIL_ADAPTER.validate_python(email.strip())
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid email address: {email!r}") from e
    return validated.lower()


def parse_invitation_token(raw: str) -> InvitationToken:
    """Parse a client-supplied invitation token.

    A token that cannot exist is reported like an unknown one.

    Raises:
        NotFoundError: If the token is empty or too long
    """
    try:
        return InvitationToken(raw)
    except PydanticValidationError as e:
        raise NotFoundError("Invitation", (raw or "")[:8] + "...") from e
