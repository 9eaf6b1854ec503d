"""Domain value objects for Certis."""

from certis.domain.value.identifiers import (
    CertificateId,
    CourseId,
    InvitationId,
    OrganizationId,
    UserId,
)
from certis.domain.value.role import (
    ORG_ROLES,
    SYSTEM_ROLES,
    Capability,
    Role,
    has_capability,
)
from certis.domain.value.types import (
    DomainName,
    InvitationStatus,
    InvitationToken,
    normalize_email,
    parse_invitation_token,
)

__all__ = [
    # Identifiers
    "UserId",
    "OrganizationId",
    "InvitationId",
    "CertificateId",
    "CourseId",
    # Roles
    "Role",
    "Capability",
    "SYSTEM_ROLES",
    "ORG_ROLES",
    "has_capability",
    # Types
    "InvitationStatus",
    "InvitationToken",
    "DomainName",
    "normalize_email",
    "parse_invitation_token",
]
