"""Domain model entities for Certis."""

from certis.domain.model.certificate import Certificate
from certis.domain.model.claims import Principal, TokenClaims
from certis.domain.model.course import Course
from certis.domain.model.invitation import Invitation
from certis.domain.model.organization import Organization
from certis.domain.model.user import User

__all__ = [
    "User",
    "Organization",
    "Invitation",
    "Certificate",
    "Course",
    "TokenClaims",
    "Principal",
]
