"""Repository interfaces for Certis domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from certis.domain.repository.certificate import CertificateRepository
from certis.domain.repository.course import CourseRepository
from certis.domain.repository.invitation import InvitationRepository
from certis.domain.repository.organization import OrganizationRepository
from certis.domain.repository.transaction import TransactionManager
from certis.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "OrganizationRepository",
    "InvitationRepository",
    "CertificateRepository",
    "CourseRepository",
    "TransactionManager",
]
