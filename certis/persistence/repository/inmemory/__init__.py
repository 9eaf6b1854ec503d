"""In-memory repository implementations for testing."""

from .certificate import InMemoryCertificateRepository
from .course import InMemoryCourseRepository
from .database import InMemoryDatabase, InMemoryTransactionManager
from .invitation import InMemoryInvitationRepository
from .organization import InMemoryOrganizationRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCertificateRepository",
    "InMemoryCourseRepository",
    "InMemoryDatabase",
    "InMemoryInvitationRepository",
    "InMemoryOrganizationRepository",
    "InMemoryTransactionManager",
    "InMemoryUserRepository",
]
