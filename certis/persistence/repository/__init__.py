"""PostgreSQL repository implementations."""

from certis.persistence.repository.certificate import PostgresCertificateRepository
from certis.persistence.repository.course import PostgresCourseRepository
from certis.persistence.repository.invitation import PostgresInvitationRepository
from certis.persistence.repository.organization import PostgresOrganizationRepository
from certis.persistence.repository.transaction import (
    PostgresTransactionManager,
    commit_session,
    rollback_session,
)
from certis.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresOrganizationRepository",
    "PostgresInvitationRepository",
    "PostgresCertificateRepository",
    "PostgresCourseRepository",
    "PostgresTransactionManager",
    "commit_session",
    "rollback_session",
]
