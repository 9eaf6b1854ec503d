"""Certificate repository interface."""

from abc import ABC, abstractmethod

from certis.domain.model.certificate import Certificate
from certis.domain.value import CertificateId, CourseId, OrganizationId


class CertificateRepository(ABC):
    """Repository for Certificate entity.

    Every read except ``find_all`` is parameterized by the owning tenant.
    """

    @abstractmethod
    async def find_by_id(self, certificate_id: CertificateId) -> Certificate | None:
        """Find a certificate by ID, regardless of tenant.

        Callers must check the certificate's organization before acting on it.
        """
        pass

    @abstractmethod
    async def find_by_organization(
        self, organization_id: OrganizationId
    ) -> list[Certificate]:
        """Find the certificates of one organization, newest first."""
        pass

    @abstractmethod
    async def find_all(self) -> list[Certificate]:
        """Find every certificate on the platform, newest first."""
        pass

    @abstractmethod
    async def save(self, certificate: Certificate) -> Certificate:
        """Save a certificate (create or update) with a version check.

        Raises:
            ConcurrencyConflictError: If the stored version changed since it was read
        """
        pass

    @abstractmethod
    async def exists_for_course(self, course_id: CourseId) -> bool:
        """Whether any certificate references the course."""
        pass
