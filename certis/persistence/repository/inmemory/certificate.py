"""In-memory certificate repository for testing."""

from typing import Optional

from certis.domain.model import Certificate
from certis.domain.repository import CertificateRepository
from certis.domain.value import CertificateId, CourseId, OrganizationId

from .database import InMemoryDatabase


class InMemoryCertificateRepository(CertificateRepository):
    """In-memory implementation of CertificateRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, certificate_id: CertificateId) -> Optional[Certificate]:
        return self.database.certificates.get(certificate_id)

    async def find_by_organization(
        self, organization_id: OrganizationId
    ) -> list[Certificate]:
        matches = [
            c
            for c in self.database.certificates.values()
            if c.organization_id == organization_id
        ]
        matches.sort(key=lambda c: c.issued_at, reverse=True)
        return matches

    async def find_all(self) -> list[Certificate]:
        return sorted(
            self.database.certificates.values(), key=lambda c: c.issued_at, reverse=True
        )

    async def save(self, certificate: Certificate) -> Certificate:
        return self.database.write_versioned(
            self.database.certificates, certificate, "Certificate"
        )

    async def exists_for_course(self, course_id: CourseId) -> bool:
        return any(
            c.course_id == course_id for c in self.database.certificates.values()
        )
