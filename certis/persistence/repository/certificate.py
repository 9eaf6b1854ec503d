"""PostgreSQL implementation of Certificate repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from certis.domain.model import Certificate
from certis.domain.repository import CertificateRepository
from certis.domain.value import CertificateId, CourseId, OrganizationId
from certis.persistence.mappers import certificate_to_dict, row_to_certificate
from certis.persistence.repository.versioning import write_versioned
from certis.persistence.tables import certificates_table


class PostgresCertificateRepository(CertificateRepository):
    """PostgreSQL implementation of CertificateRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, certificate_id: CertificateId) -> Optional[Certificate]:
        stmt = select(certificates_table).where(
            certificates_table.c.id == certificate_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_certificate(dict(row)) if row else None

    async def find_by_organization(
        self, organization_id: OrganizationId
    ) -> list[Certificate]:
        stmt = (
            select(certificates_table)
            .where(certificates_table.c.organization_id == organization_id)
            .order_by(certificates_table.c.issued_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_certificate(dict(row)) for row in result.mappings().all()]

    async def find_all(self) -> list[Certificate]:
        stmt = select(certificates_table).order_by(certificates_table.c.issued_at.desc())
        result = await self.session.execute(stmt)
        return [row_to_certificate(dict(row)) for row in result.mappings().all()]

    async def save(self, certificate: Certificate) -> Certificate:
        version = await write_versioned(
            self.session,
            certificates_table,
            certificate_to_dict(certificate),
            certificate.version,
            resource="Certificate",
            conflict_message="Certificate already exists",
        )
        return certificate.model_copy(update={"version": version})

    async def exists_for_course(self, course_id: CourseId) -> bool:
        stmt = (
            select(certificates_table.c.id)
            .where(certificates_table.c.course_id == course_id)
            .limit(1)
        )
        result = await self.session.execute(stmt)
        return result.first() is not None
