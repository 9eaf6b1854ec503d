"""PostgreSQL implementation of Organization repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from certis.domain.model import Organization
from certis.domain.repository import OrganizationRepository
from certis.domain.value import DomainName, OrganizationId
from certis.persistence.mappers import organization_to_dict, row_to_organization
from certis.persistence.repository.versioning import write_versioned
from certis.persistence.tables import organizations_table


class PostgresOrganizationRepository(OrganizationRepository):
    """PostgreSQL implementation of OrganizationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, organization_id: OrganizationId) -> Optional[Organization]:
        stmt = select(organizations_table).where(
            organizations_table.c.id == organization_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_organization(dict(row)) if row else None

    async def find_by_domain(self, domain: DomainName) -> Optional[Organization]:
        stmt = select(organizations_table).where(
            organizations_table.c.domain == domain.root
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_organization(dict(row)) if row else None

    async def save(self, organization: Organization) -> Organization:
        version = await write_versioned(
            self.session,
            organizations_table,
            organization_to_dict(organization),
            organization.version,
            resource="Organization",
            conflict_message=f"Domain already taken: {organization.domain.root}",
        )
        return organization.model_copy(update={"version": version})
