"""In-memory organization repository for testing."""

from typing import Optional

from certis.domain.error import ConflictError
from certis.domain.model import Organization
from certis.domain.repository import OrganizationRepository
from certis.domain.value import DomainName, OrganizationId

from .database import InMemoryDatabase


class InMemoryOrganizationRepository(OrganizationRepository):
    """In-memory implementation of OrganizationRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, organization_id: OrganizationId) -> Optional[Organization]:
        return self.database.organizations.get(organization_id)

    async def find_by_domain(self, domain: DomainName) -> Optional[Organization]:
        for organization in self.database.organizations.values():
            if organization.domain == domain:
                return organization
        return None

    async def save(self, organization: Organization) -> Organization:
        for other in self.database.organizations.values():
            if other.id != organization.id and other.domain == organization.domain:
                raise ConflictError(f"Domain already taken: {organization.domain.root}")
        return self.database.write_versioned(
            self.database.organizations, organization, "Organization"
        )
