"""Organization repository interface."""

from abc import ABC, abstractmethod

from certis.domain.model.organization import Organization
from certis.domain.value import DomainName, OrganizationId


class OrganizationRepository(ABC):
    """Repository for Organization aggregate."""

    @abstractmethod
    async def find_by_id(self, organization_id: OrganizationId) -> Organization | None:
        """Find an organization by ID.

        Args:
            organization_id: The organization's unique identifier

        Returns:
            The organization if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_domain(self, domain: DomainName) -> Organization | None:
        """Find an organization by its (globally unique) domain.

        Args:
            domain: Normalized domain name

        Returns:
            The organization if found, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, organization: Organization) -> Organization:
        """Save an organization (create or update) with a version check.

        Args:
            organization: The organization to save

        Returns:
            The saved organization with its incremented version

        Raises:
            ConflictError: If the domain is already taken
            ConcurrencyConflictError: If the stored version changed since it was read
        """
        pass
