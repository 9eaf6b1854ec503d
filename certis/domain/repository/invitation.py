"""Invitation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime

from certis.domain.model.invitation import Invitation
from certis.domain.value import InvitationId, InvitationToken, OrganizationId


class InvitationRepository(ABC):
    """Repository for Invitation entity.

    Defines the contract for invitation persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        """Find an invitation by ID.

        Args:
            invitation_id: The invitation's unique identifier

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find an invitation by token, whatever its status.

        Args:
            token: The invitation token

        Returns:
            The invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_token(self, token: InvitationToken) -> Invitation | None:
        """Find a PENDING invitation by token.

        Used when a user opens the accept link.

        Args:
            token: The invitation token

        Returns:
            The pending invitation if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_pending(self, email: str, organization_id: OrganizationId) -> bool:
        """Check if a PENDING invitation exists for (email, organization).

        Used during invitation creation to prevent duplicates.

        Args:
            email: Normalized email address
            organization_id: The organization's ID

        Returns:
            True if a pending invitation exists, False otherwise
        """
        pass

    @abstractmethod
    async def find_pending_by_organization(
        self, organization_id: OrganizationId
    ) -> list[Invitation]:
        """Find the PENDING invitations of an organization, newest first.

        Args:
            organization_id: The organization's ID

        Returns:
            List of pending invitations
        """
        pass

    @abstractmethod
    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update) with a version check.

        Args:
            invitation: The invitation to save

        Returns:
            The saved invitation with its incremented version

        Raises:
            ConflictError: If a pending invitation already exists for this
                email and organization
            ConcurrencyConflictError: If the stored version changed since it was read
        """
        pass

    @abstractmethod
    async def expire_pending_before(self, now: datetime) -> int:
        """Move every PENDING invitation with ``expires_at < now`` to EXPIRED.

        A single conditional bulk update: rows changed concurrently are
        skipped, never overwritten. Versions of the expired rows are bumped.

        Args:
            now: Reference time

        Returns:
            Number of invitations transitioned
        """
        pass
