"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

from certis.domain.error import ConflictError
from certis.domain.model import Invitation
from certis.domain.repository import InvitationRepository
from certis.domain.value import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
)

from .database import InMemoryDatabase


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        return self.database.invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        for invitation in self.database.invitations.values():
            if invitation.token == token:
                return invitation
        return None

    async def find_pending_by_token(
        self, token: InvitationToken
    ) -> Optional[Invitation]:
        """Find a pending invitation by its token."""
        invitation = await self.find_by_token(token)
        if invitation and invitation.status == InvitationStatus.PENDING:
            return invitation
        return None

    async def exists_pending(self, email: str, organization_id: OrganizationId) -> bool:
        """Check if a pending invitation exists for (email, organization)."""
        for invitation in self.database.invitations.values():
            if (
                invitation.email == email
                and invitation.organization_id == organization_id
                and invitation.status == InvitationStatus.PENDING
            ):
                return True
        return False

    async def find_pending_by_organization(
        self, organization_id: OrganizationId
    ) -> list[Invitation]:
        """Find pending invitations of an organization, newest first."""
        matches = [
            invitation
            for invitation in self.database.invitations.values()
            if invitation.organization_id == organization_id
            and invitation.status == InvitationStatus.PENDING
        ]
        matches.sort(key=lambda inv: inv.created_at, reverse=True)
        return matches

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update).

        Raises:
            ConflictError: If another pending invitation exists for this
                email and organization, or the token is taken
        """
        for other in self.database.invitations.values():
            if other.id == invitation.id:
                continue
            if other.token == invitation.token:
                raise ConflictError("Invitation token already in use")
            if (
                invitation.status == InvitationStatus.PENDING
                and other.status == InvitationStatus.PENDING
                and other.email == invitation.email
                and other.organization_id == invitation.organization_id
            ):
                raise ConflictError("A pending invitation already exists for this email")
        return self.database.write_versioned(
            self.database.invitations, invitation, "Invitation"
        )

    async def expire_pending_before(self, now: datetime) -> int:
        """Expire overdue pending invitations."""
        count = 0
        for invitation_id, invitation in list(self.database.invitations.items()):
            if invitation.status == InvitationStatus.PENDING and invitation.expires_at < now:
                self.database.invitations[invitation_id] = invitation.model_copy(
                    update={
                        "status": InvitationStatus.EXPIRED,
                        "version": invitation.version + 1,
                    }
                )
                count += 1
        return count
