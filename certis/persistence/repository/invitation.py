"""PostgreSQL implementation of Invitation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from certis.domain.model import Invitation
from certis.domain.repository import InvitationRepository
from certis.domain.value import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
)
from certis.persistence.mappers import invitation_to_dict, row_to_invitation
from certis.persistence.repository.versioning import write_versioned
from certis.persistence.tables import invitations_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        """Find an invitation by ID."""
        stmt = select(invitations_table).where(invitations_table.c.id == invitation_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        """Find an invitation by its token."""
        stmt = select(invitations_table).where(invitations_table.c.token == token.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_pending_by_token(
        self, token: InvitationToken
    ) -> Optional[Invitation]:
        """Find a pending invitation by its token."""
        stmt = select(invitations_table).where(
            and_(
                invitations_table.c.token == token.root,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def exists_pending(self, email: str, organization_id: OrganizationId) -> bool:
        """Check if a pending invitation exists for (email, organization).

        Fast check without loading full invitation data.
        """
        stmt = select(invitations_table.c.id).where(
            and_(
                invitations_table.c.email == email,
                invitations_table.c.organization_id == organization_id,
                invitations_table.c.status == InvitationStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_pending_by_organization(
        self, organization_id: OrganizationId
    ) -> list[Invitation]:
        """Find pending invitations of an organization, newest first."""
        stmt = (
            select(invitations_table)
            .where(
                and_(
                    invitations_table.c.organization_id == organization_id,
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                )
            )
            .order_by(invitations_table.c.created_at.desc())
        )
        result = await self.session.execute(stmt)
        return [row_to_invitation(dict(row)) for row in result.mappings().all()]

    async def save(self, invitation: Invitation) -> Invitation:
        """Save an invitation (create or update) with a version check.

        The partial unique index on pending (email, organization_id) turns a
        racing duplicate into a ConflictError.
        """
        version = await write_versioned(
            self.session,
            invitations_table,
            invitation_to_dict(invitation),
            invitation.version,
            resource="Invitation",
            conflict_message="A pending invitation already exists for this email",
        )
        return invitation.model_copy(update={"version": version})

    async def expire_pending_before(self, now: datetime) -> int:
        """Expire overdue pending invitations in one conditional statement."""
        stmt = (
            update(invitations_table)
            .where(
                and_(
                    invitations_table.c.status == InvitationStatus.PENDING.value,
                    invitations_table.c.expires_at < now,
                )
            )
            .values(
                status=InvitationStatus.EXPIRED.value,
                version=invitations_table.c.version + 1,
            )
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
