"""Invitation entity.

Invitations onboard users into an organization. The state machine is
PENDING -> ACCEPTED | EXPIRED | REVOKED, and every target state is terminal.
Invitations are kept after reaching a terminal state for auditing.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from certis.domain.model.common import VersionedModel
from certis.domain.value import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    Role,
    UserId,
)


class Invitation(VersionedModel):
    """Invitation entity.

    Business rules:
    - At most one PENDING invitation per (email, organization)
    - Only organization roles can be granted
    - Acceptance binds the accepting user to the organization exactly once
    """

    id: InvitationId
    token: InvitationToken
    email: str  # Stored lower-cased
    role: Role
    organization_id: OrganizationId
    invited_by_user_id: UserId
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    accepted_at: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return now > self.expires_at
