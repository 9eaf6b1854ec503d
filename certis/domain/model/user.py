"""User aggregate root.

A user is an identity on the platform: credentials, a role and at most one
organization.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, model_validator

from certis.domain.model.common import VersionedModel
from certis.domain.value import OrganizationId, Role, UserId


class User(VersionedModel):
    """User aggregate root.

    Invariants:
    - System roles (SUDOER, STAFF) never have an organization
    - A user without an organization holds USER (or a system role) and has no
      ``joined_at``
    """

    id: UserId
    email: str  # Stored lower-cased
    password_hash: str
    first_name: str = ""
    last_name: str = ""
    role: Role = Role.USER
    organization_id: Optional[OrganizationId] = None
    joined_at: Optional[datetime] = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    last_login_at: Optional[datetime] = None

    @model_validator(mode="after")
    def check_role_matches_membership(self) -> "User":
        if self.role.is_system_role and self.organization_id is not None:
            raise ValueError("System roles cannot belong to an organization")
        if self.organization_id is None:
            if self.role.is_org_role and self.role is not Role.USER:
                raise ValueError(f"{self.role.value} requires an organization")
            if self.joined_at is not None:
                raise ValueError("joined_at requires an organization")
        return self

    @property
    def is_affiliated(self) -> bool:
        return self.organization_id is not None

    def joined(
        self, organization_id: OrganizationId, role: Role, at: datetime
    ) -> "User":
        """Copy of this user as a member of an organization."""
        return self.model_copy(
            update={"organization_id": organization_id, "role": role, "joined_at": at}
        )

    def left_organization(self) -> "User":
        """Copy of this user as an unaffiliated USER."""
        return self.model_copy(
            update={"organization_id": None, "role": Role.USER, "joined_at": None}
        )
