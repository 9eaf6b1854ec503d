"""Organization aggregate root (the tenant)."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from certis.domain.model.common import VersionedModel
from certis.domain.value import DomainName, OrganizationId, UserId


class Organization(VersionedModel):
    """Organization aggregate root.

    ``owner_user_id`` is an explicit reference to the single OWNER, kept in
    step with the owner's role in the same transaction. It is None only for
    an organization left without an owner, which needs manual repair.
    """

    id: OrganizationId
    name: str = Field(min_length=3, max_length=50)
    domain: DomainName
    description: Optional[str] = Field(default=None, max_length=1024)
    owner_user_id: Optional[UserId] = None
    member_count: int = Field(default=0, ge=0)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
