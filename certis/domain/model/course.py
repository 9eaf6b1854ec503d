"""Course entity, the catalog a certificate can be issued for."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from certis.domain.model.common import VersionedModel
from certis.domain.value import CourseId, OrganizationId, UserId

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class Course(VersionedModel):
    """Course offered by an organization.

    ``slug`` is unique within the organization.
    """

    id: CourseId
    organization_id: OrganizationId
    created_by_user_id: UserId
    title: str = Field(min_length=3, max_length=100)
    slug: str = Field(min_length=3, max_length=100, pattern=SLUG_PATTERN)
    description: Optional[str] = Field(default=None, max_length=2048)
    is_active: bool = True
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
