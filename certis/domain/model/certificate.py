"""Certificate entity, owned by an organization."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from certis.domain.model.common import VersionedModel
from certis.domain.value import CertificateId, CourseId, OrganizationId, UserId


class Certificate(VersionedModel):
    """Certificate issued by an organization member to a recipient."""

    id: CertificateId
    organization_id: OrganizationId
    issued_by_user_id: UserId
    course_id: Optional[CourseId] = None
    recipient_name: str = Field(min_length=1, max_length=255)
    recipient_email: str
    title: str = Field(min_length=1, max_length=255)
    issued_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    revoked_at: Optional[datetime] = None
    revoked_by_user_id: Optional[UserId] = None

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None
