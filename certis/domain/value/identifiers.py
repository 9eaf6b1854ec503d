"""Strongly typed identifiers for Certis entities.

Relationships between entities are expressed through these identifiers and
resolved through repositories, never through object references.
"""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)
OrganizationId = NewType("OrganizationId", UUID)
InvitationId = NewType("InvitationId", UUID)
CertificateId = NewType("CertificateId", UUID)
CourseId = NewType("CourseId", UUID)
