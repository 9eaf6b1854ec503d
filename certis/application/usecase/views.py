"""Response models shared by several use cases."""

from datetime import datetime

from pydantic import BaseModel

from certis.domain.model import Certificate, Course, Invitation, Organization, User
from certis.domain.value import InvitationStatus, Role


class UserView(BaseModel):
    """Public view of a user (never exposes the password hash)."""

    user_id: str
    email: str
    first_name: str
    last_name: str
    role: Role
    organization_id: str | None
    joined_at: datetime | None
    created_at: datetime

    @classmethod
    def from_user(cls, user: User) -> "UserView":
        return cls(
            user_id=str(user.id),
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            role=user.role,
            organization_id=str(user.organization_id) if user.organization_id else None,
            joined_at=user.joined_at,
            created_at=user.created_at,
        )


class OrganizationView(BaseModel):
    organization_id: str
    name: str
    domain: str
    description: str | None
    owner_user_id: str | None
    member_count: int
    created_at: datetime

    @classmethod
    def from_organization(cls, organization: Organization) -> "OrganizationView":
        return cls(
            organization_id=str(organization.id),
            name=organization.name,
            domain=organization.domain.root,
            description=organization.description,
            owner_user_id=(
                str(organization.owner_user_id) if organization.owner_user_id else None
            ),
            member_count=organization.member_count,
            created_at=organization.created_at,
        )


class InvitationView(BaseModel):
    """Invitation as seen by the organization's managers."""

    invitation_id: str
    token: str
    email: str
    role: Role
    organization_id: str
    invited_by_user_id: str
    status: InvitationStatus
    expires_at: datetime
    created_at: datetime
    accepted_at: datetime | None

    @classmethod
    def from_invitation(cls, invitation: Invitation) -> "InvitationView":
        return cls(
            invitation_id=str(invitation.id),
            token=invitation.token.root,
            email=invitation.email,
            role=invitation.role,
            organization_id=str(invitation.organization_id),
            invited_by_user_id=str(invitation.invited_by_user_id),
            status=invitation.status,
            expires_at=invitation.expires_at,
            created_at=invitation.created_at,
            accepted_at=invitation.accepted_at,
        )


class CertificateView(BaseModel):
    certificate_id: str
    organization_id: str
    issued_by_user_id: str
    course_id: str | None
    recipient_name: str
    recipient_email: str
    title: str
    issued_at: datetime
    revoked_at: datetime | None

    @classmethod
    def from_certificate(cls, certificate: Certificate) -> "CertificateView":
        return cls(
            certificate_id=str(certificate.id),
            organization_id=str(certificate.organization_id),
            issued_by_user_id=str(certificate.issued_by_user_id),
            course_id=str(certificate.course_id) if certificate.course_id else None,
            recipient_name=certificate.recipient_name,
            recipient_email=certificate.recipient_email,
            title=certificate.title,
            issued_at=certificate.issued_at,
            revoked_at=certificate.revoked_at,
        )


class CourseView(BaseModel):
    course_id: str
    organization_id: str
    created_by_user_id: str
    title: str
    slug: str
    description: str | None
    is_active: bool
    created_at: datetime

    @classmethod
    def from_course(cls, course: Course) -> "CourseView":
        return cls(
            course_id=str(course.id),
            organization_id=str(course.organization_id),
            created_by_user_id=str(course.created_by_user_id),
            title=course.title,
            slug=course.slug,
            description=course.description,
            is_active=course.is_active,
            created_at=course.created_at,
        )
