"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping. The ``version`` column
is written by the repositories, never by these mappers.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from certis.domain.model import Certificate, Course, Invitation, Organization, User
from certis.domain.value import (
    CertificateId,
    CourseId,
    DomainName,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    OrganizationId,
    Role,
    UserId,
)


def _uuid(value: Any) -> Optional[UUID]:
    if value is None:
        return None
    return UUID(value) if isinstance(value, str) else value


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    organization_id = _uuid(row.get("organization_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        email=row["email"],
        password_hash=row["password_hash"],
        first_name=row.get("first_name") or "",
        last_name=row.get("last_name") or "",
        role=Role(row["role"]),
        organization_id=OrganizationId(organization_id) if organization_id else None,
        joined_at=row.get("joined_at"),
        created_at=row["created_at"],
        last_login_at=row.get("last_login_at"),
        version=row["version"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "email": user.email,
        "password_hash": user.password_hash,
        "first_name": user.first_name,
        "last_name": user.last_name,
        "role": user.role.value,
        "organization_id": user.organization_id,
        "joined_at": user.joined_at,
        "created_at": user.created_at,
        "last_login_at": user.last_login_at,
    }


def row_to_organization(row: Dict[str, Any]) -> Organization:
    """Convert database row to Organization domain model."""
    owner_user_id = _uuid(row.get("owner_user_id"))
    return Organization(
        id=OrganizationId(_uuid(row["id"])),
        name=row["name"],
        domain=DomainName(root=row["domain"]),
        description=row.get("description"),
        owner_user_id=UserId(owner_user_id) if owner_user_id else None,
        member_count=row["member_count"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        version=row["version"],
    )


def organization_to_dict(organization: Organization) -> Dict[str, Any]:
    """Convert Organization domain model to database dict."""
    return {
        "id": organization.id,
        "name": organization.name,
        "domain": organization.domain.root,
        "description": organization.description,
        "owner_user_id": organization.owner_user_id,
        "member_count": organization.member_count,
        "created_at": organization.created_at,
        "updated_at": organization.updated_at,
    }


def row_to_invitation(row: Dict[str, Any]) -> Invitation:
    """Convert database row to Invitation domain model.

    Args:
        row: Database row as dict

    Returns:
        Invitation domain model
    """
    return Invitation(
        id=InvitationId(_uuid(row["id"])),
        token=InvitationToken(root=row["token"]),
        email=row["email"],
        role=Role(row["role"]),
        organization_id=OrganizationId(_uuid(row["organization_id"])),
        invited_by_user_id=UserId(_uuid(row["invited_by_user_id"])),
        status=InvitationStatus(row["status"]),
        expires_at=row["expires_at"],
        created_at=row["created_at"],
        accepted_at=row.get("accepted_at"),
        version=row["version"],
    )


def invitation_to_dict(invitation: Invitation) -> Dict[str, Any]:
    """Convert Invitation domain model to database dict."""
    return {
        "id": invitation.id,
        "token": invitation.token.root,
        "email": invitation.email,
        "role": invitation.role.value,
        "organization_id": invitation.organization_id,
        "invited_by_user_id": invitation.invited_by_user_id,
        "status": invitation.status.value,
        "expires_at": invitation.expires_at,
        "created_at": invitation.created_at,
        "accepted_at": invitation.accepted_at,
    }


def row_to_certificate(row: Dict[str, Any]) -> Certificate:
    """Convert database row to Certificate domain model."""
    revoked_by = _uuid(row.get("revoked_by_user_id"))
    course_id = _uuid(row.get("course_id"))
    return Certificate(
        id=CertificateId(_uuid(row["id"])),
        organization_id=OrganizationId(_uuid(row["organization_id"])),
        issued_by_user_id=UserId(_uuid(row["issued_by_user_id"])),
        course_id=CourseId(course_id) if course_id else None,
        recipient_name=row["recipient_name"],
        recipient_email=row["recipient_email"],
        title=row["title"],
        issued_at=row["issued_at"],
        revoked_at=row.get("revoked_at"),
        revoked_by_user_id=UserId(revoked_by) if revoked_by else None,
        version=row["version"],
    )


def certificate_to_dict(certificate: Certificate) -> Dict[str, Any]:
    """Convert Certificate domain model to database dict."""
    return {
        "id": certificate.id,
        "organization_id": certificate.organization_id,
        "issued_by_user_id": certificate.issued_by_user_id,
        "course_id": certificate.course_id,
        "recipient_name": certificate.recipient_name,
        "recipient_email": certificate.recipient_email,
        "title": certificate.title,
        "issued_at": certificate.issued_at,
        "revoked_at": certificate.revoked_at,
        "revoked_by_user_id": certificate.revoked_by_user_id,
    }


def row_to_course(row: Dict[str, Any]) -> Course:
    """Convert database row to Course domain model."""
    return Course(
        id=CourseId(_uuid(row["id"])),
        organization_id=OrganizationId(_uuid(row["organization_id"])),
        created_by_user_id=UserId(_uuid(row["created_by_user_id"])),
        title=row["title"],
        slug=row["slug"],
        description=row.get("description"),
        is_active=row["is_active"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        version=row["version"],
    )


def course_to_dict(course: Course) -> Dict[str, Any]:
    """Convert Course domain model to database dict."""
    return {
        "id": course.id,
        "organization_id": course.organization_id,
        "created_by_user_id": course.created_by_user_id,
        "title": course.title,
        "slug": course.slug,
        "description": course.description,
        "is_active": course.is_active,
        "created_at": course.created_at,
        "updated_at": course.updated_at,
    }
