"""Certificate domain service.

Every operation is scoped to the caller's tenant, taken from verified token
claims.
"""

from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

import logfire

from certis.domain.error import (
    ConflictError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)
from certis.domain.model import Certificate, TokenClaims
from certis.domain.repository import CertificateRepository, CourseRepository
from certis.domain.value import (
    Capability,
    CertificateId,
    CourseId,
    OrganizationId,
    normalize_email,
)

from .authorization_guard import AuthorizationGuard
from .base import Service


class CertificateService(Service):
    """Domain service for certificate issue, revocation and listing."""

    def __init__(
        self,
        certificate_repository: CertificateRepository,
        course_repository: CourseRepository,
        authorization_guard: AuthorizationGuard,
    ) -> None:
        self.certificate_repository = certificate_repository
        self.course_repository = course_repository
        self.authorization_guard = authorization_guard

    async def issue(
        self,
        principal: TokenClaims,
        recipient_name: str,
        recipient_email: str,
        title: str,
        course_id: Optional[CourseId] = None,
    ) -> Certificate:
        """Issue a certificate on behalf of the caller's organization.

        Raises:
            PreconditionFailedError: If the caller has no organization, or the
                course is inactive
            NotFoundError: If the course does not exist
            ForbiddenError: If the caller's role cannot create certificates, or
                the course belongs to another organization
            ValidationError: If the recipient or title is invalid
        """
        with logfire.span("certificate_service.issue", user_id=str(principal.user_id)):
            organization_id = self.authorization_guard.require_organization(principal)
            self.authorization_guard.require_capability(
                principal, Capability.CREATE_CERTIFICATES
            )
            if course_id is not None:
                await self._require_active_course(principal, course_id)

            try:
                certificate = Certificate(
                    id=CertificateId(uuid4()),
                    organization_id=organization_id,
                    issued_by_user_id=principal.user_id,
                    course_id=course_id,
                    recipient_name=recipient_name,
                    recipient_email=normalize_email(recipient_email),
                    title=title,
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            saved = await self.certificate_repository.save(certificate)
            logfire.info(
                "Certificate issued",
                certificate_id=str(saved.id),
                organization_id=str(organization_id),
            )
            return saved

    async def revoke(
        self, principal: TokenClaims, certificate_id: CertificateId
    ) -> Certificate:
        """Revoke a certificate of the caller's organization.

        Raises:
            ForbiddenError: If the caller cannot revoke, or the certificate
                belongs to another organization
            NotFoundError: If the certificate does not exist
            ConflictError: If it is already revoked
        """
        with logfire.span(
            "certificate_service.revoke", certificate_id=str(certificate_id)
        ):
            self.authorization_guard.require_capability(
                principal, Capability.REVOKE_CERTIFICATES
            )
            certificate = await self.certificate_repository.find_by_id(certificate_id)
            if certificate is None:
                raise NotFoundError("Certificate", str(certificate_id))
            self.authorization_guard.require_same_organization(
                principal, certificate.organization_id
            )
            if certificate.is_revoked:
                raise ConflictError("Certificate is already revoked")

            revoked = await self.certificate_repository.save(
                certificate.model_copy(
                    update={
                        "revoked_at": datetime.now(timezone.utc),
                        "revoked_by_user_id": principal.user_id,
                    }
                )
            )
            logfire.info("Certificate revoked", certificate_id=str(certificate_id))
            return revoked

    async def list_for_tenant(self, organization_id: OrganizationId) -> list[Certificate]:
        return await self.certificate_repository.find_by_organization(organization_id)

    async def list_all(self, principal: TokenClaims) -> list[Certificate]:
        """Every certificate on the platform.

        Raises:
            ForbiddenError: Unless the caller holds a platform role
        """
        self.authorization_guard.require_capability(principal, Capability.MANAGE_PLATFORM)
        return await self.certificate_repository.find_all()

    async def _require_active_course(
        self, principal: TokenClaims, course_id: CourseId
    ) -> None:
        course = await self.course_repository.find_by_id(course_id)
        if course is None:
            raise NotFoundError("Course", str(course_id))
        self.authorization_guard.require_same_organization(
            principal, course.organization_id
        )
        if not course.is_active:
            raise PreconditionFailedError("Course is not active")
