"""Course catalog domain service.

Courses belong to the caller's tenant. Creating and deleting them takes the
same capability as managing members.
"""

from typing import Optional
from uuid import uuid4

import logfire

from certis.domain.error import ConflictError, NotFoundError, ValidationError
from certis.domain.model import Course, TokenClaims
from certis.domain.repository import CertificateRepository, CourseRepository
from certis.domain.value import Capability, CourseId, OrganizationId

from .authorization_guard import AuthorizationGuard
from .base import Service


class CourseService(Service):
    """Domain service for the per-organization course catalog."""

    def __init__(
        self,
        course_repository: CourseRepository,
        certificate_repository: CertificateRepository,
        authorization_guard: AuthorizationGuard,
    ) -> None:
        self.course_repository = course_repository
        self.certificate_repository = certificate_repository
        self.authorization_guard = authorization_guard

    async def create(
        self,
        principal: TokenClaims,
        title: str,
        slug: str,
        description: Optional[str] = None,
        is_active: bool = True,
    ) -> Course:
        """Add a course to the caller's organization.

        Raises:
            PreconditionFailedError: If the caller has no organization
            ForbiddenError: If the caller is not an OWNER or ADMIN
            ValidationError: If the title, slug or description is invalid
            ConflictError: If the slug is already used in the organization
        """
        with logfire.span("course_service.create", user_id=str(principal.user_id)):
            organization_id = self.authorization_guard.require_organization(principal)
            self.authorization_guard.require_capability(
                principal, Capability.MANAGE_USERS
            )

            try:
                course = Course(
                    id=CourseId(uuid4()),
                    organization_id=organization_id,
                    created_by_user_id=principal.user_id,
                    title=title.strip(),
                    slug=slug.strip().lower(),
                    description=description,
                    is_active=is_active,
                )
            except ValueError as e:
                raise ValidationError(str(e)) from e

            saved = await self.course_repository.save(course)
            logfire.info(
                "Course created",
                course_id=str(saved.id),
                organization_id=str(organization_id),
            )
            return saved

    async def get(self, principal: TokenClaims, course_id: CourseId) -> Course:
        """A course of the caller's organization.

        Raises:
            NotFoundError: If the course does not exist
            ForbiddenError: If it belongs to another organization
        """
        course = await self.course_repository.find_by_id(course_id)
        if course is None:
            raise NotFoundError("Course", str(course_id))
        self.authorization_guard.require_same_organization(
            principal, course.organization_id
        )
        return course

    async def list_for_tenant(self, organization_id: OrganizationId) -> list[Course]:
        return await self.course_repository.find_by_organization(organization_id)

    async def delete(self, principal: TokenClaims, course_id: CourseId) -> None:
        """Delete a course that no certificate references.

        Raises:
            ForbiddenError: If the caller cannot manage the course's organization
            NotFoundError: If the course does not exist
            ConflictError: If certificates were issued for the course
        """
        with logfire.span("course_service.delete", course_id=str(course_id)):
            self.authorization_guard.require_capability(
                principal, Capability.MANAGE_USERS
            )
            course = await self.get(principal, course_id)
            if await self.certificate_repository.exists_for_course(course_id):
                logfire.warn("Course has certificates", course_id=str(course_id))
                raise ConflictError("Course still has certificates")

            await self.course_repository.delete(course)
            logfire.info(
                "Course deleted",
                course_id=str(course_id),
                organization_id=str(course.organization_id),
            )
