"""Unit tests for CourseService and course-bound certificates."""

from uuid import uuid4

import pytest

from certis.domain.error import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    PreconditionFailedError,
    ValidationError,
)
from certis.domain.repository import CourseRepository
from certis.domain.service import CertificateService, CourseService
from certis.domain.value import CourseId, Role
from tests.conftest import add_member, claims_for, create_organization, create_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def acme_course(env, slug: str = "engines-101"):
    """An Acme course created by the owner; returns (course, owner claims)."""
    course_service = await env.get(CourseService)
    organization, owner = await create_organization(env)
    claims = await claims_for(env, owner)
    course = await course_service.create(claims, "Analytical Engines", slug)
    return course, claims


class TestCreateCourse:
    @pytest.mark.asyncio
    async def test_course_belongs_to_callers_organization(self, unit_env):
        course_service = await unit_env.get(CourseService)
        organization, _ = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)

        course = await course_service.create(
            await claims_for(unit_env, admin),
            "  Analytical Engines ",
            "Engines-101",
            description="Difference and analytical engines",
        )

        assert course.organization_id == organization.id
        assert course.created_by_user_id == admin.id
        assert course.title == "Analytical Engines"
        assert course.slug == "engines-101"
        assert course.is_active

    @pytest.mark.asyncio
    async def test_plain_member_cannot_create(self, unit_env):
        course_service = await unit_env.get(CourseService)
        organization, _ = await create_organization(unit_env)
        member = await add_member(unit_env, organization, "bob@acme.com")

        with pytest.raises(ForbiddenError):
            await course_service.create(
                await claims_for(unit_env, member), "Engines", "engines"
            )

    @pytest.mark.asyncio
    async def test_unaffiliated_user_cannot_create(self, unit_env):
        course_service = await unit_env.get(CourseService)
        user = await create_user(unit_env, "ada@example.com")

        with pytest.raises(PreconditionFailedError):
            await course_service.create(
                await claims_for(unit_env, user), "Engines", "engines"
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "title,slug", [("ab", "engines"), ("Engines", "no spaces"), ("Engines", "x")]
    )
    async def test_invalid_fields_are_rejected(self, unit_env, title, slug):
        course_service = await unit_env.get(CourseService)
        _, owner = await create_organization(unit_env)

        with pytest.raises(ValidationError):
            await course_service.create(await claims_for(unit_env, owner), title, slug)

    @pytest.mark.asyncio
    async def test_slug_is_unique_per_organization(self, unit_env):
        course_service = await unit_env.get(CourseService)
        _, claims = await acme_course(unit_env)
        _, globex_owner = await create_organization(
            unit_env, "owner@globex.com", "globex.test", "Globex"
        )

        with pytest.raises(ConflictError):
            await course_service.create(claims, "Engines Again", "engines-101")
        # Another tenant may reuse the slug
        other = await course_service.create(
            await claims_for(unit_env, globex_owner), "Engines", "engines-101"
        )
        assert other.slug == "engines-101"


class TestListCourses:
    @pytest.mark.asyncio
    async def test_listing_is_tenant_scoped(self, unit_env):
        course_service = await unit_env.get(CourseService)
        course, _ = await acme_course(unit_env)
        globex, globex_owner = await create_organization(
            unit_env, "owner@globex.com", "globex.test", "Globex"
        )
        await course_service.create(
            await claims_for(unit_env, globex_owner), "Globex Course", "globex-course"
        )

        listed = await course_service.list_for_tenant(course.organization_id)

        assert [c.id for c in listed] == [course.id]
        assert len(await course_service.list_for_tenant(globex.id)) == 1


class TestDeleteCourse:
    @pytest.mark.asyncio
    async def test_owner_deletes_unused_course(self, unit_env):
        course_service = await unit_env.get(CourseService)
        course_repo = await unit_env.get(CourseRepository)
        course, claims = await acme_course(unit_env)

        await course_service.delete(claims, course.id)

        assert await course_repo.find_by_id(course.id) is None

    @pytest.mark.asyncio
    async def test_cross_tenant_delete_is_forbidden(self, unit_env):
        course_service = await unit_env.get(CourseService)
        course_repo = await unit_env.get(CourseRepository)
        course, _ = await acme_course(unit_env)
        _, globex_owner = await create_organization(
            unit_env, "owner@globex.com", "globex.test", "Globex"
        )

        with pytest.raises(ForbiddenError):
            await course_service.delete(
                await claims_for(unit_env, globex_owner), course.id
            )
        assert await course_repo.find_by_id(course.id) is not None

    @pytest.mark.asyncio
    async def test_plain_member_cannot_delete(self, unit_env):
        course_service = await unit_env.get(CourseService)
        organization, owner = await create_organization(unit_env)
        course = await course_service.create(
            await claims_for(unit_env, owner), "Analytical Engines", "engines-101"
        )
        member = await add_member(unit_env, organization, "bob@acme.com")

        with pytest.raises(ForbiddenError):
            await course_service.delete(await claims_for(unit_env, member), course.id)

    @pytest.mark.asyncio
    async def test_course_with_certificates_is_kept(self, unit_env):
        course_service = await unit_env.get(CourseService)
        certificate_service = await unit_env.get(CertificateService)
        course, claims = await acme_course(unit_env)
        await certificate_service.issue(
            claims, "Ada", "ada@example.com", "Engines", course_id=course.id
        )

        with pytest.raises(ConflictError):
            await course_service.delete(claims, course.id)

    @pytest.mark.asyncio
    async def test_unknown_course(self, unit_env):
        course_service = await unit_env.get(CourseService)
        _, claims = await acme_course(unit_env)

        with pytest.raises(NotFoundError):
            await course_service.delete(claims, CourseId(uuid4()))


class TestIssueForCourse:
    @pytest.mark.asyncio
    async def test_certificate_references_course(self, unit_env):
        certificate_service = await unit_env.get(CertificateService)
        course, claims = await acme_course(unit_env)

        certificate = await certificate_service.issue(
            claims, "Ada", "ada@example.com", "Engines", course_id=course.id
        )

        assert certificate.course_id == course.id

    @pytest.mark.asyncio
    async def test_other_tenants_course_is_forbidden(self, unit_env):
        certificate_service = await unit_env.get(CertificateService)
        course, _ = await acme_course(unit_env)
        _, globex_owner = await create_organization(
            unit_env, "owner@globex.com", "globex.test", "Globex"
        )

        with pytest.raises(ForbiddenError):
            await certificate_service.issue(
                await claims_for(unit_env, globex_owner),
                "Ada",
                "ada@example.com",
                "Engines",
                course_id=course.id,
            )

    @pytest.mark.asyncio
    async def test_inactive_course_is_refused(self, unit_env):
        course_service = await unit_env.get(CourseService)
        certificate_service = await unit_env.get(CertificateService)
        _, owner = await create_organization(unit_env)
        claims = await claims_for(unit_env, owner)
        retired = await course_service.create(
            claims, "Retired Course", "retired", is_active=False
        )

        with pytest.raises(PreconditionFailedError):
            await certificate_service.issue(
                claims, "Ada", "ada@example.com", "Retired", course_id=retired.id
            )

    @pytest.mark.asyncio
    async def test_unknown_course(self, unit_env):
        certificate_service = await unit_env.get(CertificateService)
        _, claims = await acme_course(unit_env)

        with pytest.raises(NotFoundError):
            await certificate_service.issue(
                claims, "Ada", "ada@example.com", "Engines", course_id=CourseId(uuid4())
            )

