"""Unit tests for OrganizationService."""

import pytest

from certis.domain.error import (
    ConflictError,
    ForbiddenError,
    PreconditionFailedError,
    ValidationError,
)
from certis.domain.repository import UserRepository
from certis.domain.service import OrganizationService
from certis.domain.value import Role
from tests.conftest import claims_for, create_organization, create_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateOrganization:
    @pytest.mark.asyncio
    async def test_founder_becomes_owner(self, unit_env):
        """The organization and its OWNER are created together."""
        organization_service = await unit_env.get(OrganizationService)
        user_repo = await unit_env.get(UserRepository)
        founder = await create_user(unit_env, "founder@acme.com")

        organization = await organization_service.create_organization(
            founder.id, "Acme Corp", "Acme.Test", "Certificates for everyone"
        )

        assert organization.domain.root == "acme.test"
        assert organization.owner_user_id == founder.id
        assert organization.member_count == 1

        owner = await user_repo.find_by_id(founder.id)
        assert owner.role is Role.OWNER
        assert owner.organization_id == organization.id
        assert owner.joined_at is not None

    @pytest.mark.asyncio
    async def test_domain_must_be_unique(self, unit_env):
        organization_service = await unit_env.get(OrganizationService)
        await create_organization(unit_env, domain="acme.test")
        other = await create_user(unit_env, "other@example.com")

        with pytest.raises(ConflictError):
            await organization_service.create_organization(
                other.id, "Acme Again", "ACME.test"
            )

    @pytest.mark.asyncio
    async def test_member_cannot_found_second_organization(self, unit_env):
        organization_service = await unit_env.get(OrganizationService)
        _, owner = await create_organization(unit_env)

        with pytest.raises(ConflictError):
            await organization_service.create_organization(
                owner.id, "Second Org", "second.test"
            )

    @pytest.mark.asyncio
    async def test_platform_account_cannot_found_organization(self, unit_env):
        organization_service = await unit_env.get(OrganizationService)
        staff = await create_user(unit_env, "staff@certis.com", Role.STAFF)

        with pytest.raises(ForbiddenError):
            await organization_service.create_organization(
                staff.id, "Staff Org", "staff.test"
            )

    @pytest.mark.parametrize(
        "name,domain", [("Ac", "acme.test"), ("Acme Corp", "not a domain")]
    )
    @pytest.mark.asyncio
    async def test_invalid_input_raises_validation_error(self, unit_env, name, domain):
        organization_service = await unit_env.get(OrganizationService)
        founder = await create_user(unit_env, "founder@acme.com")

        with pytest.raises(ValidationError):
            await organization_service.create_organization(founder.id, name, domain)

    @pytest.mark.asyncio
    async def test_failed_creation_leaves_founder_unaffiliated(self, unit_env):
        organization_service = await unit_env.get(OrganizationService)
        user_repo = await unit_env.get(UserRepository)
        founder = await create_user(unit_env, "founder@acme.com")

        with pytest.raises(ValidationError):
            await organization_service.create_organization(founder.id, "Acme", "bad")

        assert (await user_repo.find_by_id(founder.id)).organization_id is None


class TestGetForTenant:
    @pytest.mark.asyncio
    async def test_returns_callers_organization(self, unit_env):
        organization_service = await unit_env.get(OrganizationService)
        organization, owner = await create_organization(unit_env)

        found = await organization_service.get_for_tenant(
            await claims_for(unit_env, owner)
        )

        assert found.id == organization.id

    @pytest.mark.asyncio
    async def test_unaffiliated_caller(self, unit_env):
        organization_service = await unit_env.get(OrganizationService)
        user = await create_user(unit_env, "ada@example.com")

        with pytest.raises(PreconditionFailedError):
            await organization_service.get_for_tenant(await claims_for(unit_env, user))
