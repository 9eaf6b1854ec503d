"""Unit tests for CreateOrganizationUseCase."""

import pytest

from certis.application.usecase.organization import (
    CreateOrganizationRequest,
    CreateOrganizationUseCase,
    GetMyOrganizationRequest,
    GetMyOrganizationUseCase,
)
from certis.domain.service import TokenService
from certis.domain.value import Role
from tests.conftest import claims_for, create_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestCreateOrganizationUseCase:
    @pytest.mark.asyncio
    async def test_response_carries_token_for_new_membership(self, unit_env):
        """The caller's old token has no organization; the returned one does."""
        use_case = await unit_env.get(CreateOrganizationUseCase)
        token_service = await unit_env.get(TokenService)
        founder = await create_user(unit_env, "founder@acme.com")

        response = await use_case.execute(
            CreateOrganizationRequest(
                claims=await claims_for(unit_env, founder),
                name="Acme Corp",
                domain="acme.test",
            )
        )

        claims = token_service.verify(response.token)
        assert claims.role is Role.OWNER
        assert str(claims.organization_id) == response.organization.organization_id
        assert response.organization.owner_user_id == str(founder.id)
        assert response.organization.member_count == 1

    @pytest.mark.asyncio
    async def test_get_my_organization_with_new_token(self, unit_env):
        create_use_case = await unit_env.get(CreateOrganizationUseCase)
        get_use_case = await unit_env.get(GetMyOrganizationUseCase)
        token_service = await unit_env.get(TokenService)
        founder = await create_user(unit_env, "founder@acme.com")
        response = await create_use_case.execute(
            CreateOrganizationRequest(
                claims=await claims_for(unit_env, founder),
                name="Acme Corp",
                domain="acme.test",
            )
        )

        mine = await get_use_case.execute(
            GetMyOrganizationRequest(claims=token_service.verify(response.token))
        )

        assert mine.organization_id == response.organization.organization_id
        assert mine.domain == "acme.test"
