"""Unit tests for optimistic versioning and atomic blocks (in-memory store)."""

import pytest

from certis.domain.error import ConcurrencyConflictError, ConflictError
from certis.domain.repository import (
    OrganizationRepository,
    TransactionManager,
    UserRepository,
)
from certis.domain.value import Role
from tests.conftest import create_organization, make_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestVersionedSave:
    @pytest.mark.asyncio
    async def test_versions_start_at_one_and_increment(self, unit_env):
        user_repo = await unit_env.get(UserRepository)

        created = await user_repo.save(make_user("ada@example.com"))
        updated = await user_repo.save(created.model_copy(update={"first_name": "Ada"}))

        assert created.version == 1
        assert updated.version == 2

    @pytest.mark.asyncio
    async def test_stale_write_loses(self, unit_env):
        """Two writers read version 1; only the first write succeeds."""
        user_repo = await unit_env.get(UserRepository)
        stored = await user_repo.save(make_user("ada@example.com"))

        await user_repo.save(stored.model_copy(update={"first_name": "Ada"}))

        with pytest.raises(ConcurrencyConflictError):
            await user_repo.save(stored.model_copy(update={"first_name": "Augusta"}))
        assert (await user_repo.find_by_id(stored.id)).first_name == "Ada"

    @pytest.mark.asyncio
    async def test_second_owner_in_organization_is_rejected(self, unit_env):
        user_repo = await unit_env.get(UserRepository)
        organization, _ = await create_organization(unit_env)

        with pytest.raises(ConflictError):
            await user_repo.save(
                make_user("usurper@acme.com", Role.OWNER, organization.id)
            )


class TestAtomic:
    @pytest.mark.asyncio
    async def test_failure_rolls_back_every_write(self, unit_env):
        transaction_manager = await unit_env.get(TransactionManager)
        user_repo = await unit_env.get(UserRepository)
        org_repo = await unit_env.get(OrganizationRepository)
        organization, owner = await create_organization(unit_env)

        with pytest.raises(ConcurrencyConflictError):
            async with transaction_manager.atomic():
                await org_repo.save(organization.model_copy(update={"member_count": 5}))
                await user_repo.save(owner.model_copy(update={"first_name": "Changed"}))
                # Stale copy: the organization was just written
                await org_repo.save(organization.model_copy(update={"name": "Nope"}))

        assert (await org_repo.find_by_id(organization.id)).member_count == 1
        assert (await user_repo.find_by_id(owner.id)).first_name == ""

    @pytest.mark.asyncio
    async def test_success_keeps_writes(self, unit_env):
        transaction_manager = await unit_env.get(TransactionManager)
        user_repo = await unit_env.get(UserRepository)

        async with transaction_manager.atomic():
            saved = await user_repo.save(make_user("ada@example.com"))

        assert await user_repo.find_by_id(saved.id) is not None
