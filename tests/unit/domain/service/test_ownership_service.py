"""Unit tests for OwnershipService."""

import pytest

from certis.domain.error import (
    ForbiddenError,
    PreconditionFailedError,
)
from certis.domain.repository import OrganizationRepository, UserRepository
from certis.domain.service import OwnershipService
from certis.domain.value import Role
from tests.conftest import add_member, create_organization, create_user
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def reload(env, *users):
    user_repo = await env.get(UserRepository)
    return [await user_repo.find_by_id(u.id) for u in users]


class TestTransferOwnership:
    @pytest.mark.asyncio
    async def test_transfer_swaps_roles_and_reference(self, unit_env):
        # Arrange
        ownership_service = await unit_env.get(OwnershipService)
        org_repo = await unit_env.get(OrganizationRepository)
        organization, owner = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)

        # Act
        new_owner = await ownership_service.transfer_ownership(owner.id, admin.id)

        # Assert
        assert new_owner.role is Role.OWNER
        previous, promoted = await reload(unit_env, owner, admin)
        assert previous.role is Role.ADMIN
        assert previous.organization_id == organization.id
        assert promoted.role is Role.OWNER
        assert (await org_repo.find_by_id(organization.id)).owner_user_id == admin.id

    @pytest.mark.asyncio
    async def test_transfer_back_restores_original_owner(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        org_repo = await unit_env.get(OrganizationRepository)
        organization, owner = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)

        await ownership_service.transfer_ownership(owner.id, admin.id)
        await ownership_service.transfer_ownership(admin.id, owner.id)

        original, returned = await reload(unit_env, owner, admin)
        assert original.role is Role.OWNER
        assert returned.role is Role.ADMIN
        assert returned.organization_id == organization.id
        stored = await org_repo.find_by_id(organization.id)
        assert stored.owner_user_id == owner.id

    @pytest.mark.asyncio
    async def test_only_the_owner_may_transfer(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)
        member = await add_member(unit_env, organization, "bob@acme.com")

        with pytest.raises(ForbiddenError):
            await ownership_service.transfer_ownership(admin.id, member.id)

    @pytest.mark.asyncio
    async def test_new_owner_must_be_a_member(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        _, owner = await create_organization(unit_env)
        outsider = await create_user(unit_env, "outsider@example.com")

        with pytest.raises(PreconditionFailedError):
            await ownership_service.transfer_ownership(owner.id, outsider.id)

        (still_owner,) = await reload(unit_env, owner)
        assert still_owner.role is Role.OWNER

    @pytest.mark.asyncio
    async def test_transfer_to_self_is_rejected(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        _, owner = await create_organization(unit_env)

        with pytest.raises(PreconditionFailedError):
            await ownership_service.transfer_ownership(owner.id, owner.id)


class TestChangeRole:
    @pytest.mark.asyncio
    async def test_owner_promotes_user_to_admin(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, owner = await create_organization(unit_env)
        member = await add_member(unit_env, organization, "bob@acme.com")

        updated = await ownership_service.change_role(member.id, Role.ADMIN, owner.id)

        assert updated.role is Role.ADMIN

    @pytest.mark.asyncio
    async def test_assigning_owner_transfers_ownership(self, unit_env):
        """There is never more than one OWNER: the previous one becomes ADMIN."""
        ownership_service = await unit_env.get(OwnershipService)
        org_repo = await unit_env.get(OrganizationRepository)
        user_repo = await unit_env.get(UserRepository)
        organization, owner = await create_organization(unit_env)
        member = await add_member(unit_env, organization, "bob@acme.com")

        await ownership_service.change_role(member.id, Role.OWNER, owner.id)

        previous, promoted = await reload(unit_env, owner, member)
        assert previous.role is Role.ADMIN
        assert promoted.role is Role.OWNER
        assert (await org_repo.find_by_id(organization.id)).owner_user_id == member.id
        members = await user_repo.find_by_organization(organization.id)
        assert [m.id for m in members if m.role is Role.OWNER] == [member.id]

    @pytest.mark.asyncio
    async def test_owner_cannot_be_demoted_directly(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, owner = await create_organization(unit_env)
        staff = await create_user(unit_env, "staff@certis.com", Role.STAFF)

        with pytest.raises(PreconditionFailedError):
            await ownership_service.change_role(owner.id, Role.ADMIN, staff.id)

    @pytest.mark.asyncio
    async def test_users_cannot_change_their_own_role(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)

        with pytest.raises(ForbiddenError):
            await ownership_service.change_role(admin.id, Role.USER, admin.id)

    @pytest.mark.asyncio
    async def test_admin_cannot_grant_ownership(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)
        member = await add_member(unit_env, organization, "bob@acme.com")

        with pytest.raises(ForbiddenError):
            await ownership_service.change_role(member.id, Role.OWNER, admin.id)

    @pytest.mark.asyncio
    async def test_admin_cannot_demote_another_admin(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)
        other_admin = await add_member(
            unit_env, organization, "grace@acme.com", Role.ADMIN
        )

        with pytest.raises(ForbiddenError):
            await ownership_service.change_role(other_admin.id, Role.USER, admin.id)

    @pytest.mark.asyncio
    async def test_plain_member_cannot_change_roles(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        member = await add_member(unit_env, organization, "bob@acme.com")
        other = await add_member(unit_env, organization, "carol@acme.com")

        with pytest.raises(ForbiddenError):
            await ownership_service.change_role(other.id, Role.ADMIN, member.id)

    @pytest.mark.asyncio
    async def test_cross_organization_change_is_forbidden(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        acme, _ = await create_organization(unit_env)
        _, globex_owner = await create_organization(
            unit_env, "owner@globex.com", "globex.test", "Globex"
        )
        acme_member = await add_member(unit_env, acme, "bob@acme.com")

        with pytest.raises(ForbiddenError):
            await ownership_service.change_role(
                acme_member.id, Role.ADMIN, globex_owner.id
            )

    @pytest.mark.asyncio
    async def test_system_role_requires_leaving_the_organization(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        member = await add_member(unit_env, organization, "bob@acme.com")
        sudoer = await create_user(unit_env, "root@certis.com", Role.SUDOER)

        with pytest.raises(PreconditionFailedError):
            await ownership_service.change_role(member.id, Role.STAFF, sudoer.id)

    @pytest.mark.asyncio
    async def test_staff_cannot_touch_sudoer(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        staff = await create_user(unit_env, "staff@certis.com", Role.STAFF)
        sudoer = await create_user(unit_env, "root@certis.com", Role.SUDOER)

        with pytest.raises(ForbiddenError):
            await ownership_service.change_role(sudoer.id, Role.USER, staff.id)

    @pytest.mark.asyncio
    async def test_same_role_is_a_no_op(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, owner = await create_organization(unit_env)
        member = await add_member(unit_env, organization, "bob@acme.com")

        unchanged = await ownership_service.change_role(member.id, Role.USER, owner.id)

        assert unchanged.version == member.version


class TestRemoveFromOrganization:
    @pytest.mark.asyncio
    async def test_remove_member(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        org_repo = await unit_env.get(OrganizationRepository)
        organization, owner = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)
        before = (await org_repo.find_by_id(organization.id)).member_count

        removed = await ownership_service.remove_from_organization(admin.id, owner.id)

        assert removed.organization_id is None
        assert removed.role is Role.USER
        assert removed.joined_at is None
        after = (await org_repo.find_by_id(organization.id)).member_count
        assert after == before - 1

    @pytest.mark.asyncio
    async def test_owner_cannot_be_removed(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        _, owner = await create_organization(unit_env)
        sudoer = await create_user(unit_env, "root@certis.com", Role.SUDOER)

        with pytest.raises(PreconditionFailedError):
            await ownership_service.remove_from_organization(owner.id, sudoer.id)

    @pytest.mark.asyncio
    async def test_admin_may_only_remove_users(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        admin = await add_member(unit_env, organization, "ada@acme.com", Role.ADMIN)
        other_admin = await add_member(
            unit_env, organization, "grace@acme.com", Role.ADMIN
        )
        member = await add_member(unit_env, organization, "bob@acme.com")

        with pytest.raises(ForbiddenError):
            await ownership_service.remove_from_organization(other_admin.id, admin.id)
        removed = await ownership_service.remove_from_organization(member.id, admin.id)
        assert removed.organization_id is None


class TestFallbackAndReconcile:
    @pytest.mark.asyncio
    async def test_fallback_prefers_most_senior_admin(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        await add_member(unit_env, organization, "veteran@acme.com", joined_days_ago=90)
        await add_member(
            unit_env, organization, "new.admin@acme.com", Role.ADMIN, joined_days_ago=5
        )
        senior_admin = await add_member(
            unit_env, organization, "old.admin@acme.com", Role.ADMIN, joined_days_ago=30
        )

        fallback = await ownership_service.resolve_fallback_owner(organization)

        assert fallback.id == senior_admin.id

    @pytest.mark.asyncio
    async def test_fallback_uses_senior_user_without_admins(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, _ = await create_organization(unit_env)
        veteran = await add_member(
            unit_env, organization, "veteran@acme.com", joined_days_ago=90
        )
        await add_member(unit_env, organization, "rookie@acme.com", joined_days_ago=1)

        fallback = await ownership_service.resolve_fallback_owner(organization)

        assert fallback.id == veteran.id

    @pytest.mark.asyncio
    async def test_reconcile_promotes_fallback_when_owner_is_gone(self, unit_env):
        # Arrange: the owner record drifted out of the organization
        ownership_service = await unit_env.get(OwnershipService)
        user_repo = await unit_env.get(UserRepository)
        org_repo = await unit_env.get(OrganizationRepository)
        organization, owner = await create_organization(unit_env)
        admin = await add_member(
            unit_env, organization, "ada@acme.com", Role.ADMIN, joined_days_ago=3
        )
        await user_repo.save(owner.left_organization())
        sudoer = await create_user(unit_env, "root@certis.com", Role.SUDOER)

        # Act
        repaired = await ownership_service.reconcile_owner(organization.id, sudoer.id)

        # Assert
        assert repaired.owner_user_id == admin.id
        assert repaired.member_count == 1
        (promoted,) = await reload(unit_env, admin)
        assert promoted.role is Role.OWNER
        assert (await org_repo.find_by_id(organization.id)).owner_user_id == admin.id

    @pytest.mark.asyncio
    async def test_reconcile_without_members_leaves_organization_ownerless(
        self, unit_env
    ):
        ownership_service = await unit_env.get(OwnershipService)
        user_repo = await unit_env.get(UserRepository)
        organization, owner = await create_organization(unit_env)
        await user_repo.save(owner.left_organization())
        staff = await create_user(unit_env, "staff@certis.com", Role.STAFF)

        repaired = await ownership_service.reconcile_owner(organization.id, staff.id)

        assert repaired.owner_user_id is None
        assert repaired.member_count == 0

    @pytest.mark.asyncio
    async def test_reconcile_keeps_valid_owner(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, owner = await create_organization(unit_env)
        staff = await create_user(unit_env, "staff@certis.com", Role.STAFF)

        result = await ownership_service.reconcile_owner(organization.id, staff.id)

        assert result.owner_user_id == owner.id
        assert result.version == organization.version

    @pytest.mark.asyncio
    async def test_reconcile_requires_platform_role(self, unit_env):
        ownership_service = await unit_env.get(OwnershipService)
        organization, owner = await create_organization(unit_env)

        with pytest.raises(ForbiddenError):
            await ownership_service.reconcile_owner(organization.id, owner.id)
