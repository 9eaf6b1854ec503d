"""Unit tests for the role capability matrix."""

import pytest

from certis.domain.value import SYSTEM_ROLES, Capability, Role, has_capability


class TestRoleClassification:
    def test_system_roles(self):
        assert Role.SUDOER.is_system_role
        assert Role.STAFF.is_system_role
        assert SYSTEM_ROLES == {Role.SUDOER, Role.STAFF}

    @pytest.mark.parametrize("role", [Role.OWNER, Role.ADMIN, Role.USER])
    def test_org_roles_are_not_system_roles(self, role):
        assert role.is_org_role
        assert not role.is_system_role

    @pytest.mark.parametrize("role", list(Role))
    def test_every_role_is_exactly_one_kind(self, role):
        assert role.is_system_role != role.is_org_role

    def test_system_roles_are_not_org_roles(self):
        assert not Role.SUDOER.is_org_role
        assert not Role.STAFF.is_org_role


class TestCapabilityMatrix:
    """The matrix every guard decision is derived from."""

    @pytest.mark.parametrize(
        "role,expected",
        [
            (Role.SUDOER, True),
            (Role.STAFF, True),
            (Role.OWNER, True),
            (Role.ADMIN, True),
            (Role.USER, False),
        ],
    )
    def test_manage_users(self, role, expected):
        assert role.can_manage_users is expected
        assert has_capability(role, Capability.MANAGE_USERS) is expected

    @pytest.mark.parametrize(
        "role,expected",
        [
            (Role.SUDOER, True),
            (Role.STAFF, True),
            (Role.OWNER, True),
            (Role.ADMIN, True),
            (Role.USER, False),
        ],
    )
    def test_revoke_certificates(self, role, expected):
        assert role.grants(Capability.REVOKE_CERTIFICATES) is expected

    @pytest.mark.parametrize(
        "role,expected",
        [
            (Role.SUDOER, True),
            (Role.STAFF, True),
            (Role.OWNER, False),
            (Role.ADMIN, False),
            (Role.USER, False),
        ],
    )
    def test_manage_platform(self, role, expected):
        assert role.can_manage_platform is expected

    @pytest.mark.parametrize(
        "role,expected",
        [
            (Role.SUDOER, False),
            (Role.STAFF, False),
            (Role.OWNER, True),
            (Role.ADMIN, True),
            (Role.USER, True),
        ],
    )
    def test_create_certificates(self, role, expected):
        """Certificates belong to an organization, so only members issue them."""
        assert role.can_create_certificates is expected
