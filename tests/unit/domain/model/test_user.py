"""Unit tests for User membership invariants."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from certis.domain.value import OrganizationId, Role
from tests.conftest import make_user


class TestUserInvariants:
    def test_system_role_cannot_have_organization(self):
        with pytest.raises(ValidationError, match="System roles"):
            make_user("staff@certis.com", Role.STAFF, OrganizationId(uuid4()))

    @pytest.mark.parametrize("role", [Role.OWNER, Role.ADMIN])
    def test_management_role_requires_organization(self, role):
        with pytest.raises(ValidationError, match="requires an organization"):
            make_user("ada@example.com", role)

    def test_joined_at_requires_organization(self):
        with pytest.raises(ValidationError, match="joined_at"):
            make_user("ada@example.com", joined_at=datetime.now(timezone.utc))

    def test_unaffiliated_user_is_valid(self):
        user = make_user("ada@example.com")

        assert user.role is Role.USER
        assert not user.is_affiliated
        assert user.version == 0


class TestMembershipTransitions:
    def test_joined_sets_membership(self):
        user = make_user("ada@example.com")
        org_id = OrganizationId(uuid4())
        at = datetime.now(timezone.utc)

        member = user.joined(org_id, Role.ADMIN, at)

        assert member.organization_id == org_id
        assert member.role is Role.ADMIN
        assert member.joined_at == at
        # Original is untouched
        assert user.organization_id is None

    def test_left_organization_resets_to_unaffiliated_user(self):
        member = make_user("ada@example.com", Role.ADMIN, OrganizationId(uuid4()))

        left = member.left_organization()

        assert left.organization_id is None
        assert left.role is Role.USER
        assert left.joined_at is None
