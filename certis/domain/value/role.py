"""Roles and the capabilities they grant.

This module is the single source of truth for permission decisions; guards
and services ask it instead of comparing roles themselves.
"""

from enum import Enum


class Capability(str, Enum):
    """Actions gated by role."""

    MANAGE_USERS = "manage_users"
    REVOKE_CERTIFICATES = "revoke_certificates"
    MANAGE_PLATFORM = "manage_platform"
    CREATE_CERTIFICATES = "create_certificates"


class Role(str, Enum):
    """User role.

    SUDOER and STAFF are platform-wide system roles and never belong to an
    organization. OWNER, ADMIN and USER are scoped to one organization.
    """

    SUDOER = "SUDOER"
    STAFF = "STAFF"
    OWNER = "OWNER"
    ADMIN = "ADMIN"
    USER = "USER"

    @property
    def is_system_role(self) -> bool:
        return self in SYSTEM_ROLES

    @property
    def is_org_role(self) -> bool:
        return self in ORG_ROLES

    @property
    def can_manage_users(self) -> bool:
        """Invite, remove and change the role of users."""
        return self in _MANAGERS

    @property
    def can_revoke_certificates(self) -> bool:
        return self in _MANAGERS

    @property
    def can_manage_platform(self) -> bool:
        return self in SYSTEM_ROLES

    @property
    def can_create_certificates(self) -> bool:
        return self.is_org_role

    def grants(self, capability: Capability) -> bool:
        """Check whether this role grants a capability."""
        return has_capability(self, capability)


SYSTEM_ROLES = frozenset({Role.SUDOER, Role.STAFF})
ORG_ROLES = frozenset({Role.OWNER, Role.ADMIN, Role.USER})
_MANAGERS = frozenset({Role.SUDOER, Role.STAFF, Role.OWNER, Role.ADMIN})


def has_capability(role: Role, capability: Capability) -> bool:
    """Capability matrix lookup.

    Args:
        role: Role to check
        capability: Requested capability

    Returns:
        True if the role grants the capability
    """
    if capability is Capability.MANAGE_USERS:
        return role.can_manage_users
    if capability is Capability.REVOKE_CERTIFICATES:
        return role.can_revoke_certificates
    if capability is Capability.MANAGE_PLATFORM:
        return role.can_manage_platform
    if capability is Capability.CREATE_CERTIFICATES:
        return role.can_create_certificates
    return False
