"""Explicit authorization checks.

Guards are called at the top of every protected operation. Each one either
returns silently or raises; none of them read ambient request state.
"""

import logfire

from certis.domain.error import ForbiddenError, PreconditionFailedError
from certis.domain.model import Principal
from certis.domain.value import Capability, OrganizationId, Role

from .base import Service


class AuthorizationGuard(Service):
    """Role and organization checks backed by the role capability matrix."""

    def require_organization(self, principal: Principal) -> OrganizationId:
        """Ensure the principal belongs to an organization.

        Returns:
            The principal's organization id

        Raises:
            PreconditionFailedError: If the principal has no organization
        """
        if principal.organization_id is None:
            logfire.warn("Organization required", role=principal.role.value)
            raise PreconditionFailedError("This operation requires an organization")
        return principal.organization_id

    def require_capability(self, principal: Principal, capability: Capability) -> None:
        """Ensure the principal's role grants a capability.

        Raises:
            ForbiddenError: If the role does not grant it
        """
        if not principal.role.grants(capability):
            logfire.warn(
                "Capability denied",
                role=principal.role.value,
                capability=capability.value,
            )
            raise ForbiddenError(
                f"Role {principal.role.value} may not {capability.value.replace('_', ' ')}"
            )

    def require_same_organization(
        self, principal: Principal, resource_organization_id: OrganizationId
    ) -> None:
        """Ensure a resource belongs to the principal's organization.

        System roles pass for any organization.

        Raises:
            ForbiddenError: If the organizations differ
        """
        if principal.role.is_system_role:
            return
        if principal.organization_id != resource_organization_id:
            logfire.warn(
                "Cross-organization access denied",
                organization_id=str(principal.organization_id),
                resource_organization_id=str(resource_organization_id),
            )
            raise ForbiddenError("Resource belongs to another organization")

    def require_org_manager(
        self, principal: Principal, organization_id: OrganizationId
    ) -> None:
        """Ensure the principal is OWNER or ADMIN of a given organization.

        Raises:
            ForbiddenError: Otherwise
        """
        if principal.role not in (Role.OWNER, Role.ADMIN):
            raise ForbiddenError("Only an OWNER or ADMIN may do this")
        if principal.organization_id != organization_id:
            raise ForbiddenError("Only an OWNER or ADMIN of this organization may do this")
