"""Per-request tenant resolution."""

from certis.domain.error import PreconditionFailedError
from certis.domain.model import TokenClaims
from certis.domain.value import OrganizationId

from .base import Service
from .token_service import TokenService


class TenantContext(Service):
    """Supplies the organization every scoped read and write is bound to.

    The tenant always comes from the verified token. Client-supplied
    organization ids are never consulted.
    """

    def __init__(self, token_service: TokenService) -> None:
        self.token_service = token_service

    def organization_id_for_request(self, token: str) -> OrganizationId | None:
        """Verify a bearer token and return its organization claim.

        Returns None for unaffiliated users and system roles.

        Raises:
            InvalidTokenError: If the token does not verify
        """
        return self.organization_id_for_claims(self.token_service.verify(token))

    @staticmethod
    def organization_id_for_claims(claims: TokenClaims) -> OrganizationId | None:
        return claims.organization_id

    def require_tenant(self, claims: TokenClaims) -> OrganizationId:
        """Organization id for a tenant-scoped query.

        Raises:
            PreconditionFailedError: If the caller has no organization
        """
        organization_id = self.organization_id_for_claims(claims)
        if organization_id is None:
            raise PreconditionFailedError("This operation requires an organization")
        return organization_id
