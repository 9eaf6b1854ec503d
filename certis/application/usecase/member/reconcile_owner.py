"""Reconcile organization owner use case."""

from uuid import UUID

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import OrganizationView
from certis.domain.model import TokenClaims
from certis.domain.service import OwnershipService
from certis.domain.value import OrganizationId
from certis.util.retry import retry_on_conflict


class ReconcileOwnerRequest(BaseModel):
    claims: TokenClaims
    organization_id: UUID


class ReconcileOwnerUseCase(BaseUseCase):
    """Use case for the platform-only owner repair operation."""

    def __init__(self, ownership_service: OwnershipService) -> None:
        self.ownership_service = ownership_service

    async def execute(self, request: ReconcileOwnerRequest) -> OrganizationView:
        organization = await retry_on_conflict(
            lambda: self.ownership_service.reconcile_owner(
                OrganizationId(request.organization_id), request.claims.user_id
            ),
            name="reconcile_owner",
        )
        return OrganizationView.from_organization(organization)
