"""Get the caller's organization."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import OrganizationView
from certis.domain.model import TokenClaims
from certis.domain.service import OrganizationService


class GetMyOrganizationRequest(BaseModel):
    claims: TokenClaims


class GetMyOrganizationUseCase(BaseUseCase):
    """Use case for reading the organization named by the caller's token."""

    def __init__(self, organization_service: OrganizationService) -> None:
        self.organization_service = organization_service

    async def execute(self, request: GetMyOrganizationRequest) -> OrganizationView:
        organization = await self.organization_service.get_for_tenant(request.claims)
        return OrganizationView.from_organization(organization)
