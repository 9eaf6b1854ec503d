"""Create organization use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import OrganizationView
from certis.domain.model import TokenClaims
from certis.domain.service import OrganizationService, TokenService, UserService


class CreateOrganizationRequest(BaseModel):
    """Create organization request."""

    claims: TokenClaims
    name: str
    domain: str
    description: str | None = None


class CreateOrganizationResponse(BaseModel):
    """The new organization plus a token reflecting the founder's OWNER role."""

    organization: OrganizationView
    token: str


class CreateOrganizationUseCase(BaseUseCase):
    """Use case for founding an organization."""

    def __init__(
        self,
        organization_service: OrganizationService,
        user_service: UserService,
        token_service: TokenService,
    ) -> None:
        self.organization_service = organization_service
        self.user_service = user_service
        self.token_service = token_service

    async def execute(
        self, request: CreateOrganizationRequest
    ) -> CreateOrganizationResponse:
        """Create the organization and re-issue the founder's token.

        Raises:
            ForbiddenError: If the caller holds a system role
            ConflictError: If the caller already has an organization or the
                domain is taken
            ValidationError: If the name or domain is invalid
        """
        organization = await self.organization_service.create_organization(
            founder_id=request.claims.user_id,
            name=request.name,
            domain=request.domain,
            description=request.description,
        )
        founder = await self.user_service.get_user(request.claims.user_id)
        return CreateOrganizationResponse(
            organization=OrganizationView.from_organization(organization),
            token=self.token_service.issue(founder),
        )
