"""List certificates use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import CertificateView
from certis.domain.model import TokenClaims
from certis.domain.service import CertificateService, TenantContext


class ListCertificatesRequest(BaseModel):
    """List certificates request.

    ``all_organizations`` is honoured only for platform roles.
    """

    claims: TokenClaims
    all_organizations: bool = False


class ListCertificatesResponse(BaseModel):
    certificates: list[CertificateView]


class ListCertificatesUseCase(BaseUseCase):
    """Use case for listing certificates, scoped to the caller's tenant."""

    def __init__(
        self, certificate_service: CertificateService, tenant_context: TenantContext
    ) -> None:
        self.certificate_service = certificate_service
        self.tenant_context = tenant_context

    async def execute(self, request: ListCertificatesRequest) -> ListCertificatesResponse:
        """List certificates.

        Raises:
            ForbiddenError: If a cross-tenant listing is requested without a
                platform role
            PreconditionFailedError: If the caller has no organization
        """
        if request.all_organizations:
            certificates = await self.certificate_service.list_all(request.claims)
        else:
            organization_id = self.tenant_context.require_tenant(request.claims)
            certificates = await self.certificate_service.list_for_tenant(organization_id)
        return ListCertificatesResponse(
            certificates=[CertificateView.from_certificate(c) for c in certificates]
        )
