"""Revoke certificate use case."""

from uuid import UUID

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import CertificateView
from certis.domain.model import TokenClaims
from certis.domain.service import CertificateService
from certis.domain.value import CertificateId
from certis.util.retry import retry_on_conflict


class RevokeCertificateRequest(BaseModel):
    claims: TokenClaims
    certificate_id: UUID


class RevokeCertificateUseCase(BaseUseCase):
    """Use case for revoking a certificate of the caller's organization."""

    def __init__(self, certificate_service: CertificateService) -> None:
        self.certificate_service = certificate_service

    async def execute(self, request: RevokeCertificateRequest) -> CertificateView:
        certificate = await retry_on_conflict(
            lambda: self.certificate_service.revoke(
                request.claims, CertificateId(request.certificate_id)
            ),
            name="revoke_certificate",
        )
        return CertificateView.from_certificate(certificate)
