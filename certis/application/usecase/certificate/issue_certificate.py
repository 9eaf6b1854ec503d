"""Issue certificate use case."""

from uuid import UUID

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import CertificateView
from certis.domain.model import TokenClaims
from certis.domain.service import CertificateService
from certis.domain.value import CourseId


class IssueCertificateRequest(BaseModel):
    """Issue certificate request. The issuing organization comes from the claims."""

    claims: TokenClaims
    recipient_name: str
    recipient_email: str
    title: str
    course_id: UUID | None = None


class IssueCertificateUseCase(BaseUseCase):
    """Use case for issuing a certificate."""

    def __init__(self, certificate_service: CertificateService) -> None:
        self.certificate_service = certificate_service

    async def execute(self, request: IssueCertificateRequest) -> CertificateView:
        certificate = await self.certificate_service.issue(
            request.claims,
            recipient_name=request.recipient_name,
            recipient_email=request.recipient_email,
            title=request.title,
            course_id=CourseId(request.course_id) if request.course_id else None,
        )
        return CertificateView.from_certificate(certificate)
