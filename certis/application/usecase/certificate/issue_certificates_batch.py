"""Batch certificate issue use case."""

from uuid import UUID

import logfire
from pydantic import BaseModel, Field

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import CertificateView
from certis.domain.error import DomainError
from certis.domain.model import TokenClaims
from certis.domain.repository import TransactionManager
from certis.domain.service import CertificateService, TenantContext
from certis.domain.value import CourseId

MAX_BATCH_SIZE = 100


class BatchCertificateItem(BaseModel):
    recipient_name: str
    recipient_email: str
    title: str
    course_id: UUID | None = None


class IssueCertificatesBatchRequest(BaseModel):
    """Up to ``MAX_BATCH_SIZE`` certificates issued by one caller."""

    claims: TokenClaims
    items: list[BatchCertificateItem] = Field(min_length=1, max_length=MAX_BATCH_SIZE)


class BatchItemError(BaseModel):
    index: int
    recipient_email: str
    error: str


class IssueCertificatesBatchResponse(BaseModel):
    total_requested: int
    successfully_created: int
    failed: int
    certificates: list[CertificateView]
    errors: list[BatchItemError]


class IssueCertificatesBatchUseCase(BaseUseCase):
    """Use case for issuing many certificates in one request.

    Each item is issued in its own atomic block: a rejected item is reported
    in ``errors`` and does not undo the others.
    """

    def __init__(
        self,
        certificate_service: CertificateService,
        tenant_context: TenantContext,
        transaction_manager: TransactionManager,
    ) -> None:
        self.certificate_service = certificate_service
        self.tenant_context = tenant_context
        self.transaction_manager = transaction_manager

    async def execute(
        self, request: IssueCertificatesBatchRequest
    ) -> IssueCertificatesBatchResponse:
        """Issue every item that passes validation.

        Raises:
            PreconditionFailedError: If the caller has no organization
        """
        organization_id = self.tenant_context.require_tenant(request.claims)
        certificates: list[CertificateView] = []
        errors: list[BatchItemError] = []

        with logfire.span(
            "issue_certificates_batch",
            organization_id=str(organization_id),
            size=len(request.items),
        ):
            for index, item in enumerate(request.items):
                course_id = CourseId(item.course_id) if item.course_id else None
                try:
                    async with self.transaction_manager.atomic():
                        certificate = await self.certificate_service.issue(
                            request.claims,
                            recipient_name=item.recipient_name,
                            recipient_email=item.recipient_email,
                            title=item.title,
                            course_id=course_id,
                        )
                except DomainError as e:
                    errors.append(
                        BatchItemError(
                            index=index,
                            recipient_email=item.recipient_email,
                            error=str(e),
                        )
                    )
                    continue
                certificates.append(CertificateView.from_certificate(certificate))

            logfire.info(
                "Certificate batch issued",
                organization_id=str(organization_id),
                created=len(certificates),
                failed=len(errors),
            )

        return IssueCertificatesBatchResponse(
            total_requested=len(request.items),
            successfully_created=len(certificates),
            failed=len(errors),
            certificates=certificates,
            errors=errors,
        )
