"""Certificate routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from certis.application.usecase.certificate import (
    MAX_BATCH_SIZE,
    BatchCertificateItem,
    IssueCertificateRequest,
    IssueCertificatesBatchRequest,
    IssueCertificatesBatchResponse,
    IssueCertificatesBatchUseCase,
    IssueCertificateUseCase,
    ListCertificatesRequest,
    ListCertificatesResponse,
    ListCertificatesUseCase,
    RevokeCertificateRequest,
    RevokeCertificateUseCase,
)
from certis.application.usecase.views import CertificateView
from certis.domain.service import TokenService
from certis.interface.api.dependencies import bearer_token

router = APIRouter(prefix="/certificates", tags=["certificates"], route_class=DishkaRoute)


class IssueCertificateAPIRequest(BaseModel):
    """API request for issuing a certificate."""

    recipient_name: str = Field(min_length=1, max_length=255)
    recipient_email: EmailStr
    title: str = Field(min_length=1, max_length=255)
    course_id: UUID | None = None


class IssueCertificatesBatchAPIRequest(BaseModel):
    """API request for issuing several certificates at once."""

    certificates: list[IssueCertificateAPIRequest] = Field(
        min_length=1, max_length=MAX_BATCH_SIZE
    )


@router.post("", response_model=CertificateView, status_code=status.HTTP_201_CREATED)
async def issue_certificate(
    request: IssueCertificateAPIRequest,
    token_service: FromDishka[TokenService],
    issue_certificate_use_case: FromDishka[IssueCertificateUseCase],
    token: str = Depends(bearer_token),
) -> CertificateView:
    """Issue a certificate in the caller's organization."""
    claims = token_service.verify(token)
    return await issue_certificate_use_case.execute(
        IssueCertificateRequest(
            claims=claims,
            recipient_name=request.recipient_name,
            recipient_email=request.recipient_email,
            title=request.title,
            course_id=request.course_id,
        )
    )


@router.post(
    "/batch",
    response_model=IssueCertificatesBatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def issue_certificates_batch(
    request: IssueCertificatesBatchAPIRequest,
    token_service: FromDishka[TokenService],
    batch_use_case: FromDishka[IssueCertificatesBatchUseCase],
    token: str = Depends(bearer_token),
) -> IssueCertificatesBatchResponse:
    """Issue up to 100 certificates; each rejected item is reported, not raised."""
    claims = token_service.verify(token)
    return await batch_use_case.execute(
        IssueCertificatesBatchRequest(
            claims=claims,
            items=[
                BatchCertificateItem(**item.model_dump()) for item in request.certificates
            ],
        )
    )


@router.post("/{certificate_id}/revoke", response_model=CertificateView)
async def revoke_certificate(
    certificate_id: UUID,
    token_service: FromDishka[TokenService],
    revoke_certificate_use_case: FromDishka[RevokeCertificateUseCase],
    token: str = Depends(bearer_token),
) -> CertificateView:
    """Revoke a certificate of the caller's organization."""
    claims = token_service.verify(token)
    return await revoke_certificate_use_case.execute(
        RevokeCertificateRequest(claims=claims, certificate_id=certificate_id)
    )


@router.get("", response_model=ListCertificatesResponse)
async def list_certificates(
    token_service: FromDishka[TokenService],
    list_certificates_use_case: FromDishka[ListCertificatesUseCase],
    all_organizations: bool = False,
    token: str = Depends(bearer_token),
) -> ListCertificatesResponse:
    """List certificates of the caller's organization.

    Platform staff may pass ``all_organizations=true`` to list every tenant.
    """
    claims = token_service.verify(token)
    return await list_certificates_use_case.execute(
        ListCertificatesRequest(claims=claims, all_organizations=all_organizations)
    )
