"""Certificate use cases."""

from .issue_certificate import IssueCertificateRequest, IssueCertificateUseCase
from .issue_certificates_batch import (
    MAX_BATCH_SIZE,
    BatchCertificateItem,
    BatchItemError,
    IssueCertificatesBatchRequest,
    IssueCertificatesBatchResponse,
    IssueCertificatesBatchUseCase,
)
from .list_certificates import (
    ListCertificatesRequest,
    ListCertificatesResponse,
    ListCertificatesUseCase,
)
from .revoke_certificate import RevokeCertificateRequest, RevokeCertificateUseCase

__all__ = [
    "BatchCertificateItem",
    "BatchItemError",
    "IssueCertificateRequest",
    "IssueCertificateUseCase",
    "IssueCertificatesBatchRequest",
    "IssueCertificatesBatchResponse",
    "IssueCertificatesBatchUseCase",
    "ListCertificatesRequest",
    "ListCertificatesResponse",
    "ListCertificatesUseCase",
    "MAX_BATCH_SIZE",
    "RevokeCertificateRequest",
    "RevokeCertificateUseCase",
]
