"""Organization use cases."""

from .create_organization import (
    CreateOrganizationRequest,
    CreateOrganizationResponse,
    CreateOrganizationUseCase,
)
from .get_my_organization import GetMyOrganizationRequest, GetMyOrganizationUseCase

__all__ = [
    "CreateOrganizationRequest",
    "CreateOrganizationResponse",
    "CreateOrganizationUseCase",
    "GetMyOrganizationRequest",
    "GetMyOrganizationUseCase",
]
