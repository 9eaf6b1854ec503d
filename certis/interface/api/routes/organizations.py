"""Organization routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from certis.application.usecase.organization import (
    CreateOrganizationRequest,
    CreateOrganizationResponse,
    CreateOrganizationUseCase,
    GetMyOrganizationRequest,
    GetMyOrganizationUseCase,
)
from certis.application.usecase.views import OrganizationView
from certis.domain.service import TokenService
from certis.interface.api.dependencies import bearer_token

router = APIRouter(
    prefix="/organizations", tags=["organizations"], route_class=DishkaRoute
)


class CreateOrganizationAPIRequest(BaseModel):
    """API request for creating an organization."""

    name: str = Field(min_length=3, max_length=50)
    domain: str
    description: str | None = Field(default=None, max_length=1024)


@router.post(
    "",
    response_model=CreateOrganizationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_organization(
    request: CreateOrganizationAPIRequest,
    token_service: FromDishka[TokenService],
    create_organization_use_case: FromDishka[CreateOrganizationUseCase],
    token: str = Depends(bearer_token),
) -> CreateOrganizationResponse:
    """Create an organization owned by the caller.

    The response carries a new token: the caller's old one still says they
    have no organization.
    """
    claims = token_service.verify(token)
    return await create_organization_use_case.execute(
        CreateOrganizationRequest(
            claims=claims,
            name=request.name,
            domain=request.domain,
            description=request.description,
        )
    )


@router.get("/mine", response_model=OrganizationView)
async def get_my_organization(
    token_service: FromDishka[TokenService],
    get_my_organization_use_case: FromDishka[GetMyOrganizationUseCase],
    token: str = Depends(bearer_token),
) -> OrganizationView:
    """Return the organization named in the caller's token."""
    claims = token_service.verify(token)
    return await get_my_organization_use_case.execute(
        GetMyOrganizationRequest(claims=claims)
    )
