"""Course routes."""

from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from certis.application.usecase.course import (
    CreateCourseRequest,
    CreateCourseUseCase,
    DeleteCourseRequest,
    DeleteCourseUseCase,
    ListCoursesRequest,
    ListCoursesResponse,
    ListCoursesUseCase,
)
from certis.application.usecase.views import CourseView
from certis.domain.model.course import SLUG_PATTERN
from certis.domain.service import TokenService
from certis.interface.api.dependencies import bearer_token

router = APIRouter(prefix="/courses", tags=["courses"], route_class=DishkaRoute)


class CreateCourseAPIRequest(BaseModel):
    """API request for adding a course to the caller's organization."""

    title: str = Field(min_length=3, max_length=100)
    slug: str = Field(min_length=3, max_length=100, pattern=SLUG_PATTERN)
    description: str | None = Field(default=None, max_length=2048)
    is_active: bool = True


@router.post("", response_model=CourseView, status_code=status.HTTP_201_CREATED)
async def create_course(
    request: CreateCourseAPIRequest,
    token_service: FromDishka[TokenService],
    create_course_use_case: FromDishka[CreateCourseUseCase],
    token: str = Depends(bearer_token),
) -> CourseView:
    """Add a course to the caller's organization. OWNER or ADMIN only."""
    claims = token_service.verify(token)
    return await create_course_use_case.execute(
        CreateCourseRequest(
            claims=claims,
            title=request.title,
            slug=request.slug,
            description=request.description,
            is_active=request.is_active,
        )
    )


@router.get("", response_model=ListCoursesResponse)
async def list_courses(
    token_service: FromDishka[TokenService],
    list_courses_use_case: FromDishka[ListCoursesUseCase],
    token: str = Depends(bearer_token),
) -> ListCoursesResponse:
    """List the courses of the caller's organization."""
    claims = token_service.verify(token)
    return await list_courses_use_case.execute(ListCoursesRequest(claims=claims))


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_course(
    course_id: UUID,
    token_service: FromDishka[TokenService],
    delete_course_use_case: FromDishka[DeleteCourseUseCase],
    token: str = Depends(bearer_token),
) -> None:
    """Delete a course. Refused while certificates reference it."""
    claims = token_service.verify(token)
    await delete_course_use_case.execute(
        DeleteCourseRequest(claims=claims, course_id=course_id)
    )
