"""Create course use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import CourseView
from certis.domain.model import TokenClaims
from certis.domain.service import CourseService


class CreateCourseRequest(BaseModel):
    """Create course request. The owning organization comes from the claims."""

    claims: TokenClaims
    title: str
    slug: str
    description: str | None = None
    is_active: bool = True


class CreateCourseUseCase(BaseUseCase):
    """Use case for adding a course to the caller's organization."""

    def __init__(self, course_service: CourseService) -> None:
        self.course_service = course_service

    async def execute(self, request: CreateCourseRequest) -> CourseView:
        course = await self.course_service.create(
            request.claims,
            title=request.title,
            slug=request.slug,
            description=request.description,
            is_active=request.is_active,
        )
        return CourseView.from_course(course)
