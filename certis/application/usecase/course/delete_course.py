"""Delete course use case."""

from uuid import UUID

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.domain.model import TokenClaims
from certis.domain.service import CourseService
from certis.domain.value import CourseId


class DeleteCourseRequest(BaseModel):
    claims: TokenClaims
    course_id: UUID


class DeleteCourseUseCase(BaseUseCase):
    """Use case for deleting a course no certificate was issued for."""

    def __init__(self, course_service: CourseService) -> None:
        self.course_service = course_service

    async def execute(self, request: DeleteCourseRequest) -> None:
        await self.course_service.delete(request.claims, CourseId(request.course_id))
