"""List courses use case."""

from pydantic import BaseModel

from certis.application.usecase.base import BaseUseCase
from certis.application.usecase.views import CourseView
from certis.domain.model import TokenClaims
from certis.domain.service import CourseService, TenantContext


class ListCoursesRequest(BaseModel):
    claims: TokenClaims


class ListCoursesResponse(BaseModel):
    courses: list[CourseView]


class ListCoursesUseCase(BaseUseCase):
    """Use case for listing the courses of the caller's organization."""

    def __init__(
        self, course_service: CourseService, tenant_context: TenantContext
    ) -> None:
        self.course_service = course_service
        self.tenant_context = tenant_context

    async def execute(self, request: ListCoursesRequest) -> ListCoursesResponse:
        """List courses.

        Raises:
            PreconditionFailedError: If the caller has no organization
        """
        organization_id = self.tenant_context.require_tenant(request.claims)
        courses = await self.course_service.list_for_tenant(organization_id)
        return ListCoursesResponse(courses=[CourseView.from_course(c) for c in courses])
