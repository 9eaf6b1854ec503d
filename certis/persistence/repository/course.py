"""PostgreSQL implementation of Course repository."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from certis.domain.model import Course
from certis.domain.repository import CourseRepository
from certis.domain.value import CourseId, OrganizationId
from certis.persistence.mappers import course_to_dict, row_to_course
from certis.persistence.repository.versioning import delete_versioned, write_versioned
from certis.persistence.tables import courses_table


class PostgresCourseRepository(CourseRepository):
    """PostgreSQL implementation of CourseRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, course_id: CourseId) -> Optional[Course]:
        stmt = select(courses_table).where(courses_table.c.id == course_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_course(dict(row)) if row else None

    async def find_by_organization(self, organization_id: OrganizationId) -> list[Course]:
        stmt = (
            select(courses_table)
            .where(courses_table.c.organization_id == organization_id)
            .order_by(courses_table.c.title)
        )
        result = await self.session.execute(stmt)
        return [row_to_course(dict(row)) for row in result.mappings().all()]

    async def save(self, course: Course) -> Course:
        version = await write_versioned(
            self.session,
            courses_table,
            course_to_dict(course),
            course.version,
            resource="Course",
            conflict_message=f"Course slug already taken: {course.slug}",
        )
        return course.model_copy(update={"version": version})

    async def delete(self, course: Course) -> None:
        await delete_versioned(
            self.session,
            courses_table,
            course.id,
            course.version,
            resource="Course",
            conflict_message="Course still has certificates",
        )
