"""In-memory course repository for testing."""

from typing import Optional

from certis.domain.error import ConflictError
from certis.domain.model import Course
from certis.domain.repository import CourseRepository
from certis.domain.value import CourseId, OrganizationId

from .database import InMemoryDatabase


class InMemoryCourseRepository(CourseRepository):
    """In-memory implementation of CourseRepository for testing."""

    def __init__(self, database: InMemoryDatabase) -> None:
        self.database = database

    async def find_by_id(self, course_id: CourseId) -> Optional[Course]:
        return self.database.courses.get(course_id)

    async def find_by_organization(self, organization_id: OrganizationId) -> list[Course]:
        return sorted(
            (
                c
                for c in self.database.courses.values()
                if c.organization_id == organization_id
            ),
            key=lambda c: c.title,
        )

    async def save(self, course: Course) -> Course:
        for other in self.database.courses.values():
            if (
                other.id != course.id
                and other.organization_id == course.organization_id
                and other.slug == course.slug
            ):
                raise ConflictError(f"Course slug already taken: {course.slug}")
        return self.database.write_versioned(self.database.courses, course, "Course")

    async def delete(self, course: Course) -> None:
        # Mirrors the RESTRICT foreign key on certificates.course_id
        if any(c.course_id == course.id for c in self.database.certificates.values()):
            raise ConflictError("Course still has certificates")
        self.database.delete_versioned(self.database.courses, course, "Course")
