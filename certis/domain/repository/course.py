"""Course repository interface."""

from abc import ABC, abstractmethod

from certis.domain.model.course import Course
from certis.domain.value import CourseId, OrganizationId


class CourseRepository(ABC):
    """Repository for Course entity."""

    @abstractmethod
    async def find_by_id(self, course_id: CourseId) -> Course | None:
        """Find a course by ID, regardless of tenant.

        Callers must check the course's organization before acting on it.
        """
        pass

    @abstractmethod
    async def find_by_organization(self, organization_id: OrganizationId) -> list[Course]:
        """Find the courses of one organization, ordered by title."""
        pass

    @abstractmethod
    async def save(self, course: Course) -> Course:
        """Save a course (create or update) with a version check.

        Raises:
            ConflictError: If the slug is already used in the organization
            ConcurrencyConflictError: If the stored version changed since it was read
        """
        pass

    @abstractmethod
    async def delete(self, course: Course) -> None:
        """Delete a course read at ``course.version``.

        Raises:
            ConflictError: If certificates still reference the course
            ConcurrencyConflictError: If the course changed or is already gone
        """
        pass
