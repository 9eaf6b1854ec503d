"""Course use cases."""

from .create_course import CreateCourseRequest, CreateCourseUseCase
from .delete_course import DeleteCourseRequest, DeleteCourseUseCase
from .list_courses import ListCoursesRequest, ListCoursesResponse, ListCoursesUseCase

__all__ = [
    "CreateCourseRequest",
    "CreateCourseUseCase",
    "DeleteCourseRequest",
    "DeleteCourseUseCase",
    "ListCoursesRequest",
    "ListCoursesResponse",
    "ListCoursesUseCase",
]
