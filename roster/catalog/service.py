"""Course catalog provider."""
import asyncio
from typing import List, Optional, Sequence

from roster.catalog.schemas import Course
from roster.logging_config import get_logger, log_with_context

logger = get_logger("catalog")

COURSES = (
    (1, "HTML Basics"),
    (2, "CSS Mastery"),
    (3, "JavaScript Pro"),
    (4, "React In Depth"),
)


class CourseCatalogService:
    """Serves the fixed course catalog behind a simulated network delay."""

    def __init__(self, delay: float = 0.8):
        self.delay = delay

    async def list_courses(self) -> List[Course]:
        """Return the catalog in its fixed order, after `delay` seconds."""
        if self.delay:
            await asyncio.sleep(self.delay)
        courses = [Course(id=course_id, name=name) for course_id, name in COURSES]
        log_with_context(
            logger, "DEBUG", "Course catalog loaded",
            extra_data={"count": len(courses), "delay_s": self.delay},
        )
        return courses


def find_course(courses: Sequence[Course], course_id: int) -> Optional[Course]:
    """Return the course with the given id, or None."""
    for course in courses:
        if course.id == course_id:
            return course
    return None


def course_name_for(courses: Sequence[Course], course_id: int) -> str:
    """
    Resolve the name to snapshot onto a student record.
    Falls back to an empty string when the catalog does not (yet) hold the id.
    """
    course = find_course(courses, course_id)
    return course.name if course else ""
