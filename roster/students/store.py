"""In-memory roster of students and the views derived from it."""

import uuid
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from roster.catalog.schemas import Course
from roster.logging_config import get_logger, log_with_context
from roster.seed import mock_students
from roster.students.schemas import Student, StudentAnalytics

logger = get_logger("store")


def compute_analytics(students: Sequence[Student]) -> StudentAnalytics:
    """Count students overall, by status, and by denormalized course name."""
    total = len(students)
    active = sum(1 for s in students if s.is_active)
    return StudentAnalytics(
        total_students=total,
        active_students=active,
        inactive_students=total - active,
        course_stats=dict(Counter(s.course_name for s in students)),
    )


class RosterStore:
    """
    Single source of truth for the student list.

    Holds the records in insertion order plus the selected course id used by
    the filtered view. Mutations never fail: an unknown id makes update and
    toggle a no-op. The store has one writer and no locking; callers must not
    share an instance across threads.
    """

    def __init__(self, students: Optional[Iterable[Student]] = None):
        self._students: List[Student] = list(students or [])
        self._selected_course_id: Optional[int] = None
        self._analytics: Optional[StudentAnalytics] = None

    @classmethod
    def with_mock_data(cls) -> "RosterStore":
        return cls(mock_students())

    # ---------- identity ----------

    @staticmethod
    def new_student_id() -> str:
        """Random 128-bit id for a new record."""
        return uuid.uuid4().hex

    # ---------- reads ----------

    @property
    def all_students(self) -> List[Student]:
        return list(self._students)

    @property
    def selected_course_id(self) -> Optional[int]:
        return self._selected_course_id

    @property
    def students(self) -> List[Student]:
        """Students of the selected course, or everyone when none is selected."""
        if self._selected_course_id is None:
            return self.all_students
        return self.students_by_course(self._selected_course_id)

    @property
    def analytics(self) -> StudentAnalytics:
        """Figures over the whole roster; the course selection is ignored."""
        if self._analytics is None:
            self._analytics = compute_analytics(self._students)
        return self._analytics.model_copy(deep=True)

    def get_student(self, student_id: str) -> Optional[Student]:
        index = self._index_of(student_id)
        return None if index is None else self._students[index]

    def students_by_course(self, course_id: int) -> List[Student]:
        return [s for s in self._students if s.course_id == course_id]

    def course_counts(self, courses: Sequence[Course]) -> Dict[int, int]:
        """Number of students per catalog course, keyed by course id."""
        counts = Counter(s.course_id for s in self._students)
        return {course.id: counts.get(course.id, 0) for course in courses}

    # ---------- mutations ----------

    def add_student(self, student: Student) -> None:
        """Append a fully formed record. No validation happens here."""
        self._students.append(student)
        self._invalidate()
        log_with_context(
            logger, "DEBUG", "Student added",
            context={"student_id": student.id, "course_id": student.course_id},
            extra_data={"total": len(self._students)},
        )

    def update_student(self, student: Student) -> None:
        """Replace the record with the same id, in place. Unknown id: no-op."""
        index = self._index_of(student.id)
        if index is None:
            log_with_context(
                logger, "DEBUG", "Update ignored, student not found",
                context={"student_id": student.id},
            )
            return
        self._students[index] = student
        self._invalidate()
        log_with_context(
            logger, "DEBUG", "Student updated",
            context={"student_id": student.id, "course_id": student.course_id},
        )

    def toggle_student_status(self, student_id: str) -> None:
        """Flip is_active on the matching record. Unknown id: no-op."""
        index = self._index_of(student_id)
        if index is None:
            log_with_context(
                logger, "DEBUG", "Toggle ignored, student not found",
                context={"student_id": student_id},
            )
            return
        current = self._students[index]
        self._students[index] = current.model_copy(update={"is_active": not current.is_active})
        self._invalidate()
        log_with_context(
            logger, "DEBUG", "Student status toggled",
            context={"student_id": student_id},
            extra_data={"is_active": not current.is_active},
        )

    def set_selected_course_id(self, course_id: Optional[int]) -> None:
        """Select a course for the filtered view; None shows everyone."""
        self._selected_course_id = course_id

    # ---------- helpers ----------

    def _index_of(self, student_id: str) -> Optional[int]:
        for index, student in enumerate(self._students):
            if student.id == student_id:
                return index
        return None

    def _invalidate(self) -> None:
        self._analytics = None
