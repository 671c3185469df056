"""Pydantic schemas for students."""

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from roster.uploads.schemas import ImageBlob


class Student(BaseModel):
    """
    A student record as held by the roster.

    Records are immutable: the store replaces a record instead of editing it.
    `course_name` is a snapshot of the course name taken when the record was
    written and is never refreshed from the catalog.
    """

    id: str = Field(..., description="Unique, stable identity")
    student_id: str = Field(..., description="Human-facing student code")
    name: str
    email: str
    phone: str
    course_id: int = Field(..., description="ID of the enrolled course")
    course_name: str = Field(..., description="Course name at assignment time")
    profile_image: str = Field(..., description="Opaque image handle")
    is_active: bool = Field(default=True, description="Active status")
    enrollment_date: str = Field(..., description="ISO-8601 creation time")

    model_config = ConfigDict(frozen=True)


class StudentFormData(BaseModel):
    """Raw, unvalidated input collected by the student form."""

    student_id: str = ""
    name: str = ""
    email: str = ""
    phone: str = ""
    course_id: str = Field(default="", description="Selected course ID, empty if none")
    profile_image: Optional[ImageBlob] = None
    is_active: bool = True

    @classmethod
    def from_student(cls, student: Student) -> "StudentFormData":
        """Pre-fill the form from an existing record (edit mode)."""
        return cls(
            student_id=student.student_id,
            name=student.name,
            email=student.email,
            phone=student.phone,
            course_id=str(student.course_id),
            is_active=student.is_active,
        )


class StudentAnalytics(BaseModel):
    """Aggregate enrollment figures over the whole roster."""

    total_students: int = 0
    active_students: int = 0
    inactive_students: int = 0
    course_stats: Dict[str, int] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def active_percentage(self) -> float:
        if not self.total_students:
            return 0.0
        return self.active_students / self.total_students * 100

    @computed_field
    @property
    def inactive_percentage(self) -> float:
        if not self.total_students:
            return 0.0
        return self.inactive_students / self.total_students * 100

    @computed_field
    @property
    def max_course_enrollment(self) -> int:
        return max([1, *self.course_stats.values()])


class FormResult(BaseModel):
    """Outcome of a form submission: either field errors or the stored record."""

    errors: Dict[str, str] = Field(default_factory=dict)
    student: Optional[Student] = None

    @property
    def ok(self) -> bool:
        return not self.errors and self.student is not None
