"""Validation of the student form and assembly of roster records."""

import re
from datetime import datetime, timezone
from typing import Dict, Optional, Sequence

from roster.catalog.schemas import Course
from roster.catalog.service import course_name_for
from roster.logging_config import get_logger, log_with_context
from roster.students.schemas import FormResult, Student, StudentFormData
from roster.students.store import RosterStore
from roster.uploads.schemas import ImageBlob
from roster.uploads.service import ImageUploadService

logger = get_logger("form")

EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
PHONE_RE = re.compile(r"[+]?[1-9][\d\s\-()]{8,}")
WHITESPACE_RE = re.compile(r"\s")
COURSE_ID_RE = re.compile(r"[0-9]+")


def utc_now_iso() -> str:
    """Current UTC time as an ISO-8601 string with millisecond precision."""
    return (
        datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )


def parse_course_id(value: str) -> Optional[int]:
    """ASCII digits only; anything else means no course was chosen."""
    value = value.strip()
    if not COURSE_ID_RE.fullmatch(value):
        return None
    return int(value)


class StudentFormAssembler:
    """
    Turns raw form input into student records and hands them to the store.

    Validation never raises: problems come back as a mapping of field name
    to message, and the store is not touched.
    """

    def __init__(
        self,
        courses: Sequence[Course],
        store: RosterStore,
        uploads: ImageUploadService,
        max_image_bytes: int = 5 * 1024 * 1024,
    ):
        self.courses = list(courses)
        self.store = store
        self.uploads = uploads
        self.max_image_bytes = max_image_bytes

    # ---------- validation ----------

    def validate_image(self, blob: ImageBlob) -> Optional[str]:
        """Check a picked profile picture; returns an error message or None."""
        if blob.size > self.max_image_bytes:
            limit_mb = self.max_image_bytes // (1024 * 1024)
            return f"File size must be less than {limit_mb}MB"
        if not blob.is_image:
            return "Please select an image file"
        return None

    def validate(self, form: StudentFormData, is_edit: bool = False) -> Dict[str, str]:
        errors: Dict[str, str] = {}

        if not form.student_id.strip():
            errors["student_id"] = "Student ID is required"

        if not form.name.strip():
            errors["name"] = "Name is required"

        if not form.email.strip():
            errors["email"] = "Email is required"
        elif not EMAIL_RE.fullmatch(form.email):
            errors["email"] = "Please enter a valid email address"

        phone = WHITESPACE_RE.sub("", form.phone)
        if not phone:
            errors["phone"] = "Phone number is required"
        elif not PHONE_RE.fullmatch(phone):
            errors["phone"] = "Please enter a valid phone number"

        if parse_course_id(form.course_id) is None:
            errors["course_id"] = "Please select a course"

        if form.profile_image is None:
            if not is_edit:
                errors["profile_image"] = "Profile picture is required"
        else:
            image_error = self.validate_image(form.profile_image)
            if image_error:
                errors["profile_image"] = image_error

        return errors

    # ---------- record assembly ----------

    def build_new_student(
        self, form: StudentFormData, image_handle: str, now: Optional[str] = None
    ) -> Student:
        course_id = parse_course_id(form.course_id)
        return Student(
            id=self.store.new_student_id(),
            student_id=form.student_id.strip(),
            name=form.name.strip(),
            email=form.email.strip(),
            phone=form.phone.strip(),
            course_id=course_id,
            course_name=course_name_for(self.courses, course_id),
            profile_image=image_handle,
            is_active=form.is_active,
            enrollment_date=now or utc_now_iso(),
        )

    def build_updated_student(
        self, original: Student, form: StudentFormData, image_handle: str = ""
    ) -> Student:
        """Edited copy of `original`; id and enrollment date are carried over."""
        course_id = parse_course_id(form.course_id)
        return original.model_copy(
            update={
                "student_id": form.student_id.strip(),
                "name": form.name.strip(),
                "email": form.email.strip(),
                "phone": form.phone.strip(),
                "course_id": course_id,
                "course_name": course_name_for(self.courses, course_id),
                "profile_image": image_handle or original.profile_image,
                "is_active": form.is_active,
            }
        )

    # ---------- submission ----------

    async def submit(
        self, form: StudentFormData, editing: Optional[Student] = None
    ) -> FormResult:
        """
        Validate, upload the picture if one was picked, then add or update
        the record. Upload failures are logged and re-raised.
        """
        errors = self.validate(form, is_edit=editing is not None)
        if errors:
            log_with_context(
                logger, "INFO", "Student form rejected",
                context={"student_id": editing.id if editing else None},
                extra_data={"fields": sorted(errors)},
            )
            return FormResult(errors=errors)

        image_handle = ""
        if form.profile_image is not None:
            try:
                image_handle = await self.uploads.upload_profile_image(form.profile_image)
            except Exception:
                log_with_context(
                    logger, "ERROR", "Profile picture upload failed",
                    context={"filename": form.profile_image.filename},
                    exc_info=True,
                )
                raise

        if editing is None:
            student = self.build_new_student(form, image_handle)
            self.store.add_student(student)
            message = "Student created"
        else:
            student = self.build_updated_student(editing, form, image_handle)
            self.store.update_student(student)
            message = "Student updated"

        log_with_context(
            logger, "INFO", message,
            context={"student_id": student.id, "course_id": student.course_id},
        )
        return FormResult(student=student)
