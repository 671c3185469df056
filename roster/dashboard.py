"""
Dashboard controller.

Composition root driven by the presentation layer: it owns the roster store,
the course catalog and upload services, the loaded course list and the
student currently being edited.
"""

from typing import Dict, List, Optional

from roster.catalog.schemas import Course
from roster.catalog.service import CourseCatalogService
from roster.logging_config import get_logger, log_with_context, setup_logging
from roster.settings import Settings, settings as default_settings
from roster.students.form import StudentFormAssembler
from roster.students.schemas import FormResult, Student, StudentAnalytics, StudentFormData
from roster.students.store import RosterStore
from roster.uploads.service import ImageUploadService

logger = get_logger("dashboard")


class RosterDashboard:
    """User actions of the student dashboard, mapped onto the roster store."""

    def __init__(
        self,
        config: Optional[Settings] = None,
        store: Optional[RosterStore] = None,
        catalog: Optional[CourseCatalogService] = None,
        uploads: Optional[ImageUploadService] = None,
    ):
        self.config = config or default_settings
        if store is None:
            store = RosterStore.with_mock_data() if self.config.seed_mock_data else RosterStore()
        self.store = store
        self.catalog = catalog or CourseCatalogService(delay=self.config.catalog_delay)
        self.uploads = uploads or ImageUploadService(delay=self.config.upload_delay)
        self.courses: List[Course] = []
        self.editing: Optional[Student] = None

    # ---------- courses ----------

    async def load_courses(self) -> List[Course]:
        """Fetch the catalog; on failure log it and keep an empty catalog."""
        try:
            self.courses = await self.catalog.list_courses()
        except Exception:
            log_with_context(logger, "ERROR", "Failed to load courses", exc_info=True)
            self.courses = []
        return self.courses

    def course_counts(self) -> Dict[int, int]:
        return self.store.course_counts(self.courses)

    def select_course(self, course_id: Optional[int]) -> List[Student]:
        self.store.set_selected_course_id(course_id)
        return self.store.students

    # ---------- editing ----------

    def start_edit(self, student_id: str) -> Optional[StudentFormData]:
        """Enter edit mode for a student; returns the pre-filled form."""
        student = self.store.get_student(student_id)
        if student is None:
            log_with_context(
                logger, "WARNING", "Cannot edit unknown student",
                context={"student_id": student_id},
            )
            return None
        self.editing = student
        return StudentFormData.from_student(student)

    def cancel_edit(self) -> None:
        self.editing = None

    def form_assembler(self) -> StudentFormAssembler:
        return StudentFormAssembler(
            self.courses,
            self.store,
            self.uploads,
            max_image_bytes=self.config.max_image_bytes,
        )

    async def submit_form(self, form: StudentFormData) -> FormResult:
        """Add a student, or save the edit in progress."""
        result = await self.form_assembler().submit(form, editing=self.editing)
        if result.ok and self.editing is not None:
            self.editing = None
        return result

    # ---------- status & analytics ----------

    def toggle_status(self, student_id: str) -> None:
        self.store.toggle_student_status(student_id)

    def summary(self) -> StudentAnalytics:
        return self.store.analytics


async def create_dashboard(config: Optional[Settings] = None) -> RosterDashboard:
    """Configure logging, build the dashboard and load the course catalog."""
    config = config or default_settings
    setup_logging(config.log_level)
    dashboard = RosterDashboard(config)
    await dashboard.load_courses()
    log_with_context(
        logger, "INFO", "Dashboard ready",
        extra_data={
            "students": len(dashboard.store.all_students),
            "courses": len(dashboard.courses),
        },
    )
    return dashboard
