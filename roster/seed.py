"""Reference students the roster starts with."""
from typing import List

from roster.students.schemas import Student

MOCK_STUDENTS = [
    {
        "id": "1",
        "student_id": "STU001",
        "name": "Sarah Johnson",
        "email": "sarah.johnson@email.com",
        "phone": "+1 (555) 123-4567",
        "course_id": 4,
        "course_name": "React In Depth",
        "profile_image": "https://images.pexels.com/photos/774909/pexels-photo-774909.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&fit=crop",
        "is_active": True,
        "enrollment_date": "2024-01-15",
    },
    {
        "id": "2",
        "student_id": "STU002",
        "name": "Michael Chen",
        "email": "michael.chen@email.com",
        "phone": "+1 (555) 234-5678",
        "course_id": 3,
        "course_name": "JavaScript Pro",
        "profile_image": "https://images.pexels.com/photos/1239291/pexels-photo-1239291.jpeg?auto=compress&cs=tinysrgb&w=150&h=150&fit=crop",
        "is_active": True,
        "enrollment_date": "2024-02-01",
    },
]


def mock_students() -> List[Student]:
    """Fresh copies of the reference students."""
    return [Student.model_validate(row) for row in MOCK_STUDENTS]
