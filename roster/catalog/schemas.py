"""Pydantic schemas for courses."""
from pydantic import BaseModel, ConfigDict, Field


class Course(BaseModel):
    """A course of the fixed catalog."""

    id: int = Field(..., ge=1, description="Course ID")
    name: str = Field(..., min_length=1, description="Course name")

    model_config = ConfigDict(frozen=True)
