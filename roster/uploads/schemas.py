"""Pydantic schemas for uploaded files."""
from pydantic import BaseModel, ConfigDict, Field


class ImageBlob(BaseModel):
    """Raw profile picture picked by the user."""

    filename: str = Field(..., description="Original file name")
    content_type: str = Field(..., description="MIME type, e.g. image/png")
    content: bytes = Field(default=b"", repr=False)

    model_config = ConfigDict(frozen=True)

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def is_image(self) -> bool:
        return self.content_type.lower().startswith("image/")
