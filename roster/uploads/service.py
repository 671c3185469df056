"""Profile picture upload service."""
import asyncio
import uuid

from roster.logging_config import get_logger, log_with_context
from roster.uploads.schemas import ImageBlob

logger = get_logger("uploads")


class ImageUploadService:
    """
    Stores nothing: an upload resolves, after a simulated delay, to an opaque
    handle that the rest of the application treats as a URL.
    """

    def __init__(self, delay: float = 1.0):
        self.delay = delay

    async def upload_profile_image(self, blob: ImageBlob) -> str:
        if self.delay:
            await asyncio.sleep(self.delay)
        handle = f"blob:{uuid.uuid4()}"
        log_with_context(
            logger, "INFO", "Profile picture uploaded",
            context={"filename": blob.filename},
            extra_data={"size": blob.size, "content_type": blob.content_type},
        )
        return handle
