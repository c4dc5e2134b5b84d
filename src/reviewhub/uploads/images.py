"""Review image uploads: limits and storage."""

import os

from protean.exceptions import ValidationError

from reviewhub.uploads import get_blob_store
from reviewhub.uploads.port import StoredBlob
from reviewhub.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 10 * 1024 * 1024


def max_upload_bytes() -> int:
    return int(os.environ.get("MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES))


def validate_image_upload(content_type: str | None, size: int) -> None:
    """Only images, and nothing larger than the configured limit."""
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError({"file": ["Only image files are allowed"]})
    if size == 0:
        raise ValidationError({"file": ["No file uploaded"]})
    limit = max_upload_bytes()
    if size > limit:
        raise ValidationError({"file": [f"File is too large. Limit is {limit // (1024 * 1024)}MB"]})


def store_image(data: bytes, content_type: str | None, filename: str | None = None, uploaded_by: str | None = None) -> StoredBlob:
    validate_image_upload(content_type, len(data))
    blob = get_blob_store().put(data, content_type, filename=filename)
    logger.info("Image uploaded", key=blob.key, size=blob.size, content_type=content_type, uploaded_by=uploaded_by)
    return blob
