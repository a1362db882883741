"""Helpers shared by the user routes."""

from typing import Optional

from fastapi import UploadFile
from structlog import get_logger

from vidtube_auth.core.config.settings import settings
from vidtube_auth.core.exceptions import ValidationError
from vidtube_auth.domain.value_objects.assets import AssetUpload

logger = get_logger(__name__)


async def to_asset_upload(
    upload: Optional[UploadFile], max_bytes: Optional[int] = None
) -> Optional[AssetUpload]:
    """Read an uploaded file into an `AssetUpload`; None when nothing was sent.

    At most ``max_bytes`` (``MEDIA_MAX_UPLOAD_BYTES`` by default) are read.

    Raises:
        ValidationError: If the file is larger than the limit.
    """
    if upload is None:
        return None
    limit = max_bytes or settings.MEDIA_MAX_UPLOAD_BYTES
    if upload.size is not None and upload.size > limit:
        raise _too_large(upload, upload.size, limit)
    content = await upload.read(limit + 1)
    if len(content) > limit:
        raise _too_large(upload, len(content), limit)
    if not content:
        return None
    return AssetUpload(
        filename=upload.filename or "upload",
        content=content,
        content_type=upload.content_type or "application/octet-stream",
    )


def _too_large(upload: UploadFile, size: int, limit: int) -> ValidationError:
    logger.warning("Rejected oversized upload", filename=upload.filename, size=size, limit=limit)
    return ValidationError(f"Uploaded file exceeds the {limit} byte limit")
