"""Image upload storage.

Files are written under ``settings.upload_dir`` with a random UUID name that
keeps the original extension, and referenced as ``<upload_url_prefix>/<name>``.
"""

import logging
import os
import uuid
from typing import Optional

from fastapi import UploadFile

from khayal.config import settings
from khayal.exceptions import UnsupportedMediaType, UploadTooLarge

log = logging.getLogger(__name__)

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/webp"}
CHUNK_SIZE = 64 * 1024


def ensure_upload_dir() -> str:
    os.makedirs(settings.upload_dir, exist_ok=True)
    return settings.upload_dir


def _has_file(upload: Optional[UploadFile]) -> bool:
    return upload is not None and bool(upload.filename)


async def save_image(upload: Optional[UploadFile]) -> Optional[str]:
    """
    Persist an uploaded image and return its public path.

    Returns None when no file was sent, or when the MIME type is not allowed
    and ``upload_reject_silently`` is enabled. Otherwise a disallowed type
    raises UnsupportedMediaType and an oversized file raises UploadTooLarge. A
    partially written file is removed whenever writing fails.
    """
    if not _has_file(upload):
        return None

    if upload.content_type not in ALLOWED_IMAGE_TYPES:
        log.warning(f"Rejected upload '{upload.filename}' with content type {upload.content_type}")
        if settings.upload_reject_silently:
            return None
        raise UnsupportedMediaType()

    extension = os.path.splitext(upload.filename)[1].lower()
    filename = f"{uuid.uuid4()}{extension}"
    destination = os.path.join(ensure_upload_dir(), filename)

    written = 0
    try:
        with open(destination, "wb") as out:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                written += len(chunk)
                if written > settings.max_upload_bytes:
                    raise UploadTooLarge(
                        f"File too large (limit {settings.max_upload_bytes // (1024 * 1024)}MB)"
                    )
                out.write(chunk)
    except BaseException:
        if os.path.exists(destination):
            os.remove(destination)
        raise

    log.debug(f"Stored upload '{upload.filename}' as {filename} ({written} bytes)")
    return f"{settings.upload_url_prefix}/{filename}"


def delete_image(image_path: Optional[str]) -> bool:
    """Remove a previously stored upload. Paths outside the upload directory are ignored."""
    prefix = settings.upload_url_prefix.rstrip("/") + "/"
    if not image_path or not image_path.startswith(prefix):
        return False

    upload_root = os.path.realpath(settings.upload_dir)
    target = os.path.realpath(os.path.join(upload_root, image_path[len(prefix):]))
    if os.path.dirname(target) != upload_root:
        log.warning(f"Refusing to delete upload outside {upload_root}: {image_path}")
        return False

    try:
        os.remove(target)
    except FileNotFoundError:
        return False
    except OSError as e:
        log.warning(f"Failed to delete upload {target}: {e}")
        return False
    log.debug(f"Deleted orphaned upload {target}")
    return True
