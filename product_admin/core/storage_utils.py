# product_admin/core/storage_utils.py
import logging
import uuid
from typing import Iterable

from fastapi import HTTPException, status

from product_admin.core.config import get_settings
from product_admin.core.constants import (
    ALLOWED_IMAGE_CONTENT_TYPES,
    MAX_IMAGE_BYTES,
)
from product_admin.core.supabase_client import supabase_admin
from product_admin.schemas.product import ImageEntry, ImageFile

logger = logging.getLogger(__name__)


def upload_to_storage(path: str, file_bytes: bytes, content_type: str) -> str:
    """
    Upload raw bytes to Supabase Storage and return a public URL.

    If a file already exists at this path, it will be overwritten
    thanks to the 'upsert' option.

    Args:
        path: Full object path inside the bucket.
              Example: "Products/<uuid>.png"
        file_bytes: File content in bytes.
        content_type: MIME type stored alongside the object.

    Raises:
        Any exception raised by Supabase client if upload fails.
    """
    bucket = supabase_admin().storage.from_(get_settings().STORAGE_BUCKET)
    bucket.upload(path, file_bytes, {"upsert": "true", "content-type": content_type})
    return bucket.get_public_url(path)


def generate_filename(ext: str) -> str:
    """
    Generate a random filename using UUID4.

    Args:
        ext: File extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "<uuid4>.png"
    """
    return f"{uuid.uuid4()}.{ext}"


def validate_and_get_ext(image: ImageFile) -> str:
    if image.content_type not in ALLOWED_IMAGE_CONTENT_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Unsupported image type. Allowed: JPEG, PNG, WEBP.",
        )

    if len(image.content) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Image too large (max 5MB).",
        )

    return ALLOWED_IMAGE_CONTENT_TYPES[image.content_type]


def upload_multiple_images(images: Iterable[ImageEntry], folder: str) -> list[str]:
    """
    Upload every local image under `folder` and return public URLs.

    - Order of the returned list matches `images`.
    - Entries that are already URLs (previously stored images of a
      record being edited) are returned unchanged.
    - Nothing is rolled back if a later upload fails.
    """
    urls: list[str] = []
    for entry in images:
        if isinstance(entry, str):
            urls.append(entry)
            continue

        ext = validate_and_get_ext(entry)
        path = f"{folder}/{generate_filename(ext)}"
        logger.info("Uploading %s to %s", entry.filename, path)
        urls.append(upload_to_storage(path, entry.content, entry.content_type))

    return urls
