"""Coupon image uploads to the configured media storage."""

import logging
import os
import uuid

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.files.storage import default_storage

from .exceptions import (
    ImageTooLargeError,
    InvalidImageError,
    StorageUnavailableError,
)

User = get_user_model()

logger = logging.getLogger(__name__)


def build_image_key(user: User, filename: str) -> str:
    """Storage key: <bucket>/<user id>/<random hex><original extension>."""
    _, ext = os.path.splitext(filename or '')
    return f"{settings.COUPON_IMAGE_BUCKET}/{user.id}/{uuid.uuid4().hex}{ext.lower()}"


def upload_coupon_image(*, user: User, image) -> str:
    """
    Store an uploaded coupon image and return its public URL.

    Size and type are checked before anything is written.

    Args:
        user: Uploading user; the key is namespaced by their id
        image: Django UploadedFile

    Returns:
        Public URL of the stored file

    Raises:
        ImageTooLargeError: If the file is larger than COUPON_IMAGE_MAX_BYTES
        InvalidImageError: If the content type is not image/*
        StorageUnavailableError: If the storage backend fails
    """
    max_bytes = settings.COUPON_IMAGE_MAX_BYTES

    if image.size > max_bytes:
        raise ImageTooLargeError(
            f"Image is too large. Maximum size is {max_bytes // (1024 * 1024)} MB."
        )

    content_type = getattr(image, 'content_type', '') or ''
    if not content_type.startswith('image/'):
        raise InvalidImageError("Only image files can be uploaded.")

    key = build_image_key(user, image.name)

    try:
        saved_key = default_storage.save(key, image)
        url = default_storage.url(saved_key)
    except OSError as e:
        logger.error("Image upload failed for user %s: %s", user.id, e)
        raise StorageUnavailableError("Image storage is unavailable. Try again later.")

    logger.info("User %s uploaded coupon image %s", user.id, saved_key)
    return url
