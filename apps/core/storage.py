"""Storage helpers for uploaded booking images.

Files go through Django's default storage and are referenced in the
database by their public path (``/uploads/<name>``). The storage is not
transactional: deletions are best-effort and only ever logged.
"""

from __future__ import annotations

import logging
import os
import uuid

from django.conf import settings  # type: ignore
from django.core.files.storage import default_storage  # type: ignore
from django.core.files.uploadedfile import UploadedFile  # type: ignore
from django.db import transaction  # type: ignore

logger = logging.getLogger(__name__)


def _reference_prefix() -> str:
    return settings.MEDIA_URL


def is_stored_reference(reference: str | None) -> bool:
    """True when ``reference`` points into our own upload area."""

    return bool(reference) and str(reference).startswith(_reference_prefix())


def save_uploaded_image(upload: UploadedFile) -> str:
    """Persist an uploaded image and return its reference path."""

    _, ext = os.path.splitext(upload.name or "")
    name = f"{uuid.uuid4().hex}{ext.lower()}"
    stored_name = default_storage.save(name, upload)
    reference = f"{_reference_prefix()}{stored_name}"
    logger.info("Stored uploaded image %s", reference)
    return reference


def delete_stored_image(reference: str | None) -> None:
    """Remove a previously stored image; failures are logged, never raised."""

    if not is_stored_reference(reference):
        return
    name = str(reference)[len(_reference_prefix()):]
    try:
        default_storage.delete(name)
    except OSError as exc:
        logger.warning("Failed to delete file %s: %s", reference, exc)
    else:
        logger.info("Deleted stored image %s", reference)


def delete_stored_image_on_commit(reference: str | None) -> None:
    """Schedule removal once the surrounding transaction commits."""

    if is_stored_reference(reference):
        transaction.on_commit(lambda: delete_stored_image(reference))

