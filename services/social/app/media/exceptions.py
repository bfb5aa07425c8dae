"""
Media domain exceptions.
"""
from __future__ import annotations

from app.exceptions import ExternalServiceError, ValidationError


class StoragePresignError(ExternalServiceError):
    code = "storage_unavailable"
    message = "Could not prepare the upload. Try again later."


class UnsupportedMediaType(ValidationError):
    code = "unsupported_media_type"
    message = "Only image and video uploads are supported."
