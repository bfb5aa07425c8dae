"""
Media domain — enums and upload limits.
"""
from __future__ import annotations

import enum


class MediaType(str, enum.Enum):
    IMAGE = "image"
    VIDEO = "video"


VIDEO_EXTENSIONS: frozenset[str] = frozenset({"mp4", "mov", "avi", "webm", "mkv"})

ALLOWED_CONTENT_TYPE_PREFIXES: tuple[str, ...] = ("image/", "video/")


def media_type_for(filename: str) -> MediaType:
    """Pick the media folder from the file extension; anything not a known video is an image."""
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
    return MediaType.VIDEO if ext in VIDEO_EXTENSIONS else MediaType.IMAGE
