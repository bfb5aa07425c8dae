"""
Media domain — Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.media.constants import MediaType


class UploadUrlRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    filename: str = Field(min_length=1, max_length=255)
    content_type: str = Field(min_length=3, max_length=100)


class UploadUrlResponse(BaseModel):
    upload_url: str
    key: str
    public_url: str
    media_type: MediaType
    expires_in: int


class MediaCreate(BaseModel):
    """Body for POST /users/me/media."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    url: str = Field(min_length=1, max_length=1024)
    media_type: MediaType


class MediaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    media_id: uuid.UUID
    url: str
    media_type: MediaType
    created_at: datetime
