"""
Profile domain — Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.media.schemas import MediaResponse


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ── Request ───────────────────────────────────────────────────────────────────

class UpdateProfileRequest(_Base):
    """PATCH /users/me — all fields optional; only provided fields are written."""

    username: str | None = Field(None, min_length=1, max_length=50)
    bio: str | None = Field(None, max_length=500)
    avatar_url: str | None = Field(None, max_length=1024)
    is_private: bool | None = None


# ── Response ──────────────────────────────────────────────────────────────────

class MeResponse(BaseModel):
    """The caller's own profile (includes email)."""

    id: uuid.UUID
    email: str
    username: str
    bio: str | None
    avatar_url: str | None
    is_private: bool
    is_verified: bool
    created_at: datetime
    media: list[MediaResponse] = []
    followers_count: int
    following_count: int


class UserSearchItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    avatar_url: str | None
    bio: str | None


class RedactedProfileResponse(BaseModel):
    """What anyone may see of a private profile they have no access to."""

    username: str
    avatar_url: str | None
    is_private: bool
    is_friend: bool
    has_pending_friend_request: bool
    followers_count: int
    following_count: int


class PublicProfileResponse(RedactedProfileResponse):
    """Full profile; never carries email or password hash."""

    id: uuid.UUID
    bio: str | None
    created_at: datetime
    media: list[MediaResponse] = []
