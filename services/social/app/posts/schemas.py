"""
Posts domain — Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class AuthorRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    avatar_url: str | None


# ── Requests ──────────────────────────────────────────────────────────────────

class CreatePostRequest(_Base):
    content: str = Field("", max_length=5000)
    media_url: str | None = Field(None, max_length=1024)


class CreateCommentRequest(_Base):
    content: str = Field(min_length=1, max_length=2000)


# ── Responses ─────────────────────────────────────────────────────────────────

class PostResponse(BaseModel):
    post_id: uuid.UUID
    content: str
    media_url: str | None
    created_at: datetime
    author: AuthorRef
    comment_count: int
    like_count: int


class CommentResponse(BaseModel):
    comment_id: uuid.UUID
    post_id: uuid.UUID
    content: str
    created_at: datetime
    author: AuthorRef


class LikeCountResponse(BaseModel):
    post_id: uuid.UUID
    like_count: int


class LikedPostsResponse(BaseModel):
    post_ids: list[uuid.UUID]
