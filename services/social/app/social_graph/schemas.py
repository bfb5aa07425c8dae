"""
Social graph domain — Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.social_graph.constants import FriendRequestAction, FriendRequestStatus


class _Base(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


# ── Embedded user reference (used inside list items) ───────────────────────────

class SocialUserRef(BaseModel):
    """Public identity of the other party in a follow / friend list item."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    username: str
    avatar_url: str | None


# ── Follow ─────────────────────────────────────────────────────────────────────

class FollowResponse(BaseModel):
    message: str
    following: bool


class FollowStatusResponse(BaseModel):
    is_following: bool


# ── Friend requests ────────────────────────────────────────────────────────────

class FriendRequestCreate(_Base):
    """Body for POST /friends/requests."""

    to_username: str = Field(min_length=1, max_length=50)


class FriendRequestRespond(_Base):
    """Body for POST /friends/requests/{request_id}/respond."""

    action: FriendRequestAction


class FriendRequestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    request_id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    status: FriendRequestStatus
    created_at: datetime
    responded_at: datetime | None = None


class FriendRequestItem(BaseModel):
    request_id: uuid.UUID
    user: SocialUserRef     # sender for received items, receiver for sent items
    created_at: datetime


class FriendRequestListResponse(BaseModel):
    received: list[FriendRequestItem]
    sent: list[FriendRequestItem]


class FriendListResponse(BaseModel):
    items: list[SocialUserRef]
    total: int
