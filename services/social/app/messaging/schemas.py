"""
Messaging domain — Pydantic V2 request/response schemas.
"""
from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.social_graph.schemas import SocialUserRef


class SendMessageRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    receiver_id: uuid.UUID
    content: str = Field(min_length=1, max_length=5000)


class MessageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    message_id: uuid.UUID
    sender_id: uuid.UUID
    receiver_id: uuid.UUID
    content: str
    created_at: datetime


class ConversationItem(BaseModel):
    user: SocialUserRef
    last_message: MessageResponse


class ConversationListResponse(BaseModel):
    items: list[ConversationItem]
