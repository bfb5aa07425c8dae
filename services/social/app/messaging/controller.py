"""
Messaging domain — request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.messaging import service as svc
from app.messaging.schemas import (
    ConversationItem,
    ConversationListResponse,
    MessageResponse,
    SendMessageRequest,
)
from app.social_graph.schemas import SocialUserRef


async def list_conversations(
    session: AsyncSession, user_id: uuid.UUID
) -> ConversationListResponse:
    rows = await svc.list_conversations(session, user_id)
    return ConversationListResponse(
        items=[
            ConversationItem(
                user=SocialUserRef.model_validate(user),
                last_message=MessageResponse.model_validate(msg),
            )
            for user, msg in rows
        ]
    )


async def send_message(
    session: AsyncSession, sender_id: uuid.UUID, body: SendMessageRequest
) -> MessageResponse:
    message = await svc.send_message(session, sender_id, body.receiver_id, body.content)
    return MessageResponse.model_validate(message)


async def get_conversation(
    session: AsyncSession, viewer_id: uuid.UUID, other_id: uuid.UUID
) -> list[MessageResponse]:
    messages = await svc.get_conversation(session, viewer_id, other_id)
    return [MessageResponse.model_validate(m) for m in messages]
