"""
Messaging domain — routes under /api/v1/messages.

Routes:
  GET  /conversations   Latest message per conversation partner
  POST /                Send a direct message (privacy-gated, 60/minute)
  GET  /{user_id}       Full conversation with user_id (privacy-gated)

/conversations is registered before /{user_id} so the literal path wins.
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.database import get_db
from app.messaging import controller as ctrl
from app.messaging.schemas import (
    ConversationListResponse,
    MessageResponse,
    SendMessageRequest,
)
from app.rate_limit import limiter
from shared.models.user import CurrentUser

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get(
    "/conversations",
    response_model=ConversationListResponse,
    summary="List conversations, most recent first",
)
async def list_conversations(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> ConversationListResponse:
    return await ctrl.list_conversations(session, current_user.id)


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a direct message",
)
@limiter.limit("60/minute")
async def send_message(
    request: Request,
    body: SendMessageRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MessageResponse:
    return await ctrl.send_message(session, current_user.id, body)


@router.get(
    "/{user_id}",
    response_model=list[MessageResponse],
    summary="Get the conversation with a user, oldest first",
)
async def get_conversation(
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[MessageResponse]:
    return await ctrl.get_conversation(session, current_user.id, user_id)
