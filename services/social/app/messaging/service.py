"""
Messaging domain — pure business logic (zero FastAPI imports).

Permission to send to, or read a conversation with, a subject:
  1. the subject is public, or the viewer is the subject
  2. an accepted friend request exists between the pair (either direction)
  3. any message was already exchanged between the pair (either direction)
Otherwise the action is refused.  Step 3 keeps conversations open after a
profile turns private.
"""
from __future__ import annotations

import logging
import uuid

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.exceptions import UserNotFound
from app.auth.models import User
from app.auth.service import get_user_by_id
from app.messaging.exceptions import EmptyMessage, MessagingNotAllowed
from app.messaging.models import Message
from app.social_graph.service import are_friends

logger = logging.getLogger(__name__)


def _between(a: uuid.UUID, b: uuid.UUID):
    return sa.or_(
        sa.and_(Message.sender_id == a, Message.receiver_id == b),
        sa.and_(Message.sender_id == b, Message.receiver_id == a),
    )


async def has_message_history(session: AsyncSession, a: uuid.UUID, b: uuid.UUID) -> bool:
    result = await session.execute(sa.select(sa.exists().where(_between(a, b))))
    return result.scalar_one()


async def can_message(session: AsyncSession, viewer_id: uuid.UUID, subject: User) -> bool:
    if not subject.is_private or viewer_id == subject.id:
        return True
    if await are_friends(session, viewer_id, subject.id):
        return True
    return await has_message_history(session, viewer_id, subject.id)


async def assert_can_message(session: AsyncSession, viewer_id: uuid.UUID, subject: User) -> None:
    if not await can_message(session, viewer_id, subject):
        raise MessagingNotAllowed()


async def _get_subject(session: AsyncSession, user_id: uuid.UUID) -> User:
    subject = await get_user_by_id(session, user_id)
    if subject is None:
        raise UserNotFound()
    return subject


async def send_message(
    session: AsyncSession,
    sender_id: uuid.UUID,
    receiver_id: uuid.UUID,
    content: str,
) -> Message:
    content = content.strip()
    if not content:
        raise EmptyMessage()
    receiver = await _get_subject(session, receiver_id)
    await assert_can_message(session, sender_id, receiver)

    message = Message(sender_id=sender_id, receiver_id=receiver_id, content=content)
    session.add(message)
    await session.flush()
    logger.debug("Message %s sent %s -> %s", message.message_id, sender_id, receiver_id)
    return message


async def get_conversation(
    session: AsyncSession,
    viewer_id: uuid.UUID,
    other_id: uuid.UUID,
) -> list[Message]:
    """All messages between viewer and other, oldest first."""
    other = await _get_subject(session, other_id)
    await assert_can_message(session, viewer_id, other)

    result = await session.execute(
        sa.select(Message)
        .where(_between(viewer_id, other_id))
        .order_by(Message.created_at.asc())
    )
    return list(result.scalars().all())


async def list_conversations(
    session: AsyncSession,
    user_id: uuid.UUID,
) -> list[tuple[User, Message]]:
    """
    One (counterpart, latest message) per conversation partner, most
    recent conversation first.
    """
    result = await session.execute(
        sa.select(Message)
        .where(sa.or_(Message.sender_id == user_id, Message.receiver_id == user_id))
        .order_by(Message.created_at.desc())
    )
    latest: dict[uuid.UUID, Message] = {}
    for msg in result.scalars().all():
        counterpart = msg.receiver_id if msg.sender_id == user_id else msg.sender_id
        latest.setdefault(counterpart, msg)
    if not latest:
        return []

    users_r = await session.execute(sa.select(User).where(User.id.in_(list(latest))))
    users = {u.id: u for u in users_r.scalars().all()}
    return [(users[cid], msg) for cid, msg in latest.items() if cid in users]
