"""
Social graph domain — pure business logic (zero FastAPI imports).

State rules:
  follow:          cannot follow self, target must exist and be public,
                   one edge per ordered pair
  friend request:  cannot target self, one pending request per ordered pair,
                   rejected while the reverse request is pending
  respond:         only the receiver, only while pending, exactly once;
                   accepting creates both follow edges (existing ones kept)
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.exceptions import UserNotFound
from app.auth.models import User
from app.auth.service import get_user_by_id, get_user_by_username
from app.social_graph.constants import (
    ACTION_TO_STATUS,
    FriendRequestAction,
    FriendRequestStatus,
)
from app.social_graph.exceptions import (
    AlreadyFollowing,
    CannotFollowSelf,
    CannotFriendSelf,
    FriendRequestAlreadyReceived,
    FriendRequestAlreadySent,
    FriendRequestNotFound,
    FriendRequestNotPending,
    InvalidFriendRequestAction,
    NotFollowing,
    PrivateProfileFollow,
)
from app.social_graph.models import Follow, FriendRequest
from shared.database import insert_ignoring_conflicts

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _between(a: uuid.UUID, b: uuid.UUID):
    """Either direction of the (a, b) pair on friend_requests."""
    return sa.or_(
        sa.and_(FriendRequest.sender_id == a, FriendRequest.receiver_id == b),
        sa.and_(FriendRequest.sender_id == b, FriendRequest.receiver_id == a),
    )


# ── Internal helpers ───────────────────────────────────────────────────────────

async def _follow_exists(
    session: AsyncSession, follower_id: uuid.UUID, following_id: uuid.UUID
) -> bool:
    result = await session.execute(
        sa.select(sa.exists().where(
            Follow.follower_id == follower_id,
            Follow.following_id == following_id,
        ))
    )
    return result.scalar_one()


# ── Follow ─────────────────────────────────────────────────────────────────────

async def follow(
    session: AsyncSession,
    follower_id: uuid.UUID,
    target_id: uuid.UUID,
) -> Follow:
    if follower_id == target_id:
        raise CannotFollowSelf()
    target = await get_user_by_id(session, target_id)
    if target is None:
        raise UserNotFound()
    if target.is_private:
        raise PrivateProfileFollow()
    if await _follow_exists(session, follower_id, target_id):
        raise AlreadyFollowing()

    edge = Follow(follower_id=follower_id, following_id=target_id)
    session.add(edge)
    try:
        await session.flush()
    except IntegrityError:
        # Concurrent identical follow won the race on uq_follows_pair
        await session.rollback()
        raise AlreadyFollowing()
    return edge


async def unfollow(
    session: AsyncSession,
    follower_id: uuid.UUID,
    target_id: uuid.UUID,
) -> None:
    result = await session.execute(
        sa.delete(Follow).where(
            Follow.follower_id == follower_id,
            Follow.following_id == target_id,
        )
    )
    if result.rowcount == 0:
        raise NotFollowing()


async def follow_status(
    session: AsyncSession, caller_id: uuid.UUID, target_id: uuid.UUID
) -> bool:
    return await _follow_exists(session, caller_id, target_id)


async def followers_count(session: AsyncSession, user_id: uuid.UUID) -> int:
    result = await session.execute(
        sa.select(sa.func.count()).select_from(Follow).where(Follow.following_id == user_id)
    )
    return result.scalar_one()


async def following_count(session: AsyncSession, user_id: uuid.UUID) -> int:
    result = await session.execute(
        sa.select(sa.func.count()).select_from(Follow).where(Follow.follower_id == user_id)
    )
    return result.scalar_one()


# ── Friendship predicates ──────────────────────────────────────────────────────

async def are_friends(session: AsyncSession, a: uuid.UUID, b: uuid.UUID) -> bool:
    """True when an accepted request exists between a and b in either direction."""
    result = await session.execute(
        sa.select(sa.exists().where(
            _between(a, b),
            FriendRequest.status == FriendRequestStatus.ACCEPTED,
        ))
    )
    return result.scalar_one()


async def has_pending_request(
    session: AsyncSession, sender_id: uuid.UUID, receiver_id: uuid.UUID
) -> bool:
    result = await session.execute(
        sa.select(sa.exists().where(
            FriendRequest.sender_id == sender_id,
            FriendRequest.receiver_id == receiver_id,
            FriendRequest.status == FriendRequestStatus.PENDING,
        ))
    )
    return result.scalar_one()


# ── Friend requests ────────────────────────────────────────────────────────────

async def send_friend_request(
    session: AsyncSession,
    sender_id: uuid.UUID,
    to_username: str,
) -> tuple[FriendRequest, User]:
    """Create a pending request; returns (request, receiver)."""
    receiver = await get_user_by_username(session, to_username)
    if receiver is None:
        raise UserNotFound()
    if receiver.id == sender_id:
        raise CannotFriendSelf()
    if await has_pending_request(session, sender_id, receiver.id):
        raise FriendRequestAlreadySent()
    if await has_pending_request(session, receiver.id, sender_id):
        raise FriendRequestAlreadyReceived()

    request = FriendRequest(sender_id=sender_id, receiver_id=receiver.id)
    session.add(request)
    try:
        await session.flush()
    except IntegrityError:
        # uq_friend_requests_pending_pair caught a concurrent duplicate
        await session.rollback()
        raise FriendRequestAlreadySent()
    logger.info("Friend request %s: %s -> %s pending", request.request_id, sender_id, receiver.id)
    return request, receiver


async def respond_friend_request(
    session: AsyncSession,
    receiver_id: uuid.UUID,
    request_id: uuid.UUID,
    action: FriendRequestAction | str,
) -> FriendRequest:
    """
    Move a pending request to accepted or declined.

    The transition is a conditional UPDATE on status = 'pending', so of two
    concurrent responses exactly one sees rowcount 1.  On accept, both follow
    edges are inserted in the same transaction; edges that already exist from
    a plain follow are kept as they are.
    """
    try:
        action = FriendRequestAction(action)
    except ValueError:
        raise InvalidFriendRequestAction()

    request = await session.get(FriendRequest, request_id)
    if request is None or request.receiver_id != receiver_id:
        raise FriendRequestNotFound()
    if request.status != FriendRequestStatus.PENDING:
        raise FriendRequestNotPending()

    new_status = ACTION_TO_STATUS[action]
    result = await session.execute(
        sa.update(FriendRequest)
        .where(
            FriendRequest.request_id == request_id,
            FriendRequest.status == FriendRequestStatus.PENDING,
        )
        .values(status=new_status, responded_at=_now())
    )
    if result.rowcount != 1:
        raise FriendRequestNotPending()

    if new_status == FriendRequestStatus.ACCEPTED:
        now = _now()
        await insert_ignoring_conflicts(
            session,
            Follow,
            [
                {
                    "follow_id": uuid.uuid4(),
                    "follower_id": request.sender_id,
                    "following_id": request.receiver_id,
                    "created_at": now,
                },
                {
                    "follow_id": uuid.uuid4(),
                    "follower_id": request.receiver_id,
                    "following_id": request.sender_id,
                    "created_at": now,
                },
            ],
            conflict_columns=("follower_id", "following_id"),
        )

    await session.refresh(request)
    logger.info("Friend request %s %s by %s", request_id, new_status.value, receiver_id)
    return request


async def list_friend_requests(
    session: AsyncSession,
    user_id: uuid.UUID,
) -> tuple[list[tuple[FriendRequest, User]], list[tuple[FriendRequest, User]]]:
    """
    Return (received, sent): pending requests, each paired with the
    counterpart user, newest first.
    """
    received_r = await session.execute(
        sa.select(FriendRequest, User)
        .join(User, User.id == FriendRequest.sender_id)
        .where(
            FriendRequest.receiver_id == user_id,
            FriendRequest.status == FriendRequestStatus.PENDING,
        )
        .order_by(FriendRequest.created_at.desc())
    )
    sent_r = await session.execute(
        sa.select(FriendRequest, User)
        .join(User, User.id == FriendRequest.receiver_id)
        .where(
            FriendRequest.sender_id == user_id,
            FriendRequest.status == FriendRequestStatus.PENDING,
        )
        .order_by(FriendRequest.created_at.desc())
    )
    received = [(req, user) for req, user in received_r.all()]
    sent = [(req, user) for req, user in sent_r.all()]
    return received, sent


async def list_friends(session: AsyncSession, user_id: uuid.UUID) -> list[User]:
    """
    Counterparts of every accepted request involving user_id, each once.

    Keyed by counterpart id, so a pair that somehow holds several accepted
    rows (one per direction) still yields a single friend.
    """
    rows_r = await session.execute(
        sa.select(FriendRequest.sender_id, FriendRequest.receiver_id)
        .where(
            sa.or_(
                FriendRequest.sender_id == user_id,
                FriendRequest.receiver_id == user_id,
            ),
            FriendRequest.status == FriendRequestStatus.ACCEPTED,
        )
        .order_by(FriendRequest.responded_at.desc())
    )
    friend_ids: dict[uuid.UUID, None] = {}
    for sender_id, receiver_id in rows_r.all():
        counterpart = receiver_id if sender_id == user_id else sender_id
        friend_ids.setdefault(counterpart, None)
    if not friend_ids:
        return []

    users_r = await session.execute(sa.select(User).where(User.id.in_(list(friend_ids))))
    users = {u.id: u for u in users_r.scalars().all()}
    return [users[fid] for fid in friend_ids if fid in users]
