"""
Social graph domain — request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.social_graph import service as svc
from app.social_graph.constants import FriendRequestAction
from app.social_graph.schemas import (
    FollowResponse,
    FollowStatusResponse,
    FriendListResponse,
    FriendRequestItem,
    FriendRequestListResponse,
    FriendRequestResponse,
    SocialUserRef,
)


async def follow_user(
    session: AsyncSession,
    follower_id: uuid.UUID,
    target_id: uuid.UUID,
) -> FollowResponse:
    await svc.follow(session, follower_id, target_id)
    return FollowResponse(message="Followed successfully.", following=True)


async def unfollow_user(
    session: AsyncSession,
    follower_id: uuid.UUID,
    target_id: uuid.UUID,
) -> None:
    await svc.unfollow(session, follower_id, target_id)


async def follow_status(
    session: AsyncSession,
    caller_id: uuid.UUID,
    target_id: uuid.UUID,
) -> FollowStatusResponse:
    return FollowStatusResponse(
        is_following=await svc.follow_status(session, caller_id, target_id)
    )


async def send_friend_request(
    session: AsyncSession,
    sender_id: uuid.UUID,
    to_username: str,
) -> FriendRequestResponse:
    request, _ = await svc.send_friend_request(session, sender_id, to_username)
    return FriendRequestResponse.model_validate(request)


async def respond_friend_request(
    session: AsyncSession,
    receiver_id: uuid.UUID,
    request_id: uuid.UUID,
    action: FriendRequestAction,
) -> FriendRequestResponse:
    request = await svc.respond_friend_request(session, receiver_id, request_id, action)
    return FriendRequestResponse.model_validate(request)


async def list_friend_requests(
    session: AsyncSession,
    user_id: uuid.UUID,
) -> FriendRequestListResponse:
    received, sent = await svc.list_friend_requests(session, user_id)
    return FriendRequestListResponse(
        received=[
            FriendRequestItem(
                request_id=req.request_id,
                user=SocialUserRef.model_validate(user),
                created_at=req.created_at,
            )
            for req, user in received
        ],
        sent=[
            FriendRequestItem(
                request_id=req.request_id,
                user=SocialUserRef.model_validate(user),
                created_at=req.created_at,
            )
            for req, user in sent
        ],
    )


async def list_friends(session: AsyncSession, user_id: uuid.UUID) -> FriendListResponse:
    friends = await svc.list_friends(session, user_id)
    return FriendListResponse(
        items=[SocialUserRef.model_validate(u) for u in friends],
        total=len(friends),
    )
