"""
Social graph domain — user-facing routes.

Follow routes are prefixed /api/v1/users (shared with the profile router;
the sub-paths don't overlap).  Friend routes live under /api/v1/friends.

Routes:
  POST   /users/{user_id}/follow                 Follow a public user (50/hour)
  DELETE /users/{user_id}/follow                 Unfollow
  GET    /users/{user_id}/follow/status          Does the caller follow user_id?
  POST   /friends/requests                       Send a friend request (30/hour)
  GET    /friends/requests                       Pending requests, received + sent
  POST   /friends/requests/{request_id}/respond  Accept or decline
  GET    /friends                                Accepted friends
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.database import get_db
from app.rate_limit import limiter
from app.social_graph import controller as ctrl
from app.social_graph.schemas import (
    FollowResponse,
    FollowStatusResponse,
    FriendListResponse,
    FriendRequestCreate,
    FriendRequestListResponse,
    FriendRequestRespond,
    FriendRequestResponse,
)
from shared.models.user import CurrentUser

router = APIRouter(prefix="/users", tags=["social-graph"])
friends_router = APIRouter(prefix="/friends", tags=["friends"])


# ── Follow ─────────────────────────────────────────────────────────────────────

@router.post(
    "/{user_id}/follow",
    response_model=FollowResponse,
    status_code=status.HTTP_200_OK,
    summary="Follow a user",
    description="Only public profiles can be followed directly. Rate-limited to 50 per hour.",
)
@limiter.limit("50/hour")
async def follow_user(
    request: Request,
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FollowResponse:
    return await ctrl.follow_user(session, current_user.id, user_id)


@router.delete(
    "/{user_id}/follow",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Unfollow a user",
)
async def unfollow_user(
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> None:
    await ctrl.unfollow_user(session, current_user.id, user_id)


@router.get(
    "/{user_id}/follow/status",
    response_model=FollowStatusResponse,
    summary="Check whether the caller follows a user",
)
async def follow_status(
    user_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FollowStatusResponse:
    return await ctrl.follow_status(session, current_user.id, user_id)


# ── Friend requests ────────────────────────────────────────────────────────────

@friends_router.post(
    "/requests",
    response_model=FriendRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a friend request by username",
)
@limiter.limit("30/hour")
async def send_friend_request(
    request: Request,
    body: FriendRequestCreate,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FriendRequestResponse:
    return await ctrl.send_friend_request(session, current_user.id, body.to_username)


@friends_router.get(
    "/requests",
    response_model=FriendRequestListResponse,
    summary="List pending friend requests (received and sent)",
)
async def list_friend_requests(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FriendRequestListResponse:
    return await ctrl.list_friend_requests(session, current_user.id)


@friends_router.post(
    "/requests/{request_id}/respond",
    response_model=FriendRequestResponse,
    summary="Accept or decline a friend request",
)
async def respond_friend_request(
    request_id: uuid.UUID,
    body: FriendRequestRespond,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FriendRequestResponse:
    return await ctrl.respond_friend_request(session, current_user.id, request_id, body.action)


@friends_router.get(
    "",
    response_model=FriendListResponse,
    summary="List accepted friends",
)
async def list_friends(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> FriendListResponse:
    return await ctrl.list_friends(session, current_user.id)
