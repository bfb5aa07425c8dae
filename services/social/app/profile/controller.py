"""
Profile domain — request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.media.schemas import MediaCreate, MediaResponse
from app.profile import service as svc
from app.profile.schemas import (
    MeResponse,
    PublicProfileResponse,
    RedactedProfileResponse,
    UpdateProfileRequest,
    UserSearchItem,
)

# Columns that cannot hold NULL; an explicit null in the PATCH body is ignored
_NON_NULLABLE = ("is_private",)


def _me_response(user: User, followers: int, following: int) -> MeResponse:
    return MeResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        bio=user.bio,
        avatar_url=user.avatar_url,
        is_private=user.is_private,
        is_verified=user.is_verified,
        created_at=user.created_at,
        media=[MediaResponse.model_validate(m) for m in user.media],
        followers_count=followers,
        following_count=following,
    )


async def get_me(session: AsyncSession, user_id: uuid.UUID) -> MeResponse:
    user, followers, following = await svc.get_me(session, user_id)
    return _me_response(user, followers, following)


async def update_me(
    session: AsyncSession,
    user_id: uuid.UUID,
    body: UpdateProfileRequest,
) -> MeResponse:
    fields = body.model_dump(exclude_unset=True)
    for key in _NON_NULLABLE:
        if fields.get(key, True) is None:
            fields.pop(key)
    await svc.update_me(session, user_id, fields)
    return await get_me(session, user_id)


async def search(session: AsyncSession, query: str) -> list[UserSearchItem]:
    users = await svc.search_users(session, query)
    return [UserSearchItem.model_validate(u) for u in users]


async def get_profile(
    session: AsyncSession,
    viewer_id: uuid.UUID,
    username: str,
) -> PublicProfileResponse | RedactedProfileResponse:
    view = await svc.get_profile_by_username(session, viewer_id, username)
    user = view.user
    shared = dict(
        username=user.username,
        avatar_url=user.avatar_url,
        is_private=user.is_private,
        is_friend=view.is_friend,
        has_pending_friend_request=view.has_pending_friend_request,
        followers_count=view.followers_count,
        following_count=view.following_count,
    )
    if not view.is_full:
        return RedactedProfileResponse(**shared)
    return PublicProfileResponse(
        **shared,
        id=user.id,
        bio=user.bio,
        created_at=user.created_at,
        media=[MediaResponse.model_validate(m) for m in user.media],
    )


async def add_media(
    session: AsyncSession,
    user_id: uuid.UUID,
    body: MediaCreate,
) -> MediaResponse:
    media = await svc.add_media(session, user_id, body.url, body.media_type)
    return MediaResponse.model_validate(media)
