"""
Profile domain — pure business logic (zero FastAPI imports).
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass

import sqlalchemy as sa
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.auth.exceptions import UserNotFound, UsernameTaken
from app.auth.models import User
from app.auth.service import validate_username
from app.media.constants import MediaType
from app.media.models import UserMedia
from app.profile.exceptions import SearchQueryTooShort, UsernameRequired
from app.social_graph.service import (
    are_friends,
    followers_count,
    following_count,
    has_pending_request,
)

SEARCH_MIN_LENGTH: int = 2
SEARCH_LIMIT: int = 20


@dataclass(frozen=True)
class ProfileView:
    """What a viewer may see of a subject's profile."""

    user: User
    is_full: bool
    is_friend: bool
    has_pending_friend_request: bool
    followers_count: int
    following_count: int


async def _load_with_media(session: AsyncSession, *criteria) -> User | None:
    result = await session.execute(
        sa.select(User).options(selectinload(User.media)).where(*criteria)
    )
    return result.scalar_one_or_none()


async def get_me(session: AsyncSession, user_id: uuid.UUID) -> tuple[User, int, int]:
    """Return (user with media loaded, followers_count, following_count)."""
    user = await _load_with_media(session, User.id == user_id)
    if user is None:
        raise UserNotFound()
    return (
        user,
        await followers_count(session, user_id),
        await following_count(session, user_id),
    )


async def update_me(session: AsyncSession, user_id: uuid.UUID, fields: dict) -> User:
    """Patch the provided fields onto the user row; username stays unique."""
    user = await session.get(User, user_id)
    if user is None:
        raise UserNotFound()

    if "username" in fields:
        if not fields["username"]:
            raise UsernameRequired()
        username = validate_username(fields["username"])
        if username != user.username:
            taken = await session.execute(
                sa.select(sa.exists().where(User.username == username, User.id != user_id))
            )
            if taken.scalar_one():
                raise UsernameTaken()
        fields = {**fields, "username": username}

    for key, value in fields.items():
        setattr(user, key, value)
    await session.flush()
    return user


async def search_users(session: AsyncSession, query: str) -> list[User]:
    """Case-insensitive substring match on username."""
    query = query.strip()
    if len(query) < SEARCH_MIN_LENGTH:
        raise SearchQueryTooShort()
    # Escape LIKE wildcards so '_' in a query matches literally
    escaped = query.lower().replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    result = await session.execute(
        sa.select(User)
        .where(User.username.ilike(f"%{escaped}%", escape="\\"))
        .order_by(User.username.asc())
        .limit(SEARCH_LIMIT)
    )
    return list(result.scalars().all())


async def get_profile_by_username(
    session: AsyncSession,
    viewer_id: uuid.UUID,
    username: str,
) -> ProfileView:
    """
    Full profile when the subject is public, a friend of the viewer, or the
    viewer themself; otherwise the caller must render a redacted shell.
    """
    subject = await _load_with_media(session, User.username == username.strip().lower())
    if subject is None:
        raise UserNotFound()

    is_owner = subject.id == viewer_id
    is_friend = await are_friends(session, viewer_id, subject.id)
    return ProfileView(
        user=subject,
        is_full=not subject.is_private or is_friend or is_owner,
        is_friend=is_friend,
        has_pending_friend_request=await has_pending_request(session, viewer_id, subject.id),
        followers_count=await followers_count(session, subject.id),
        following_count=await following_count(session, subject.id),
    )


async def add_media(
    session: AsyncSession,
    user_id: uuid.UUID,
    url: str,
    media_type: MediaType,
) -> UserMedia:
    media = UserMedia(user_id=user_id, url=url, media_type=media_type)
    session.add(media)
    await session.flush()
    return media
