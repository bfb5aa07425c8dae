"""
Posts domain — pure business logic (zero FastAPI imports).
"""
from __future__ import annotations

import uuid

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.posts.exceptions import AlreadyLiked, EmptyContent, PostNotFound
from app.posts.models import Comment, Like, Post
from shared.models.pagination import page_offset

PostRow = tuple[Post, User, int, int]  # (post, author, comment_count, like_count)


def _comment_count():
    return (
        sa.select(sa.func.count(Comment.comment_id))
        .where(Comment.post_id == Post.post_id)
        .correlate(Post)
        .scalar_subquery()
    )


def _like_count():
    return (
        sa.select(sa.func.count(Like.like_id))
        .where(Like.post_id == Post.post_id)
        .correlate(Post)
        .scalar_subquery()
    )


def _post_rows():
    return (
        sa.select(Post, User, _comment_count(), _like_count())
        .join(User, User.id == Post.author_id)
    )


async def _get_post(session: AsyncSession, post_id: uuid.UUID) -> Post:
    post = await session.get(Post, post_id)
    if post is None:
        raise PostNotFound()
    return post


async def _has_liked(session: AsyncSession, user_id: uuid.UUID, post_id: uuid.UUID) -> bool:
    result = await session.execute(
        sa.select(sa.exists().where(Like.post_id == post_id, Like.user_id == user_id))
    )
    return result.scalar_one()


async def count_likes(session: AsyncSession, post_id: uuid.UUID) -> int:
    result = await session.execute(
        sa.select(sa.func.count()).select_from(Like).where(Like.post_id == post_id)
    )
    return result.scalar_one()


# ── Posts ──────────────────────────────────────────────────────────────────────

async def list_posts(
    session: AsyncSession,
    *,
    page: int,
    page_size: int,
) -> tuple[list[PostRow], int]:
    """Return (rows, total), newest first."""
    total_r = await session.execute(sa.select(sa.func.count()).select_from(Post))
    rows_r = await session.execute(
        _post_rows()
        .order_by(Post.created_at.desc())
        .limit(page_size)
        .offset(page_offset(page, page_size))
    )
    return [tuple(r) for r in rows_r.all()], total_r.scalar_one()


async def create_post(
    session: AsyncSession,
    author_id: uuid.UUID,
    content: str,
    media_url: str | None = None,
) -> PostRow:
    content = content.strip()
    if not content and not media_url:
        raise EmptyContent()
    post = Post(author_id=author_id, content=content, media_url=media_url)
    session.add(post)
    await session.flush()
    row = await session.execute(_post_rows().where(Post.post_id == post.post_id))
    return tuple(row.one())


# ── Comments ───────────────────────────────────────────────────────────────────

async def list_comments(
    session: AsyncSession, post_id: uuid.UUID
) -> list[tuple[Comment, User]]:
    """Oldest first, each with its author."""
    await _get_post(session, post_id)
    result = await session.execute(
        sa.select(Comment, User)
        .join(User, User.id == Comment.author_id)
        .where(Comment.post_id == post_id)
        .order_by(Comment.created_at.asc())
    )
    return [(c, u) for c, u in result.all()]


async def create_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    author_id: uuid.UUID,
    content: str,
) -> tuple[Comment, User]:
    content = content.strip()
    if not content:
        raise EmptyContent()
    await _get_post(session, post_id)
    comment = Comment(post_id=post_id, author_id=author_id, content=content)
    session.add(comment)
    await session.flush()
    author = await session.get(User, author_id)
    return comment, author


# ── Likes ──────────────────────────────────────────────────────────────────────

async def like(session: AsyncSession, user_id: uuid.UUID, post_id: uuid.UUID) -> int:
    """Like a post; returns the post's like count."""
    await _get_post(session, post_id)
    if await _has_liked(session, user_id, post_id):
        raise AlreadyLiked()
    session.add(Like(post_id=post_id, user_id=user_id))
    try:
        await session.flush()
    except IntegrityError:
        # uq_likes_post_user caught a concurrent duplicate
        await session.rollback()
        raise AlreadyLiked()
    return await count_likes(session, post_id)


async def unlike(session: AsyncSession, user_id: uuid.UUID, post_id: uuid.UUID) -> int:
    """Remove the like if present; returns the post's like count."""
    await _get_post(session, post_id)
    await session.execute(
        sa.delete(Like).where(Like.post_id == post_id, Like.user_id == user_id)
    )
    return await count_likes(session, post_id)


async def liked_post_ids(session: AsyncSession, user_id: uuid.UUID) -> list[uuid.UUID]:
    result = await session.execute(
        sa.select(Like.post_id)
        .where(Like.user_id == user_id)
        .order_by(Like.created_at.desc())
    )
    return list(result.scalars().all())
