"""
Posts domain — request orchestration.
"""
from __future__ import annotations

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.models import User
from app.posts import service as svc
from app.posts.models import Comment
from app.posts.schemas import (
    AuthorRef,
    CommentResponse,
    CreateCommentRequest,
    CreatePostRequest,
    LikeCountResponse,
    LikedPostsResponse,
    PostResponse,
)
from shared.models.pagination import PaginatedResponse


def _post_response(row: svc.PostRow) -> PostResponse:
    post, author, comment_count, like_count = row
    return PostResponse(
        post_id=post.post_id,
        content=post.content,
        media_url=post.media_url,
        created_at=post.created_at,
        author=AuthorRef.model_validate(author),
        comment_count=comment_count,
        like_count=like_count,
    )


def _comment_response(comment: Comment, author: User) -> CommentResponse:
    return CommentResponse(
        comment_id=comment.comment_id,
        post_id=comment.post_id,
        content=comment.content,
        created_at=comment.created_at,
        author=AuthorRef.model_validate(author),
    )


async def list_posts(
    session: AsyncSession, *, page: int, page_size: int
) -> PaginatedResponse[PostResponse]:
    rows, total = await svc.list_posts(session, page=page, page_size=page_size)
    return PaginatedResponse[PostResponse](
        items=[_post_response(r) for r in rows],
        total=total,
        page=page,
        page_size=page_size,
    )


async def create_post(
    session: AsyncSession, author_id: uuid.UUID, body: CreatePostRequest
) -> PostResponse:
    row = await svc.create_post(session, author_id, body.content, body.media_url)
    return _post_response(row)


async def list_comments(session: AsyncSession, post_id: uuid.UUID) -> list[CommentResponse]:
    rows = await svc.list_comments(session, post_id)
    return [_comment_response(c, u) for c, u in rows]


async def create_comment(
    session: AsyncSession,
    post_id: uuid.UUID,
    author_id: uuid.UUID,
    body: CreateCommentRequest,
) -> CommentResponse:
    comment, author = await svc.create_comment(session, post_id, author_id, body.content)
    return _comment_response(comment, author)


async def like_post(
    session: AsyncSession, user_id: uuid.UUID, post_id: uuid.UUID
) -> LikeCountResponse:
    count = await svc.like(session, user_id, post_id)
    return LikeCountResponse(post_id=post_id, like_count=count)


async def unlike_post(
    session: AsyncSession, user_id: uuid.UUID, post_id: uuid.UUID
) -> LikeCountResponse:
    count = await svc.unlike(session, user_id, post_id)
    return LikeCountResponse(post_id=post_id, like_count=count)


async def liked_posts(session: AsyncSession, user_id: uuid.UUID) -> LikedPostsResponse:
    return LikedPostsResponse(post_ids=await svc.liked_post_ids(session, user_id))
