"""
Posts domain — routes under /api/v1/posts.

Routes:
  GET    /                       Public feed, newest first (paginated)
  POST   /                       Create a post
  GET    /liked                  IDs of posts the caller liked
  GET    /{post_id}/comments     Comments, oldest first (public)
  POST   /{post_id}/comments     Comment on a post
  POST   /{post_id}/like         Like (409 if already liked)
  DELETE /{post_id}/like         Remove like (no-op if absent)
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.database import get_db
from app.posts import controller as ctrl
from app.posts.schemas import (
    CommentResponse,
    CreateCommentRequest,
    CreatePostRequest,
    LikeCountResponse,
    LikedPostsResponse,
    PostResponse,
)
from app.rate_limit import limiter
from shared.models.pagination import PaginatedResponse
from shared.models.user import CurrentUser

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get(
    "",
    response_model=PaginatedResponse[PostResponse],
    summary="List posts, newest first",
)
async def list_posts(
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    session: AsyncSession = Depends(get_db),
) -> PaginatedResponse[PostResponse]:
    return await ctrl.list_posts(session, page=page, page_size=page_size)


@router.post(
    "",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a post",
)
@limiter.limit("30/hour")
async def create_post(
    request: Request,
    body: CreatePostRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> PostResponse:
    return await ctrl.create_post(session, current_user.id, body)


@router.get(
    "/liked",
    response_model=LikedPostsResponse,
    summary="IDs of the posts the caller has liked",
)
async def liked_posts(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> LikedPostsResponse:
    return await ctrl.liked_posts(session, current_user.id)


@router.get(
    "/{post_id}/comments",
    response_model=list[CommentResponse],
    summary="List comments on a post, oldest first",
)
async def list_comments(
    post_id: uuid.UUID,
    session: AsyncSession = Depends(get_db),
) -> list[CommentResponse]:
    return await ctrl.list_comments(session, post_id)


@router.post(
    "/{post_id}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Comment on a post",
)
@limiter.limit("60/hour")
async def create_comment(
    request: Request,
    post_id: uuid.UUID,
    body: CreateCommentRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> CommentResponse:
    return await ctrl.create_comment(session, post_id, current_user.id, body)


@router.post(
    "/{post_id}/like",
    response_model=LikeCountResponse,
    summary="Like a post",
)
async def like_post(
    post_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> LikeCountResponse:
    return await ctrl.like_post(session, current_user.id, post_id)


@router.delete(
    "/{post_id}/like",
    response_model=LikeCountResponse,
    summary="Remove a like",
)
async def unlike_post(
    post_id: uuid.UUID,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> LikeCountResponse:
    return await ctrl.unlike_post(session, current_user.id, post_id)
