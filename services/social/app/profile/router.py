"""
Profile domain — router.

Routes:
  GET    /api/v1/users/me                   Own profile, media gallery and counts
  PATCH  /api/v1/users/me                   Update own profile (partial)
  GET    /api/v1/users/search?q=            Find users by username
  POST   /api/v1/users/me/media             Add an image / video to own gallery
  GET    /api/v1/users/profile/{username}   Someone's profile (redacted if private)

All routes require a valid Bearer token.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.auth.dependencies import get_current_user
from app.database import get_db
from app.media.schemas import MediaCreate, MediaResponse
from app.profile import controller as ctrl
from app.profile.schemas import (
    MeResponse,
    PublicProfileResponse,
    RedactedProfileResponse,
    UpdateProfileRequest,
    UserSearchItem,
)
from shared.models.user import CurrentUser

router = APIRouter(prefix="/users", tags=["profile"])


@router.get("/me", response_model=MeResponse, summary="Get own profile")
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MeResponse:
    return await ctrl.get_me(session, current_user.id)


@router.patch(
    "/me",
    response_model=MeResponse,
    summary="Update own profile (partial — only provided fields are written)",
)
async def update_me(
    body: UpdateProfileRequest,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MeResponse:
    return await ctrl.update_me(session, current_user.id, body)


@router.get(
    "/search",
    response_model=list[UserSearchItem],
    summary="Search users by username (case-insensitive, min 2 characters)",
)
async def search_users(
    q: str = Query(..., max_length=50),
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> list[UserSearchItem]:
    return await ctrl.search(session, q)


@router.post(
    "/me/media",
    response_model=MediaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add an uploaded image or video to the profile gallery",
)
async def add_media(
    body: MediaCreate,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> MediaResponse:
    return await ctrl.add_media(session, current_user.id, body)


@router.get(
    "/profile/{username}",
    response_model=PublicProfileResponse | RedactedProfileResponse,
    summary="Get a user's profile by username",
    description="Private profiles are redacted unless the caller is a friend or the owner.",
)
async def get_profile(
    username: str,
    current_user: CurrentUser = Depends(get_current_user),
    session: AsyncSession = Depends(get_db),
) -> PublicProfileResponse | RedactedProfileResponse:
    return await ctrl.get_profile(session, current_user.id, username)
