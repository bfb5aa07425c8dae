"""
Media domain — routes under /api/v1/media.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from app.auth.dependencies import get_current_user
from app.config import Settings, get_settings
from app.media import controller as ctrl
from app.media.schemas import UploadUrlRequest, UploadUrlResponse
from app.rate_limit import limiter
from shared.models.user import CurrentUser

router = APIRouter(prefix="/media", tags=["media"])


@router.post(
    "/upload-url",
    response_model=UploadUrlResponse,
    summary="Get a presigned S3 PUT URL for an image or video",
    description=(
        "Upload the file with a PUT to upload_url using the same Content-Type, "
        "then store public_url on a post or in the profile gallery."
    ),
)
@limiter.limit("30/hour")
async def create_upload_url(
    request: Request,
    body: UploadUrlRequest,
    current_user: CurrentUser = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
) -> UploadUrlResponse:
    return await ctrl.create_upload_url(current_user.id, body, settings)
