"""
Media domain — request orchestration for direct-to-S3 uploads.
"""
from __future__ import annotations

import uuid

from app.config import Settings
from app.media import s3
from app.media.constants import ALLOWED_CONTENT_TYPE_PREFIXES, media_type_for
from app.media.exceptions import UnsupportedMediaType
from app.media.schemas import UploadUrlRequest, UploadUrlResponse


async def create_upload_url(
    user_id: uuid.UUID,
    body: UploadUrlRequest,
    settings: Settings,
) -> UploadUrlResponse:
    if not body.content_type.lower().startswith(ALLOWED_CONTENT_TYPE_PREFIXES):
        raise UnsupportedMediaType()
    media_type = media_type_for(body.filename)
    key = s3.build_object_key(user_id, media_type, body.filename)
    upload_url = await s3.generate_presigned_put_url(key, body.content_type, settings)
    return UploadUrlResponse(
        upload_url=upload_url,
        key=key,
        public_url=s3.public_url(key, settings),
        media_type=media_type,
        expires_in=settings.s3_presigned_expiry_seconds,
    )
