"""
AWS S3 utilities — async presigned PUT URLs for profile and post media.

The client uploads the file straight to S3 (15-min expiry, bypasses the
backend) and then stores the returned public URL on a post or in its gallery.
"""
from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

import aioboto3
from botocore.exceptions import BotoCoreError, ClientError

from app.config import Settings
from app.media.constants import MediaType
from app.media.exceptions import StoragePresignError

logger = logging.getLogger(__name__)


def _safe_filename(filename: str) -> str:
    name = filename.rsplit("/", 1)[-1].rsplit("\\", 1)[-1]
    return "".join(c if c.isalnum() or c in "._-" else "_" for c in name)[:100] or "upload"


def build_object_key(user_id: uuid.UUID, media_type: MediaType, filename: str) -> str:
    """Unique key: <image|video>/<user_id>/<timestamp>_<rand>_<filename>."""
    ts = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S")
    uid = uuid.uuid4().hex[:8]
    return f"{media_type.value}/{user_id}/{ts}_{uid}_{_safe_filename(filename)}"


def public_url(key: str, settings: Settings) -> str:
    return f"{settings.media_base_url}/{key}"


def _s3_session(settings: Settings) -> aioboto3.Session:
    return aioboto3.Session(
        aws_access_key_id=settings.aws_access_key_id,
        aws_secret_access_key=settings.aws_secret_access_key,
        region_name=settings.aws_region,
    )


async def generate_presigned_put_url(
    key: str,
    content_type: str,
    settings: Settings,
) -> str:
    """Return a presigned PUT URL for key.  Raises StoragePresignError."""
    if not settings.aws_access_key_id:
        logger.error("S3 presign requested but AWS credentials are not configured")
        raise StoragePresignError()
    try:
        async with _s3_session(settings).client("s3") as s3:
            url: str = await s3.generate_presigned_url(
                "put_object",
                Params={"Bucket": settings.s3_bucket, "Key": key, "ContentType": content_type},
                ExpiresIn=settings.s3_presigned_expiry_seconds,
            )
    except (BotoCoreError, ClientError) as exc:
        logger.error("S3 presign failed for key %s: %s", key, exc)
        raise StoragePresignError()
    return url
