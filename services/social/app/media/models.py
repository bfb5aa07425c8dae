"""
Media domain — SQLAlchemy ORM models.

Tables:
  user_media  — images and videos shown on a user's profile gallery
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database.postgres import Base
from app.media.constants import MediaType


def _now() -> datetime:
    return datetime.now(timezone.utc)


class UserMedia(Base):
    __tablename__ = "user_media"

    media_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    url: Mapped[str] = mapped_column(sa.String(1024), nullable=False)
    media_type: Mapped[MediaType] = mapped_column(
        sa.Enum(
            MediaType,
            name="mediatype",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )

    user = relationship("User", back_populates="media", lazy="raise")
