"""
Messaging domain — SQLAlchemy ORM models.

Tables:
  messages  — append-only direct messages (sender → receiver)
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database.postgres import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Message(Base):
    __tablename__ = "messages"

    message_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    sender_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    receiver_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(sa.Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )

    sender = relationship("User", foreign_keys=[sender_id], lazy="raise")
    receiver = relationship("User", foreign_keys=[receiver_id], lazy="raise")

    __table_args__ = (
        sa.Index("idx_messages_sender_receiver", "sender_id", "receiver_id", "created_at"),
        sa.Index("idx_messages_receiver_sender", "receiver_id", "sender_id", "created_at"),
    )
