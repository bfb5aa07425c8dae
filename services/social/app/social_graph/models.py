"""
Social graph domain — SQLAlchemy ORM models.

Tables:
  follows          — unidirectional follow edges (follower → following)
  friend_requests  — friendship proposals; accepting one creates both edges
"""
from __future__ import annotations

import uuid
from datetime import datetime, timezone

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.database.postgres import Base
from app.social_graph.constants import FriendRequestStatus


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Follow(Base):
    __tablename__ = "follows"

    follow_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(), primary_key=True, default=uuid.uuid4
    )
    follower_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    following_id: Mapped[uuid.UUID] = mapped_column(
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )

    follower = relationship("User", foreign_keys=[follower_id], lazy="raise")
    following = relationship("User", foreign_keys=[following_id], lazy="raise")

    __table_args__ = (
        sa.UniqueConstraint("follower_id", "following_id", name="uq_follows_pair"),
        sa.CheckConstraint("follower_id != following_id", name="ck_follows_no_self"),
        sa.Index("idx_follows_follower_id", "follower_id"),
        sa.Index("idx_follows_following_id", "following_id"),
    )


class FriendRequest(Base):
    __tablename__ = "friend_requests"

    request_id: Mapped[uuid.UUID] = mapped_column(
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
    status: Mapped[FriendRequestStatus] = mapped_column(
        sa.Enum(
            FriendRequestStatus,
            name="friendrequeststatus",
            native_enum=False,
            length=16,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=FriendRequestStatus.PENDING,
    )
    created_at: Mapped[datetime] = mapped_column(
        sa.DateTime(timezone=True), nullable=False, default=_now
    )
    responded_at: Mapped[datetime | None] = mapped_column(
        sa.DateTime(timezone=True), nullable=True
    )

    sender = relationship("User", foreign_keys=[sender_id], lazy="raise")
    receiver = relationship("User", foreign_keys=[receiver_id], lazy="raise")

    __table_args__ = (
        sa.CheckConstraint("sender_id != receiver_id", name="ck_friend_requests_no_self"),
        # At most one pending request per ordered pair; resolved rows may repeat.
        sa.Index(
            "uq_friend_requests_pending_pair",
            "sender_id",
            "receiver_id",
            unique=True,
            postgresql_where=sa.text("status = 'pending'"),
            sqlite_where=sa.text("status = 'pending'"),
        ),
        sa.Index("idx_friend_requests_receiver_status", "receiver_id", "status"),
        sa.Index("idx_friend_requests_sender_status", "sender_id", "status"),
    )

    def __repr__(self) -> str:
        return (
            f"<FriendRequest {self.request_id} {self.sender_id}->{self.receiver_id} "
            f"{self.status.value}>"
        )
